"""Annotate open daily notes with whether they are today's.

The host application owns the views and the notifications. It calls the
``on_*`` methods of AnnotationService when something changes, passing the
views it currently has open.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Protocol

from bedtime.core.resolver import annotation_text, classify, daily_note_window
from bedtime.models import DailyNoteConfig

logger = logging.getLogger(__name__)


class AnnotationView(Protocol):
    """A note view that can show one line of annotation under its title."""

    @property
    def file_path(self) -> str | None: ...

    def show_annotation(self, text: str) -> None: ...

    def clear_annotation(self) -> None: ...


class AnnotationService:
    """Keeps the "today's daily note" annotation on views up to date."""

    def __init__(
        self,
        config: DailyNoteConfig,
        cutoff_provider: Callable[[], int],
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.cutoff_provider = cutoff_provider
        self.clock = clock

    def annotation_for(self, path: str) -> str | None:
        """Annotation text for a note, or None if it is not a daily note."""
        now = self.clock()
        window = daily_note_window(path, self.config, self.cutoff_provider(), now.tzinfo)
        if window is None:
            return None
        return annotation_text(classify(now, window))

    def update(self, view: AnnotationView) -> None:
        path = view.file_path
        text = self.annotation_for(path) if path else None
        # Replace rather than stack annotations
        view.clear_annotation()
        if text is not None:
            view.show_annotation(text)

    def refresh(self, views: Iterable[AnnotationView], only_path: str | None = None) -> int:
        """Update every view showing a file, or only those showing `only_path`.

        Returns the number of views updated.
        """
        updated = 0
        for view in views:
            path = view.file_path
            if not path:
                continue
            if only_path is not None and path != only_path:
                continue
            self.update(view)
            updated += 1
        logger.debug("Refreshed annotations on %d views", updated)
        return updated

    def on_layout_ready(self, views: Iterable[AnnotationView]) -> None:
        self.refresh(views)

    def on_layout_change(self, views: Iterable[AnnotationView]) -> None:
        # Switching between editing and reading mode rebuilds the title element
        self.refresh(views)

    def on_rename(self, views: Iterable[AnnotationView], new_path: str) -> None:
        self.refresh(views, only_path=new_path)

    def on_active_view_change(self, view: AnnotationView | None) -> None:
        if view is not None and view.file_path:
            self.update(view)

    def detach(self, views: Iterable[AnnotationView]) -> None:
        """Remove every annotation, e.g. when shutting down."""
        for view in views:
            view.clear_annotation()
