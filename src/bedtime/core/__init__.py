"""Pure day-resolution and time-notation logic."""
