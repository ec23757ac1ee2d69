"""DayBoard command-line interface."""
