"""DayBoard - personal finance dashboard tools."""

__version__ = "0.3.0"
