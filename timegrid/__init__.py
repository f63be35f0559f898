"""Weekly timetable resolution and week-grid layout for the school portal."""

__version__ = "0.1.0"
