from .csv_out import events_csv, write_events_csv
from .html_ui import build_html, write_html_ui

__all__ = ["build_html", "events_csv", "write_events_csv", "write_html_ui"]
