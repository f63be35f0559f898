from .checks import validate_events
from .report import format_validation_report, write_validation_report

__all__ = ["format_validation_report", "validate_events", "write_validation_report"]
