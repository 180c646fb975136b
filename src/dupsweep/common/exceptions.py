"""Custom exception hierarchy."""


class DupSweepError(Exception):
    """Base exception for all dupsweep errors."""


class ScanError(DupSweepError):
    """The scan could not be started (missing or unreadable root)."""


class ConfigError(DupSweepError):
    """Configuration error."""


class ReportError(DupSweepError):
    """Error writing a duplicate report."""
