"""Log filters for default context fields."""

import logging


class DefaultSessionFilter(logging.Filter):
    """Adds a placeholder session_id so formatters can always reference it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session_id"):
            record.session_id = "-"
        return True
