import logging
import sys
from datetime import datetime


class ProgressLogger:
    """
    Reports progress through a fixed number of steps as log lines.

    Used by the orchestrator to report how far a bulk run has got through
    the pass table.
    """
    def __init__(self, total, desc="Progress", logger=None, level=logging.INFO):
        self.total = total
        self.current = 0
        self.desc = desc
        self.logger = logger or logging.getLogger()
        self.level = level
        self.start_time = datetime.now()
        self.last_log_percent = -1

    def update(self, n=1, item_desc=None):
        """Advance by n steps."""
        self.current += n
        percent = int((self.current / self.total) * 100) if self.total > 0 else 0

        # Log every 10%, on a named step, or at the end
        if percent - self.last_log_percent >= 10 or item_desc or self.current == self.total:
            elapsed = (datetime.now() - self.start_time).total_seconds()

            msg_parts = [f"{self.desc}: {self.current}/{self.total} ({percent}%)"]
            if item_desc:
                msg_parts.append(f"- {item_desc}")
            if self.current == self.total:
                msg_parts.append(f"[{elapsed * 1000:.1f}ms]")

            self.logger.log(self.level, " ".join(msg_parts))
            self.last_log_percent = percent

    def close(self):
        """Mark progress as complete."""
        if self.current < self.total:
            self.current = self.total
            self.update(0)


def setup_logging(log_file=None, level=logging.INFO, debug=False):
    """
    Configure root logging for the command-line tool.

    Args:
        log_file: Optional path to a log file. Console output goes to stderr
            so that analysis output on stdout stays machine-readable.
        level: Logging level (default: INFO).
        debug: If True, forces DEBUG level and adds source locations.
    """
    # Clear existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if debug:
        level = logging.DEBUG
        format_string = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    else:
        format_string = '%(asctime)s - %(levelname)s - %(message)s'

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    if debug:
        logging.debug("Debug logging enabled - per-pass commits will be reported")


def log_with_context(message, context=None, level=logging.DEBUG, logger=None):
    """
    Log a message followed by one DEBUG line per context entry.

    Args:
        message: Main log message
        context: Dict of contextual information
        level: Level for the main message (default: DEBUG)
        logger: Logger to use (default: root logger)
    """
    logger = logger or logging.getLogger()
    logger.log(level, message)

    if context and logger.isEnabledFor(logging.DEBUG):
        for key, value in context.items():
            # Truncate long values
            str_value = str(value)
            if len(str_value) > 200:
                str_value = str_value[:200] + "..."
            logger.debug(f"  └─ {key}: {str_value}")
