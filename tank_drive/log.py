"""Console logging setup for applications built on the tank drive core.

The core modules log through the root logger (debug per control cycle, info
on lifecycle events, warning on out-of-range commands); this module only
decides how those records are shown.
"""

import logging

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
VERBOSE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class CustomFormatter(logging.Formatter):
    """Console formatter for drive logs.

    INFO records (configuration, pose resets) are printed as bare messages.
    Every other level keeps a timestamp and level name so per-cycle DEBUG
    output and WARNING records about motor powers can be lined up in time.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.INFO:
            return message
        return f"{self.formatTime(record, self.datefmt)} - {record.levelname} - {message}"


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger for console output.

    Replaces any handlers already on the root logger, so calling this more
    than once does not print each record twice.

    Args:
        verbose: If True, show DEBUG and above, every record timestamped.
                 If False, show INFO and above through CustomFormatter.
    """
    handler = logging.StreamHandler()
    if verbose:
        handler.setFormatter(logging.Formatter(VERBOSE_FORMAT, datefmt=DATE_FORMAT))
        level = logging.DEBUG
    else:
        handler.setFormatter(CustomFormatter(datefmt=DATE_FORMAT))
        level = logging.INFO

    logging.basicConfig(level=level, handlers=[handler], force=True)
