"""
Logger setup for the ring simulation.

Everything logs under 'ringlife'. Intersection messages come from
'ringlife.rings' at INFO, one per flipping ring per tick, so they can be
muted without raising the level for the rest of the app.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "ringlife"
INTERSECTION_LOGGER = LOGGER_NAME + ".rings"


class MuteIntersections(logging.Filter):
    """Drops INFO records from the ring core, keeps its warnings and up."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not (record.name == INTERSECTION_LOGGER and record.levelno == logging.INFO)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    intersections: bool = True,
) -> logging.Logger:
    """
    Attach a stdout handler, and a file handler when log_file is given.

    Calling it again replaces the handlers from the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        if not intersections:
            handler.addFilter(MuteIntersections())
        logger.addHandler(handler)

    logger.debug("Logging to %d handler(s), intersections %s", len(handlers), "on" if intersections else "muted")
    return logger
