"""Opt-in console logging for applications using spota."""

import logging

__all__ = ["HANDLER_NAME", "configure_logs"]

HANDLER_NAME = "spota-console"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%d/%m/%y %H:%M:%S"


def configure_logs(level: int = logging.INFO, *, library_level: int = logging.DEBUG) -> None:
    """Send log records to the console.

    The library never calls this itself. Calling it again replaces the
    console handler it installed earlier instead of stacking a second one.

    Args:
        level: Root logger level.
        library_level: Level of the "spota" logger.
    """
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)

    # aiohttp logs every connection at DEBUG
    for name in ("aiohttp", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("spota").setLevel(library_level)
