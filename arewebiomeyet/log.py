"""Status logging to stderr, styled with click so it matches the rest of the output."""

import logging

import click
import typer

LOGGER_NAME = "arewebiomeyet"

_STYLES = {
    logging.DEBUG: {"dim": True},
    logging.WARNING: {"fg": "yellow"},
    logging.ERROR: {"fg": "red"},
    logging.CRITICAL: {"fg": "red", "bold": True},
}


class ClickHandler(logging.Handler):
    """Echo records to stderr; results own stdout."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            typer.echo(click.style(msg, **_STYLES.get(record.levelno, {})), err=True)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Attach a single ClickHandler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, ClickHandler):
            logger.removeHandler(h)
    handler = ClickHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    if verbose:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger
