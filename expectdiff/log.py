"""Logging setup for expectdiff entry points."""

import logging


def init_logging(level=logging.INFO):
    """Sets up logging for expectdiff entry points.

    Call this from scripts and the CLI only; library code just
    asks for ``logging.getLogger(__name__)``.
    """
    format = '[%(levelname)1.1s %(module)s:%(lineno)d] %(message)s'
    logging.basicConfig(format=format, level=level)
    logging.captureWarnings(True)
