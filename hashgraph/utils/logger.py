"""
Logger configuration for hashgraph.
"""

import logging

from ..config import LOGGER_CONFIG


def setup_logger(name='hashgraph', config=None) -> logging.Logger:
    """
    Configure a package logger with a console handler.

    Parameters
    ----------
    name : str, optional
        Logger name (default is the package logger)
    config : dict, optional
        Overrides for LOGGER_CONFIG ('level', 'console', 'format')

    Returns
    -------
    logging.Logger
        Configured logger
    """
    settings = {**LOGGER_CONFIG, **(config or {})}
    level = settings['level']

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if settings['console'] and not any(getattr(h, '_hashgraph_console', False) for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(settings['format']))
        console_handler._hashgraph_console = True
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        if getattr(handler, '_hashgraph_console', False):
            handler.setLevel(level)

    return logger
