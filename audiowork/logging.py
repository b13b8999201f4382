"""
audiowork.logging - The "audiowork" logger.

Every module logs through the single package logger defined here. The CLI
calls configure_logging() once per run to pick the process-wide level.
PipelineService debug lines are additionally gated per instance by
PipelineConfig.debug_log, so a service built without it stays quiet even
when the level is DEBUG.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("audiowork")


def configure_logging(verbose: bool = False) -> None:
    """Set the level of the audiowork logger and install a root handler.

    Args:
        verbose: DEBUG when True (pipeline and encoder debug lines),
            WARNING otherwise (unhandled pipeline errors only)
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logger.setLevel(level)
