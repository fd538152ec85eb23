"""
Logging setup for CampaignLens.

Author: Yobie Benjamin
Date: 2026-10-18
"""

import sys

from loguru import logger

from campaignlens.config.settings import ObservabilitySettings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Plain layout for files; campaign ids are easier to grep without markup
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | {message}"


def configure_logging(settings: ObservabilitySettings):
    """
    Route loguru output according to observability settings.

    Replaces any existing handlers with a stderr handler and, when a log
    file is configured, a rotating file handler.

    Args:
        settings: Observability settings (level, file, rotation, retention, context)

    Returns:
        Logger bound to the configured context fields
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=settings.log_level,
        colorize=True,
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            format=FILE_FORMAT,
            level=settings.log_level,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="zip",
        )

    if settings.log_context:
        return logger.bind(**settings.log_context)

    return logger
