"""
Logging configuration using Loguru.

Structured records produced by ``flow_compiler.utils.logging`` are already
JSON, so the sinks here only prefix them with time and level.
"""
import sys
from pathlib import Path
from loguru import logger

from flow_compiler.config import settings


def setup_logging() -> None:
    """
    Configure loguru logger with appropriate handlers and formatting.

    Development mode:
    - Colorized console output
    - Detailed format with file:line info

    Production mode:
    - Plain console output (for container logs)
    - Optional file output with rotation
    """

    # Remove default handler
    logger.remove()

    dev_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    prod_format = (
        "{time:YYYY-MM-DD HH:mm:ss} | "
        "{level: <8} | "
        "{message}"
    )

    logger.add(
        sys.stdout,
        format=dev_format if settings.debug else prod_format,
        level=settings.log_level,
        colorize=settings.debug,
        backtrace=settings.debug,
        diagnose=settings.debug,
    )

    if settings.log_to_file:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "flow-compiler.log",
            format=prod_format,
            level="INFO",
            rotation="100 MB",
            retention="10 days",
            compression="zip",
            enqueue=True,
        )

    logger.info(f"Logging configured - Level: {settings.log_level}")
    logger.debug(f"Debug mode: {settings.debug}")
