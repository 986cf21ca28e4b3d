from loguru import logger
import sys
import os
from pathlib import Path

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging():
    """
    Configure loguru with rotating file sinks under logs/ and a quiet console sink.

    The console level can be raised or lowered with CANSLIM_LOG_LEVEL.
    """
    log_dir = Path(os.getenv("CANSLIM_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=os.getenv("CANSLIM_LOG_LEVEL", "WARNING").upper(),
        colorize=True,
    )

    # Everything, for diagnostics
    logger.add(
        log_dir / "app.log",
        rotation="10 MB",
        retention="1 month",
        compression="zip",
        format=LOG_FORMAT,
        level="DEBUG",
        backtrace=True,
        diagnose=True,
    )

    # Errors only
    logger.add(
        log_dir / "error.log",
        rotation="10 MB",
        retention="1 month",
        compression="zip",
        format=LOG_FORMAT,
        level="ERROR",
        backtrace=True,
        diagnose=True,
    )

    return logger

# Initialize logger
logger = setup_logging()
