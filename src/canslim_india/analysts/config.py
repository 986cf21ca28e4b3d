from typing import Callable, Dict, Tuple

from canslim_india.analysts.discovery import discover_near_high_stocks, discover_stocks
from canslim_india.utils.logging_config import logger


def get_discovery_screens() -> Dict[str, Tuple[str, Callable]]:
    """Get available discovery screens with their button labels and functions"""
    logger.debug("Getting available discovery screens")
    screens = {
        "highs": ("Near 52W Highs", discover_near_high_stocks),
        "candidates": ("Find Candidates", discover_stocks),
    }
    logger.debug(f"Found {len(screens)} discovery screens")
    return screens
