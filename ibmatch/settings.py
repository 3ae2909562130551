import os
import logging
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Raw values; the logic layer resolves and validates them when used
BONUS_STRATEGY = os.getenv("IBMATCH_BONUS_STRATEGY", "POINTS_TABLE")
DEFAULT_MODE = os.getenv("IBMATCH_DEFAULT_MODE", "BALANCED")
LOG_LEVEL = os.getenv("IBMATCH_LOG_LEVEL", "INFO")

LOG_FORMAT = "%(levelname)s - %(name)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the engine."""
    name = (level or LOG_LEVEL).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        logging.getLogger(__name__).warning(f"Unknown log level '{name}', using INFO")
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
