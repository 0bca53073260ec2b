import logging
import sys

from .config import LOG_LEVEL

# Log to stderr (unbuffered, better for containers)
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)]
)

# The Gemini SDK and its transport are noisy at DEBUG
logging.getLogger("google").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.INFO)

logger = logging.getLogger("study_buddy")


def get_logger(name: str) -> logging.Logger:
    """Child of the study_buddy logger, e.g. get_logger(__name__)."""
    if name == "study_buddy" or name.startswith("study_buddy."):
        return logging.getLogger(name)
    return logger.getChild(name)
