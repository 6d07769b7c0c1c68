# apps/repositories/tasks.py
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def remove_repository_directory_task(directory):
    """
    Removes a deleted repository's directory. Safe to run more than once.
    """
    path = Path(directory)
    if not path.exists():
        logger.info(f"Repository directory {path} already removed.")
        return True

    try:
        shutil.rmtree(path)
    except OSError as e:
        logger.error(f"Failed to remove repository directory {path}: {e}", exc_info=True)
        return False

    logger.info(f"Removed repository directory {path}")
    return True
