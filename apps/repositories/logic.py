# apps/repositories/logic.py
import logging
import shutil
import time
from pathlib import Path

from django.conf import settings
from django.db import transaction
from django_q.tasks import async_task

from .models import Repository

logger = logging.getLogger(__name__)


def repository_directory(local_path) -> Path:
    """Maps a repository's local path ("/repos/...") onto REPOSITORY_STORAGE_ROOT."""
    return Path(settings.REPOSITORY_STORAGE_ROOT) / local_path.lstrip('/')


def build_local_path(owner_id) -> str:
    """
    Returns "/repos/<owner_id>_<epoch millis>", bumping the millis until the path is unused.
    """
    stamp = int(time.time() * 1000)
    local_path = f"/repos/{owner_id}_{stamp}"
    while Repository.objects.filter(local_path=local_path).exists():
        stamp += 1
        local_path = f"/repos/{owner_id}_{stamp}"
    return local_path


def create_repository(owner, **fields) -> Repository:
    """
    Inserts the repository row and its placeholder directory as one unit.

    Directory creation is best-effort: an OSError is logged and the row is kept.
    If the database write fails, a directory created here is removed again.
    """
    local_path = build_local_path(owner.id)
    directory = repository_directory(local_path)
    created_directory = False

    try:
        with transaction.atomic():
            repository = Repository.objects.create(owner=owner, local_path=local_path, **fields)
            try:
                directory.mkdir(parents=True, exist_ok=True)
                created_directory = True
            except OSError as e:
                logger.warning(f"Could not create directory {directory} for repository {repository.id}: {e}")
    except Exception:
        if created_directory:
            shutil.rmtree(directory, ignore_errors=True)
        raise

    logger.info(f"Created repository {repository.name} (id={repository.id}) for {owner.username}")
    return repository


def delete_repository(repository: Repository):
    """
    Deletes the row and its join rows, then queues directory removal once the deletion commits.

    The removal task is idempotent, so a failed cleanup can be queued again
    without touching the database.
    """
    directory = repository_directory(repository.local_path)
    repository_id = repository.id

    with transaction.atomic():
        repository.delete()
        transaction.on_commit(lambda: async_task(
            'apps.repositories.tasks.remove_repository_directory_task',
            str(directory),
            task_name=f'remove_repository_dir_{repository_id}',
        ))

    logger.info(f"Deleted repository {repository_id}; directory cleanup queued for {directory}")
