# apps/network/models.py
from django.db import models
from django.utils import timezone
from apps.repositories.models import Repository


class Peer(models.Model):
    """
    A relay participant, keyed by the identifier it announced when registering.

    Rows are never removed; a peer counts as active while `last_seen` falls
    inside PEER_ACTIVE_WINDOW.
    """
    # Self-declared, not authenticated.
    peer_id = models.CharField(max_length=255, unique=True)

    # Refreshed on every registration.
    last_seen = models.DateTimeField(default=timezone.now, db_index=True)

    # Free-form client metadata sent with the registration.
    metadata = models.JSONField(default=dict, blank=True, null=True)

    class Meta:
        ordering = ['-last_seen']

    def __str__(self):
        return self.peer_id


class SharedRepository(models.Model):
    """
    Records that a repository was shared with a peer over the relay.
    """
    repository = models.ForeignKey(
        Repository,
        on_delete=models.CASCADE,
        related_name='shares'
    )
    peer = models.ForeignKey(
        Peer,
        to_field='peer_id',
        on_delete=models.CASCADE,
        related_name='shared_repositories'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('repository', 'peer')

    def __str__(self):
        return f"{self.repository.name} -> {self.peer_id}"
