# apps/network/logic.py
import logging
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Sum
from django.utils import timezone

from apps.repositories.models import Repository
from .models import Peer, SharedRepository

logger = logging.getLogger(__name__)
User = get_user_model()


def active_peers(now=None):
    """Peers whose last_seen is strictly newer than now - PEER_ACTIVE_WINDOW."""
    now = now or timezone.now()
    return Peer.objects.filter(last_seen__gt=now - settings.PEER_ACTIVE_WINDOW).order_by('-last_seen')


def touch_peer(peer_id, metadata=None) -> Peer:
    """
    Inserts the peer, or refreshes last_seen (and metadata, when given) of an existing one.
    """
    peer, created = Peer.objects.get_or_create(
        peer_id=peer_id,
        defaults={'metadata': metadata if metadata is not None else {}},
    )
    if not created:
        peer.last_seen = timezone.now()
        if metadata is not None:
            peer.metadata = metadata
        peer.save(update_fields=['last_seen', 'metadata'])
    return peer


def share_repository(repository_id, peer_id) -> SharedRepository:
    """
    Records a (repository, peer) share. Sharing twice keeps a single row.

    Raises Repository.DoesNotExist / Peer.DoesNotExist for unknown ids.
    """
    repository = Repository.objects.get(pk=repository_id)
    peer = Peer.objects.get(peer_id=peer_id)
    shared, created = SharedRepository.objects.get_or_create(repository=repository, peer=peer)
    if created:
        logger.info(f"Repository {repository.id} shared with peer {peer.peer_id}")
    return shared


def network_stats(now=None):
    """
    Aggregates user, repository, active peer and storage totals. Recomputed on every call.
    """
    total_storage = User.objects.aggregate(total=Sum('storage_used'))['total']
    return {
        'totalUsers': User.objects.count(),
        'totalRepositories': Repository.objects.count(),
        'activePeers': active_peers(now).count(),
        'totalStorage': total_storage or 0,
    }
