from datetime import timedelta

import pytest
from django.utils import timezone

from apps.network.logic import active_peers, network_stats, share_repository, touch_peer
from apps.network.models import Peer, SharedRepository
from apps.repositories.models import Repository

pytestmark = pytest.mark.django_db


def test_touch_peer_inserts_with_empty_metadata():
    peer = touch_peer('QmNew')

    assert peer.metadata == {}
    assert Peer.objects.get(peer_id='QmNew').metadata == {}


def test_touch_peer_refreshes_last_seen_and_metadata():
    stale = timezone.now() - timedelta(hours=1)
    Peer.objects.create(peer_id='QmOld', last_seen=stale, metadata={'name': 'old'})

    touch_peer('QmOld', {'name': 'new'})

    peer = Peer.objects.get(peer_id='QmOld')
    assert peer.last_seen > stale
    assert peer.metadata == {'name': 'new'}


def test_touch_peer_without_metadata_keeps_existing():
    Peer.objects.create(peer_id='QmKeep', metadata={'name': 'kept'})

    touch_peer('QmKeep', None)

    assert Peer.objects.get(peer_id='QmKeep').metadata == {'name': 'kept'}


def test_active_window_is_strict():
    now = timezone.now()
    Peer.objects.create(peer_id='inside', last_seen=now - timedelta(minutes=9, seconds=59))
    Peer.objects.create(peer_id='boundary', last_seen=now - timedelta(minutes=10))
    Peer.objects.create(peer_id='outside', last_seen=now - timedelta(minutes=10, seconds=1))

    assert [peer.peer_id for peer in active_peers(now)] == ['inside']


def test_network_stats(make_user, owner, public_repository, private_repository):
    now = timezone.now()
    owner.storage_used = 1500
    owner.save()
    make_user('second', storage_used=500)
    Peer.objects.create(peer_id='recent', last_seen=now - timedelta(minutes=9, seconds=59))
    Peer.objects.create(peer_id='stale', last_seen=now - timedelta(minutes=10, seconds=1))

    assert network_stats(now) == {
        'totalUsers': 2,
        'totalRepositories': 2,
        'activePeers': 1,
        'totalStorage': 2000,
    }


def test_network_stats_on_empty_database(api_client):
    response = api_client.get('/api/network/stats')

    assert response.status_code == 200
    assert response.json() == {'totalUsers': 0, 'totalRepositories': 0, 'activePeers': 0, 'totalStorage': 0}


def test_peer_list_endpoint_shows_active_peers_newest_first(api_client):
    now = timezone.now()
    Peer.objects.create(peer_id='older', last_seen=now - timedelta(minutes=5), metadata={'name': 'Older'})
    Peer.objects.create(peer_id='newest', last_seen=now - timedelta(seconds=5))
    Peer.objects.create(peer_id='gone', last_seen=now - timedelta(hours=2))

    response = api_client.get('/api/peers')

    assert response.status_code == 200
    assert [peer['peerId'] for peer in response.json()] == ['newest', 'older']
    assert response.json()[1]['metadata'] == {'name': 'Older'}


def test_share_repository_is_idempotent(public_repository):
    touch_peer('QmTarget')

    first = share_repository(public_repository.id, 'QmTarget')
    second = share_repository(public_repository.id, 'QmTarget')

    assert first.pk == second.pk
    assert SharedRepository.objects.count() == 1


def test_share_repository_requires_known_ids(public_repository):
    touch_peer('QmTarget')

    with pytest.raises(Peer.DoesNotExist):
        share_repository(public_repository.id, 'QmUnknown')
    with pytest.raises(Repository.DoesNotExist):
        share_repository(424242, 'QmTarget')


def test_shared_peers_endpoint(api_client, public_repository, private_repository):
    touch_peer('QmTarget', {'name': 'Target'})
    share_repository(public_repository.id, 'QmTarget')
    share_repository(private_repository.id, 'QmTarget')

    response = api_client.get(f'/api/repositories/{public_repository.id}/shared-peers')

    assert response.status_code == 200
    assert [share['peerId'] for share in response.json()] == ['QmTarget']
    assert response.json()[0]['peer']['metadata'] == {'name': 'Target'}
    assert api_client.get(f'/api/repositories/{private_repository.id}/shared-peers').status_code == 403
