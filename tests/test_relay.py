import pytest
from channels.db import database_sync_to_async
from channels.testing import WebsocketCommunicator

from apps.network.consumers import PeerRelayConsumer
from apps.network.logic import touch_peer
from apps.network.models import Peer, SharedRepository
from apps.network.registry import registry
from apps.network.verification import sign_payload

pytestmark = [pytest.mark.asyncio, pytest.mark.django_db(transaction=True)]


async def connect():
    communicator = WebsocketCommunicator(PeerRelayConsumer.as_asgi(), '/api/ws')
    connected, _ = await communicator.connect()
    assert connected
    return communicator


async def register(communicator, peer_id, metadata=None):
    """Registers and returns the PEER_LIST the new peer gets back."""
    await communicator.send_json_to({'type': 'REGISTER_PEER', 'payload': {'peerId': peer_id, 'metadata': metadata}})
    reply = await communicator.receive_json_from(timeout=3)
    assert reply['type'] == 'PEER_LIST'
    return reply['payload']


async def close_all(*communicators):
    for communicator in communicators:
        await communicator.disconnect()


@database_sync_to_async
def share_rows():
    return list(SharedRepository.objects.values_list('repository_id', 'peer_id'))


@database_sync_to_async
def peer_metadata(peer_id):
    return Peer.objects.get(peer_id=peer_id).metadata


async def test_register_share_and_disconnect(public_repository):
    alice = await connect()
    alice_list = await register(alice, 'p1', {'name': 'Alice'})
    assert [peer['peerId'] for peer in alice_list] == ['p1']

    bob = await connect()
    bob_list = await register(bob, 'p2')
    assert {peer['peerId'] for peer in bob_list} == {'p1', 'p2'}
    assert await bob.receive_nothing()

    announced = await alice.receive_json_from(timeout=3)
    assert announced == {'type': 'NEW_PEER', 'payload': {'peerId': 'p2', 'metadata': None}}
    assert await peer_metadata('p2') == {}
    assert await peer_metadata('p1') == {'name': 'Alice'}

    await alice.send_json_to({
        'type': 'SHARE_REPOSITORY',
        'payload': {'repositoryId': public_repository.id, 'targetPeerId': 'p2'},
    })
    shared = await bob.receive_json_from(timeout=3)
    assert shared == {'type': 'REPOSITORY_SHARED', 'payload': {'repositoryId': public_repository.id, 'sourcePeerId': 'p1'}}
    assert await alice.receive_nothing()
    assert await share_rows() == [(public_repository.id, 'p2')]

    await bob.disconnect()
    gone = await alice.receive_json_from(timeout=3)
    assert gone == {'type': 'PEER_DISCONNECTED', 'payload': {'peerId': 'p2'}}
    assert 'p2' not in registry

    await close_all(alice)


async def test_sharing_twice_keeps_one_row(public_repository):
    alice = await connect()
    await register(alice, 'p1')
    bob = await connect()
    await register(bob, 'p2')
    await alice.receive_json_from(timeout=3)

    message = {'type': 'SHARE_REPOSITORY', 'payload': {'repositoryId': public_repository.id, 'targetPeerId': 'p2'}}
    await alice.send_json_to(message)
    await bob.receive_json_from(timeout=3)
    await alice.send_json_to(message)
    await bob.receive_json_from(timeout=3)

    assert await share_rows() == [(public_repository.id, 'p2')]
    await close_all(alice, bob)


async def test_share_with_offline_peer_is_recorded_only(public_repository):
    await database_sync_to_async(touch_peer)('offline')
    alice = await connect()
    await register(alice, 'p1')

    await alice.send_json_to({
        'type': 'SHARE_REPOSITORY',
        'payload': {'repositoryId': public_repository.id, 'targetPeerId': 'offline'},
    })

    assert await alice.receive_nothing(timeout=0.5)
    assert await share_rows() == [(public_repository.id, 'offline')]
    await close_all(alice)


async def test_duplicate_peer_id_replaces_previous_connection(public_repository):
    first = await connect()
    await register(first, 'p1')
    second = await connect()
    await register(second, 'p1')
    assert registry.lookup('p1') is not None
    assert len(registry) == 1

    bob = await connect()
    await register(bob, 'p2')
    assert (await second.receive_json_from(timeout=3))['type'] == 'NEW_PEER'
    assert await first.receive_nothing()

    await bob.send_json_to({
        'type': 'SHARE_REPOSITORY',
        'payload': {'repositoryId': public_repository.id, 'targetPeerId': 'p1'},
    })
    assert (await second.receive_json_from(timeout=3))['type'] == 'REPOSITORY_SHARED'
    assert await first.receive_nothing()

    # The superseded connection closing must not evict the live binding.
    await first.disconnect()
    assert 'p1' in registry
    assert await bob.receive_nothing()

    await second.disconnect()
    assert await bob.receive_json_from(timeout=3) == {'type': 'PEER_DISCONNECTED', 'payload': {'peerId': 'p1'}}
    await close_all(bob)


async def test_unregistered_connection_cannot_share_or_verify(public_repository, keypair):
    await database_sync_to_async(touch_peer)('p2')
    stranger = await connect()

    await stranger.send_json_to({
        'type': 'SHARE_REPOSITORY',
        'payload': {'repositoryId': public_repository.id, 'targetPeerId': 'p2'},
    })
    await stranger.send_json_to({
        'type': 'VERIFY_DATA',
        'payload': {'dataId': 'd1', 'data': {}, 'signature': 'AA==', 'publicKey': keypair[0]},
    })

    assert await stranger.receive_nothing(timeout=0.5)
    assert await share_rows() == []
    await close_all(stranger)


async def test_verify_data_replies_to_requester_only(keypair):
    public_key, private_key = keypair
    data = {'commit': 'abc123', 'message': 'héllo'}
    signature = sign_payload(data, private_key)

    alice = await connect()
    await register(alice, 'p1')
    bob = await connect()
    await register(bob, 'p2')
    await alice.receive_json_from(timeout=3)

    await bob.send_json_to({
        'type': 'VERIFY_DATA',
        'payload': {'dataId': 'good', 'data': data, 'signature': signature, 'publicKey': public_key},
    })
    assert await bob.receive_json_from(timeout=3) == {
        'type': 'VERIFICATION_RESULT', 'payload': {'dataId': 'good', 'isValid': True},
    }

    await bob.send_json_to({
        'type': 'VERIFY_DATA',
        'payload': {'dataId': 'bad', 'data': {**data, 'commit': 'evil'}, 'signature': signature, 'publicKey': public_key},
    })
    assert await bob.receive_json_from(timeout=3) == {
        'type': 'VERIFICATION_RESULT', 'payload': {'dataId': 'bad', 'isValid': False},
    }
    assert await alice.receive_nothing()
    await close_all(alice, bob)


async def test_bad_messages_keep_connection_open(keypair):
    alice = await connect()

    await alice.send_to(text_data='{not json')
    await alice.send_json_to({'type': 'PING', 'payload': {}})
    await alice.send_json_to({'type': 'REGISTER_PEER', 'payload': {'metadata': {'name': 'no id'}}})
    assert await alice.receive_nothing(timeout=0.5)
    assert len(registry) == 0

    await register(alice, 'p1')
    # Unknown repository: the handler fails, the socket survives.
    await alice.send_json_to({'type': 'SHARE_REPOSITORY', 'payload': {'repositoryId': 424242, 'targetPeerId': 'p1'}})
    await alice.send_json_to({
        'type': 'VERIFY_DATA',
        'payload': {'dataId': 'after', 'data': 'x', 'signature': 'not base64!', 'publicKey': keypair[0]},
    })

    reply = await alice.receive_json_from(timeout=3)
    assert reply == {'type': 'VERIFICATION_RESULT', 'payload': {'dataId': 'after', 'isValid': False}}
    await close_all(alice)


async def test_reregistering_under_new_id_drops_old_binding():
    alice = await connect()
    await register(alice, 'p1')
    await register(alice, 'p1-renamed')

    assert registry.peer_ids() == ['p1-renamed']
    await close_all(alice)
    assert len(registry) == 0


@pytest.mark.parametrize('bad_peer_id', [['x'], 5, {'id': 'p1'}, ''])
async def test_non_string_peer_id_leaves_connection_unregistered(public_repository, bad_peer_id):
    target = await connect()
    await register(target, 'p2')
    mallory = await connect()

    await mallory.send_json_to({'type': 'REGISTER_PEER', 'payload': {'peerId': bad_peer_id}})
    assert await mallory.receive_nothing(timeout=0.5)
    assert registry.peer_ids() == ['p2']

    # Still unregistered: shares are ignored and nothing reaches the target.
    await mallory.send_json_to({
        'type': 'SHARE_REPOSITORY',
        'payload': {'repositoryId': public_repository.id, 'targetPeerId': 'p2'},
    })
    assert await target.receive_nothing(timeout=0.5)
    assert await share_rows() == []

    await mallory.disconnect()
    assert await target.receive_nothing()
    await close_all(target)
