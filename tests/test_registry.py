import pytest

from apps.network.registry import PeerRegistry


class FakeConnection:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send_json(self, message):
        if self.fail:
            raise ConnectionError('socket closed')
        self.sent.append(message)


@pytest.fixture
def peers():
    return PeerRegistry()


def test_register_returns_replaced_connection(peers):
    first, second = FakeConnection(), FakeConnection()

    assert peers.register('p1', first) is None
    assert peers.register('p1', second) is first
    assert peers.lookup('p1') is second
    assert len(peers) == 1


def test_unregister_only_removes_current_binding(peers):
    first, second = FakeConnection(), FakeConnection()
    peers.register('p1', first)
    peers.register('p1', second)

    assert peers.unregister('p1', first) is False
    assert 'p1' in peers
    assert peers.unregister('p1', second) is True
    assert 'p1' not in peers
    assert peers.unregister('p1', second) is False


@pytest.mark.asyncio
async def test_send_to_unknown_peer(peers):
    assert await peers.send_to('ghost', {'type': 'X'}) is False


@pytest.mark.asyncio
async def test_broadcast_skips_excluded_and_survives_failures(peers):
    source, healthy, broken = FakeConnection(), FakeConnection(), FakeConnection(fail=True)
    peers.register('source', source)
    peers.register('healthy', healthy)
    peers.register('broken', broken)

    delivered = await peers.broadcast({'type': 'NEW_PEER', 'payload': {'peerId': 'source'}}, exclude='source')

    assert delivered == 1
    assert healthy.sent == [{'type': 'NEW_PEER', 'payload': {'peerId': 'source'}}]
    assert source.sent == []


@pytest.mark.asyncio
async def test_send_to_failing_connection_returns_false(peers):
    peers.register('broken', FakeConnection(fail=True))

    assert await peers.send_to('broken', {'type': 'REPOSITORY_SHARED'}) is False
