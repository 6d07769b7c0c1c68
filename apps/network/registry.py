# apps/network/registry.py
import asyncio
import logging
import threading

logger = logging.getLogger(__name__)


class PeerRegistry:
    """
    Maps peer identifiers to the live connection that registered them.

    This is the only record of which peers can be reached for direct
    forwarding. It lives in process memory and starts empty on every restart.
    Registering an identifier that is already taken replaces the previous
    connection; the replaced connection stays open but stops receiving
    forwarded messages.

    Connections only need an async `send_json(message)` method.
    """

    def __init__(self):
        self._connections = {}
        self._lock = threading.Lock()

    def register(self, peer_id, connection):
        """Binds `peer_id` to `connection` and returns the connection it replaced, if any."""
        with self._lock:
            previous = self._connections.get(peer_id)
            self._connections[peer_id] = connection
        return previous

    def unregister(self, peer_id, connection):
        """
        Drops `peer_id` if it is still bound to `connection`.

        Returns False when the identifier has since been taken over by
        another connection, which keeps its binding.
        """
        with self._lock:
            if self._connections.get(peer_id) is not connection:
                return False
            del self._connections[peer_id]
        return True

    def lookup(self, peer_id):
        with self._lock:
            return self._connections.get(peer_id)

    def peer_ids(self):
        with self._lock:
            return list(self._connections)

    def clear(self):
        with self._lock:
            self._connections.clear()

    def __len__(self):
        with self._lock:
            return len(self._connections)

    def __contains__(self, peer_id):
        with self._lock:
            return peer_id in self._connections

    async def send_to(self, peer_id, message):
        """Sends to one peer. Returns False if it is not connected or the send failed."""
        connection = self.lookup(peer_id)
        if connection is None:
            return False
        return await self._send(peer_id, connection, message)

    async def broadcast(self, message, exclude=None):
        """
        Sends `message` to every registered peer except `exclude`.

        Each send is independent; one failing or slow peer does not stop the
        others. Returns the number of successful sends.
        """
        with self._lock:
            targets = [(peer_id, conn) for peer_id, conn in self._connections.items() if peer_id != exclude]

        results = await asyncio.gather(*(self._send(peer_id, conn, message) for peer_id, conn in targets))
        return sum(results)

    async def _send(self, peer_id, connection, message):
        try:
            await connection.send_json(message)
        except Exception as e:
            logger.warning(f"Dropped {message.get('type')} for peer {peer_id}: {e}")
            return False
        return True


# The relay's connection table for this process.
registry = PeerRegistry()
