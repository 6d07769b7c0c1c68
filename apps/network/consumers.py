# apps/network/consumers.py
"""
WebSocket relay between connected peers.

Frames are JSON objects of the form {"type": ..., "payload": {...}}.

Client -> server:
    REGISTER_PEER     {peerId, metadata}
    SHARE_REPOSITORY  {repositoryId, targetPeerId}
    VERIFY_DATA       {dataId, data, signature, publicKey}

Server -> client:
    PEER_LIST, NEW_PEER, REPOSITORY_SHARED, VERIFICATION_RESULT, PEER_DISCONNECTED

Delivery is best-effort: no acknowledgements, retries or queueing.
"""
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .logic import active_peers, share_repository, touch_peer
from .registry import registry
from .serializers import PeerSerializer
from .verification import Verifier

logger = logging.getLogger(__name__)


def relay_message(message_type, payload):
    return {'type': message_type, 'payload': payload}


@database_sync_to_async
def _touch_peer(peer_id, metadata):
    return touch_peer(peer_id, metadata)


@database_sync_to_async
def _active_peer_list():
    return PeerSerializer(active_peers(), many=True).data


@database_sync_to_async
def _share_repository(repository_id, peer_id):
    return share_repository(repository_id, peer_id)


class PeerRelayConsumer(AsyncJsonWebsocketConsumer):
    """
    One instance per socket. A connection starts unregistered, becomes
    registered on REGISTER_PEER and is dropped from the registry on close.
    """
    registry = registry
    verifier = Verifier()

    handlers = {
        'REGISTER_PEER': 'register_peer',
        'SHARE_REPOSITORY': 'share_repository',
        'VERIFY_DATA': 'verify_data',
    }

    async def connect(self):
        self.peer_id = None
        await self.accept()

    async def disconnect(self, code):
        if self.peer_id is None:
            return

        # A newer connection may have taken over this identifier; leave its binding alone.
        if not self.registry.unregister(self.peer_id, self):
            logger.info(f"Superseded connection for peer {self.peer_id} closed (code={code})")
            return

        logger.info(f"Peer {self.peer_id} disconnected (code={code})")
        await self.registry.broadcast(relay_message('PEER_DISCONNECTED', {'peerId': self.peer_id}))

    async def receive(self, text_data=None, bytes_data=None, **kwargs):
        # Errors are per message; the socket stays open.
        try:
            await super().receive(text_data=text_data, bytes_data=bytes_data, **kwargs)
        except Exception as e:
            logger.error(f"Error processing websocket message from {self.peer_id or 'unregistered connection'}: {e}", exc_info=True)

    async def receive_json(self, content, **kwargs):
        message_type = content.get('type')
        payload = content.get('payload') or {}

        handler_name = self.handlers.get(message_type)
        if handler_name is None:
            logger.warning(f"Unknown message type: {message_type}")
            return

        if message_type != 'REGISTER_PEER' and self.peer_id is None:
            logger.debug(f"Ignoring {message_type} from unregistered connection")
            return

        await getattr(self, handler_name)(payload)

    # --- Handlers ---

    async def register_peer(self, payload):
        peer_id = payload.get('peerId')
        metadata = payload.get('metadata')
        if not isinstance(peer_id, str) or not peer_id:
            logger.warning(f"REGISTER_PEER with invalid peerId {peer_id!r} ignored")
            return

        if self.peer_id is not None and self.peer_id != peer_id:
            self.registry.unregister(self.peer_id, self)
            self.peer_id = None

        previous = self.registry.register(peer_id, self)
        self.peer_id = peer_id
        if previous is not None and previous is not self:
            logger.warning(f"Peer id {peer_id} claimed by a new connection; the previous connection no longer receives messages")

        await _touch_peer(peer_id, metadata)
        logger.info(f"Peer {peer_id} registered ({len(self.registry)} connected)")

        await self.registry.broadcast(
            relay_message('NEW_PEER', {'peerId': peer_id, 'metadata': metadata}),
            exclude=peer_id,
        )
        await self.send_json(relay_message('PEER_LIST', await _active_peer_list()))

    async def share_repository(self, payload):
        repository_id = payload.get('repositoryId')
        target_peer_id = payload.get('targetPeerId')

        await _share_repository(repository_id, target_peer_id)

        delivered = await self.registry.send_to(
            target_peer_id,
            relay_message('REPOSITORY_SHARED', {'repositoryId': repository_id, 'sourcePeerId': self.peer_id}),
        )
        if not delivered:
            logger.info(f"Peer {target_peer_id} not connected; share of repository {repository_id} recorded only")

    async def verify_data(self, payload):
        is_valid = self.verifier.verify(payload.get('data'), payload.get('signature'), payload.get('publicKey'))
        await self.send_json(relay_message('VERIFICATION_RESULT', {
            'dataId': payload.get('dataId'),
            'isValid': is_valid,
        }))
