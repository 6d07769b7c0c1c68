from rest_framework import serializers
from .models import Peer, SharedRepository


class PeerSerializer(serializers.ModelSerializer):
    peerId = serializers.CharField(source='peer_id', read_only=True)
    lastSeen = serializers.DateTimeField(source='last_seen', read_only=True)

    class Meta:
        model = Peer
        fields = ['id', 'peerId', 'lastSeen', 'metadata']


class SharedRepositorySerializer(serializers.ModelSerializer):
    repositoryId = serializers.IntegerField(source='repository_id', read_only=True)
    peerId = serializers.CharField(source='peer_id', read_only=True)
    peer = PeerSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = SharedRepository
        fields = ['id', 'repositoryId', 'peerId', 'peer', 'createdAt']


class NetworkStatsSerializer(serializers.Serializer):
    """Shape of the network statistics response (documentation only)."""
    totalUsers = serializers.IntegerField()
    totalRepositories = serializers.IntegerField()
    activePeers = serializers.IntegerField()
    totalStorage = serializers.IntegerField()
