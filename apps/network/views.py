# apps/network/views.py
from rest_framework import generics
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_yasg.utils import swagger_auto_schema

from apps.repositories.views import RepositoryScopedMixin
from .logic import active_peers, network_stats
from .serializers import NetworkStatsSerializer, PeerSerializer, SharedRepositorySerializer


class PeerListView(generics.ListAPIView):
    """
    Peers seen within the active window, most recent first.
    """
    permission_classes = [AllowAny]
    serializer_class = PeerSerializer

    def get_queryset(self):
        return active_peers()

    @swagger_auto_schema(operation_summary="Active peers", tags=["Network"])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class NetworkStatsView(APIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_summary="Network statistics",
        operation_description="User and repository counts, peers active in the last 10 minutes and the summed storage counter.",
        responses={200: NetworkStatsSerializer()},
        tags=["Network"]
    )
    def get(self, request):
        return Response(network_stats())


class RepositorySharedPeerListView(RepositoryScopedMixin, APIView):

    @swagger_auto_schema(
        operation_summary="Peers a repository was shared with",
        responses={200: SharedRepositorySerializer(many=True)},
        tags=["Network"]
    )
    def get(self, request, pk):
        repository = self.get_repository()
        shares = repository.shares.select_related('peer').order_by('-created_at')
        return Response(SharedRepositorySerializer(shares, many=True).data)
