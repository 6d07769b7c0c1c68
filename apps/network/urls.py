from django.urls import path
from .views import PeerListView, NetworkStatsView, RepositorySharedPeerListView

urlpatterns = [
    path('peers', PeerListView.as_view(), name='peer-list'),
    path('network/stats', NetworkStatsView.as_view(), name='network-stats'),
    path('repositories/<int:pk>/shared-peers', RepositorySharedPeerListView.as_view(), name='repository-shared-peers'),
]
