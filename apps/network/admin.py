from django.contrib import admin
from .models import Peer, SharedRepository

@admin.register(Peer)
class PeerAdmin(admin.ModelAdmin):
    list_display = ('peer_id', 'last_seen')
    search_fields = ('peer_id',)
    readonly_fields = ('last_seen',)

@admin.register(SharedRepository)
class SharedRepositoryAdmin(admin.ModelAdmin):
    list_display = ('repository', 'peer', 'created_at')
    search_fields = ('repository__name', 'peer__peer_id')
