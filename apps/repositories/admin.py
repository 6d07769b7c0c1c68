from django.contrib import admin
from .models import Repository, Collaborator, Tag, RepositoryTag

class CollaboratorInline(admin.TabularInline):
    model = Collaborator
    extra = 0

class RepositoryTagInline(admin.TabularInline):
    model = RepositoryTag
    extra = 0

@admin.register(Repository)
class RepositoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'owner', 'is_public', 'is_verified', 'language', 'stars', 'commits', 'updated_at')
    list_filter = ('is_public', 'is_verified', 'language')
    search_fields = ('name', 'description', 'owner__username')
    readonly_fields = ('local_path', 'created_at', 'updated_at')
    inlines = (CollaboratorInline, RepositoryTagInline)

    fieldsets = (
        ('Basic Info', {'fields': ('name', 'owner', 'description', 'language', 'local_path')}),
        ('Visibility', {'fields': ('is_public', 'is_verified')}),
        ('Counters', {'fields': ('stars', 'forks', 'branches', 'commits', 'created_at', 'updated_at')}),
    )

@admin.register(Collaborator)
class CollaboratorAdmin(admin.ModelAdmin):
    list_display = ('user', 'repository', 'permission', 'created_at')
    list_filter = ('permission',)
    search_fields = ('user__username', 'repository__name')

@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_at')
    search_fields = ('name',)
