from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User

@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'display_name', 'storage_used', 'storage_limit', 'is_staff', 'created_at')
    list_filter = ('is_staff', 'is_superuser', 'is_active', 'groups')
    search_fields = ('username', 'display_name')
    # Keys are generated at registration and are not edited by hand.
    readonly_fields = ('public_key', 'private_key', 'created_at', 'updated_at')
    fieldsets = UserAdmin.fieldsets + (
        ('GitMesh Profile', {'fields': ('display_name', 'avatar_url')}),
        ('Storage', {'fields': ('storage_used', 'storage_limit')}),
        ('Keys', {'fields': ('public_key', 'private_key')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('GitMesh Profile', {'fields': ('display_name', 'avatar_url')}),
    )
    ordering = ('-created_at',)
