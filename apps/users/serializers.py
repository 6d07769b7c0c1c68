# apps/users/serializers.py
from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Public representation of a User.

    The password hash and the private key are never part of this payload;
    every endpoint that returns a user goes through this serializer.
    """
    displayName = serializers.CharField(source='display_name', read_only=True)
    publicKey = serializers.CharField(source='public_key', read_only=True)
    avatarUrl = serializers.URLField(source='avatar_url', read_only=True)
    storageUsed = serializers.IntegerField(source='storage_used', read_only=True)
    storageLimit = serializers.IntegerField(source='storage_limit', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = (
            'id', 'username', 'displayName', 'publicKey', 'avatarUrl',
            'storageUsed', 'storageLimit', 'createdAt', 'updatedAt',
        )


class RegisterSerializer(serializers.Serializer):
    """Registration body. Username uniqueness is checked by the view (409, not 400)."""
    username = serializers.CharField(
        min_length=3, max_length=150,
        error_messages={'min_length': 'Username must be at least 3 characters'},
    )
    password = serializers.CharField(
        min_length=8, write_only=True, trim_whitespace=False,
        error_messages={'min_length': 'Password must be at least 8 characters'},
    )
    displayName = serializers.CharField(
        min_length=2, max_length=255,
        error_messages={'min_length': 'Display name must be at least 2 characters'},
    )
    avatarUrl = serializers.URLField(required=False, allow_null=True, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)


class UserUpdateSerializer(serializers.ModelSerializer):
    """Profile fields a user may change on their own account."""
    displayName = serializers.CharField(source='display_name', min_length=2, max_length=255, required=False)
    avatarUrl = serializers.URLField(source='avatar_url', required=False, allow_null=True, allow_blank=True)

    class Meta:
        model = User
        fields = ('displayName', 'avatarUrl')
