from rest_framework import serializers
from .models import Repository, Collaborator, Tag, RepositoryTag
from apps.users.serializers import UserSerializer

class RepositorySerializer(serializers.ModelSerializer):
    """
    Repository representation used for listing, reading, creating and updating.

    Only name, description, isPublic and language are writable; the owner and
    the local path are assigned by the server and the counters are advisory.
    """
    isPublic = serializers.BooleanField(source='is_public', required=False)
    isVerified = serializers.BooleanField(source='is_verified', read_only=True)
    ownerId = serializers.IntegerField(source='owner_id', read_only=True)
    owner = UserSerializer(read_only=True)
    localPath = serializers.CharField(source='local_path', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Repository
        fields = [
            'id',
            'name',
            'description',
            'isPublic',
            'isVerified',
            'ownerId',
            'owner',
            'language',
            'stars',
            'forks',
            'branches',
            'commits',
            'localPath',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['stars', 'forks', 'branches', 'commits']


class CollaboratorSerializer(serializers.ModelSerializer):
    repositoryId = serializers.IntegerField(source='repository_id', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    user = UserSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Collaborator
        fields = ['id', 'repositoryId', 'userId', 'permission', 'user', 'createdAt']


class CollaboratorCreateSerializer(serializers.Serializer):
    """Body of a collaborator grant."""
    userId = serializers.IntegerField()
    permission = serializers.ChoiceField(choices=Collaborator.Permission.choices)


class TagSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Tag
        fields = ['id', 'name', 'createdAt']


class RepositoryTagSerializer(serializers.ModelSerializer):
    repositoryId = serializers.IntegerField(source='repository_id', read_only=True)
    tagId = serializers.IntegerField(source='tag_id', read_only=True)

    class Meta:
        model = RepositoryTag
        fields = ['id', 'repositoryId', 'tagId']


class TagCreateSerializer(serializers.Serializer):
    tagName = serializers.CharField(max_length=100)
