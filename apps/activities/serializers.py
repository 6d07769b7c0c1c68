from rest_framework import serializers
from apps.repositories.models import Repository
from apps.users.serializers import UserSerializer
from .models import Activity


class ActivityRepositorySerializer(serializers.ModelSerializer):
    """Slim repository summary embedded in feed entries."""
    isPublic = serializers.BooleanField(source='is_public', read_only=True)

    class Meta:
        model = Repository
        fields = ['id', 'name', 'isPublic']


class ActivitySerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    user = UserSerializer(read_only=True)
    repositoryId = serializers.PrimaryKeyRelatedField(
        source='repository', queryset=Repository.objects.all(),
        required=False, allow_null=True,
    )
    repository = ActivityRepositorySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Activity
        fields = ['id', 'userId', 'user', 'repositoryId', 'repository', 'type', 'payload', 'createdAt']
        extra_kwargs = {'payload': {'required': True}}
