# apps/repositories/views.py
import logging
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import exceptions, generics, status
from rest_framework.permissions import SAFE_METHODS, AllowAny, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema

from .logic import create_repository, delete_repository
from .models import Repository, Collaborator, Tag, RepositoryTag
from .permissions import IsOwnerOrVisible
from .serializers import (
    RepositorySerializer,
    CollaboratorSerializer,
    CollaboratorCreateSerializer,
    TagSerializer,
    RepositoryTagSerializer,
    TagCreateSerializer,
)

logger = logging.getLogger(__name__)
User = get_user_model()


class RepositoryScopedMixin:
    """
    Resolves the repository named by the `pk` URL kwarg and applies the
    visibility/ownership rule to it.
    """
    permission_classes = [IsAuthenticatedOrReadOnly, IsOwnerOrVisible]

    def get_repository(self):
        repository = get_object_or_404(Repository.objects.select_related('owner'), pk=self.kwargs['pk'])
        self.check_object_permissions(self.request, repository)
        return repository

    def permission_denied(self, request, message=None, code=None):
        # Reading a private repository is a 403 for everyone, logged in or not.
        if request.method in SAFE_METHODS:
            raise exceptions.PermissionDenied(detail=message, code=code)
        super().permission_denied(request, message=message, code=code)


# --- Repositories ---

class RepositoryListCreateView(generics.ListCreateAPIView):
    serializer_class = RepositorySerializer
    permission_classes = [IsAuthenticatedOrReadOnly]

    def get_queryset(self):
        queryset = Repository.objects.select_related('owner').visible_to(self.request.user)
        query = self.request.query_params.get('search')
        if query:
            queryset = queryset.search(query)
        return queryset

    @swagger_auto_schema(
        operation_summary="List repositories",
        operation_description="Public repositories, plus the caller's own private ones when logged in.",
        manual_parameters=[
            openapi.Parameter('search', openapi.IN_QUERY, description="Substring of name or description", type=openapi.TYPE_STRING)
        ],
        tags=["Repositories"]
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @swagger_auto_schema(
        operation_summary="Create a repository",
        request_body=RepositorySerializer,
        responses={201: RepositorySerializer(), 400: "Validation error", 401: "Not authenticated"},
        tags=["Repositories"]
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            repository = create_repository(request.user, **serializer.validated_data)
        except Exception as e:
            logger.error(f"Error creating repository for {request.user.username}: {e}", exc_info=True)
            return Response({"detail": "Internal server error."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(self.get_serializer(repository).data, status=status.HTTP_201_CREATED)


class UserRepositoryListView(generics.ListAPIView):
    serializer_class = RepositorySerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        return Repository.objects.select_related('owner') \
            .filter(owner_id=self.kwargs['user_id']) \
            .visible_to(self.request.user)

    @swagger_auto_schema(operation_summary="List a user's repositories", tags=["Repositories"])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class RepositoryDetailView(RepositoryScopedMixin, APIView):

    @swagger_auto_schema(
        operation_summary="Repository detail",
        responses={200: RepositorySerializer(), 403: "Private repository", 404: "Not found"},
        tags=["Repositories"]
    )
    def get(self, request, pk):
        repository = self.get_repository()
        return Response(RepositorySerializer(repository).data)

    @swagger_auto_schema(
        operation_summary="Update a repository",
        operation_description="Owner only. Fields that are left out keep their value.",
        request_body=RepositorySerializer,
        responses={200: RepositorySerializer(), 403: "Not the owner", 404: "Not found"},
        tags=["Repositories"]
    )
    def put(self, request, pk):
        repository = self.get_repository()
        serializer = RepositorySerializer(repository, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @swagger_auto_schema(
        operation_summary="Delete a repository",
        responses={200: "Deleted", 403: "Not the owner", 404: "Not found"},
        tags=["Repositories"]
    )
    def delete(self, request, pk):
        repository = self.get_repository()
        try:
            delete_repository(repository)
        except Exception as e:
            logger.error(f"Error deleting repository {pk}: {e}", exc_info=True)
            return Response({"detail": "Internal server error."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"detail": "Repository deleted successfully."})


# --- Collaborators ---

class RepositoryCollaboratorListView(RepositoryScopedMixin, APIView):

    @swagger_auto_schema(
        operation_summary="List collaborators",
        responses={200: CollaboratorSerializer(many=True)},
        tags=["Collaborators"]
    )
    def get(self, request, pk):
        repository = self.get_repository()
        collaborators = repository.collaborators.select_related('user').order_by('created_at')
        return Response(CollaboratorSerializer(collaborators, many=True).data)

    @swagger_auto_schema(
        operation_summary="Add a collaborator",
        operation_description="Owner only. Granting an existing collaborator again replaces the permission.",
        request_body=CollaboratorCreateSerializer,
        responses={201: CollaboratorSerializer(), 400: "Validation error", 403: "Not the owner", 404: "Unknown user"},
        tags=["Collaborators"]
    )
    def post(self, request, pk):
        repository = self.get_repository()
        serializer = CollaboratorCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = get_object_or_404(User, pk=serializer.validated_data['userId'])
        if user.id == repository.owner_id:
            return Response({"detail": "The owner cannot be added as a collaborator."}, status=status.HTTP_400_BAD_REQUEST)

        collaborator, created = Collaborator.objects.update_or_create(
            repository=repository,
            user=user,
            defaults={'permission': serializer.validated_data['permission']},
        )
        logger.info(f"{'Added' if created else 'Updated'} collaborator {user.username} ({collaborator.permission}) on repository {repository.id}")
        return Response(CollaboratorSerializer(collaborator).data, status=status.HTTP_201_CREATED)


class RepositoryCollaboratorDetailView(RepositoryScopedMixin, APIView):

    @swagger_auto_schema(operation_summary="Remove a collaborator", tags=["Collaborators"])
    def delete(self, request, pk, user_id):
        repository = self.get_repository()
        Collaborator.objects.filter(repository=repository, user_id=user_id).delete()
        return Response({"detail": "Collaborator removed successfully."})


# --- Tags ---

class TagListView(generics.ListAPIView):
    permission_classes = [AllowAny]
    serializer_class = TagSerializer
    queryset = Tag.objects.all()

    @swagger_auto_schema(operation_summary="List all tags", tags=["Tags"])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class RepositoryTagListView(RepositoryScopedMixin, APIView):

    @swagger_auto_schema(
        operation_summary="List repository tags",
        responses={200: TagSerializer(many=True)},
        tags=["Tags"]
    )
    def get(self, request, pk):
        repository = self.get_repository()
        tags = Tag.objects.filter(repository_tags__repository=repository)
        return Response(TagSerializer(tags, many=True).data)

    @swagger_auto_schema(
        operation_summary="Tag a repository",
        operation_description="Owner only. The tag is created when missing; tagging twice keeps a single association.",
        request_body=TagCreateSerializer,
        responses={201: "{tag, repoTag}", 400: "Validation error", 403: "Not the owner"},
        tags=["Tags"]
    )
    def post(self, request, pk):
        repository = self.get_repository()
        serializer = TagCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tag, _ = Tag.objects.get_or_create(name=serializer.validated_data['tagName'])
        repo_tag, _ = RepositoryTag.objects.get_or_create(repository=repository, tag=tag)

        return Response({
            'tag': TagSerializer(tag).data,
            'repoTag': RepositoryTagSerializer(repo_tag).data,
        }, status=status.HTTP_201_CREATED)


class RepositoryTagDetailView(RepositoryScopedMixin, APIView):

    @swagger_auto_schema(operation_summary="Remove a tag from a repository", tags=["Tags"])
    def delete(self, request, pk, tag_id):
        repository = self.get_repository()
        RepositoryTag.objects.filter(repository=repository, tag_id=tag_id).delete()
        return Response({"detail": "Tag removed successfully."})
