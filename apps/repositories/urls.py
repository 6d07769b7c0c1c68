from django.urls import path
from .views import (
    RepositoryListCreateView,
    UserRepositoryListView,
    RepositoryDetailView,
    RepositoryCollaboratorListView,
    RepositoryCollaboratorDetailView,
    RepositoryTagListView,
    RepositoryTagDetailView,
    TagListView,
)

urlpatterns = [
    path('repositories', RepositoryListCreateView.as_view(), name='repository-list'),
    path('repositories/user/<int:user_id>', UserRepositoryListView.as_view(), name='user-repository-list'),
    path('repositories/<int:pk>', RepositoryDetailView.as_view(), name='repository-detail'),

    # Collaborators
    path('repositories/<int:pk>/collaborators', RepositoryCollaboratorListView.as_view(), name='repository-collaborators'),
    path('repositories/<int:pk>/collaborators/<int:user_id>', RepositoryCollaboratorDetailView.as_view(), name='repository-collaborator-detail'),

    # Tags
    path('repositories/<int:pk>/tags', RepositoryTagListView.as_view(), name='repository-tags'),
    path('repositories/<int:pk>/tags/<int:tag_id>', RepositoryTagDetailView.as_view(), name='repository-tag-detail'),
    path('tags', TagListView.as_view(), name='tag-list'),
]
