# apps/repositories/models.py
from django.db import models
from django.db.models import Q
from apps.users.models import User


class RepositoryQuerySet(models.QuerySet):
    def visible_to(self, user):
        """Public repositories plus, for an authenticated user, their own private ones."""
        if user is not None and user.is_authenticated:
            return self.filter(Q(is_public=True) | Q(owner=user))
        return self.filter(is_public=True)

    def search(self, query):
        return self.filter(Q(name__icontains=query) | Q(description__icontains=query))


class Repository(models.Model):
    """
    Stores a hosted repository record.

    The counters are advisory values kept for display; they are not derived
    from any Git data. `local_path` names a placeholder directory under
    REPOSITORY_STORAGE_ROOT.
    """
    name = models.CharField(max_length=255)

    description = models.TextField(null=True, blank=True)

    is_public = models.BooleanField(default=True)

    is_verified = models.BooleanField(default=False)

    # The user who owns this repository. Owner-only routes compare against it.
    owner = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='owned_repositories'
    )

    # The primary programming language of the repository.
    language = models.CharField(max_length=100, null=True, blank=True)

    stars = models.PositiveIntegerField(default=0)
    forks = models.PositiveIntegerField(default=0)
    branches = models.PositiveIntegerField(default=1)
    commits = models.PositiveIntegerField(default=0)

    # e.g. "/repos/3_1718000000000"
    local_path = models.CharField(max_length=255)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RepositoryQuerySet.as_manager()

    class Meta:
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.owner.username}/{self.name}"

    def is_visible_to(self, user):
        """Private repositories are visible to their owner only."""
        if self.is_public:
            return True
        return bool(user and user.is_authenticated and user.id == self.owner_id)


class Collaborator(models.Model):
    """
    Grants a user access to a repository they do not own.
    """
    class Permission(models.TextChoices):
        READ = 'read', 'Read'
        WRITE = 'write', 'Write'
        ADMIN = 'admin', 'Admin'

    repository = models.ForeignKey(
        Repository,
        on_delete=models.CASCADE,
        related_name='collaborators'
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='collaborations'
    )
    permission = models.CharField(max_length=10, choices=Permission.choices, default=Permission.READ)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('repository', 'user')

    def __str__(self):
        return f"{self.user.username} ({self.permission}) in {self.repository.name}"


class Tag(models.Model):
    """A globally unique topic name."""
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class RepositoryTag(models.Model):
    repository = models.ForeignKey(
        Repository,
        on_delete=models.CASCADE,
        related_name='repository_tags'
    )
    tag = models.ForeignKey(
        Tag,
        on_delete=models.CASCADE,
        related_name='repository_tags'
    )

    class Meta:
        # One association per (repository, tag) pair.
        unique_together = ('repository', 'tag')

    def __str__(self):
        return f"{self.repository.name} #{self.tag.name}"
