# apps/repositories/permissions.py
from rest_framework import permissions


class IsOwnerOrVisible(permissions.BasePermission):
    """
    Object-level rule for repositories.

    Reads are allowed when the repository is visible to the requester.
    Writes (update, delete, collaborator and tag changes) are owner-only.
    """
    message = "Access denied."

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return obj.is_visible_to(request.user)

        if obj.owner_id == request.user.id:
            return True
        self.message = "Only the repository owner can modify this repository."
        return False
