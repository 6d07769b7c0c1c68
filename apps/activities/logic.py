# apps/activities/logic.py
from django.db.models import Q
from .models import Activity

DEFAULT_FEED_LIMIT = 10


def visible_activities(user):
    """
    Activities whose repository (if any) is visible to `user`.
    """
    visibility = Q(repository__isnull=True) | Q(repository__is_public=True)
    if user is not None and user.is_authenticated:
        visibility |= Q(repository__owner=user)
    return Activity.objects.select_related('user', 'repository').filter(visibility)


def parse_limit(raw, default=DEFAULT_FEED_LIMIT, maximum=100):
    """Parses the ?limit= query value, falling back to `default` when it is missing or invalid."""
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return default
    return max(1, min(limit, maximum))
