# apps/activities/views.py
import logging
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema

from apps.repositories.views import RepositoryScopedMixin
from .logic import parse_limit, visible_activities
from .serializers import ActivitySerializer

logger = logging.getLogger(__name__)

limit_parameter = openapi.Parameter(
    'limit', openapi.IN_QUERY, description="Number of entries (default 10)", type=openapi.TYPE_INTEGER
)


class UserActivityListView(APIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_summary="User activity feed",
        manual_parameters=[limit_parameter],
        responses={200: ActivitySerializer(many=True)},
        tags=["Activities"]
    )
    def get(self, request, user_id):
        limit = parse_limit(request.query_params.get('limit'))
        activities = visible_activities(request.user).filter(user_id=user_id)[:limit]
        return Response(ActivitySerializer(activities, many=True).data)


class RepositoryActivityListView(RepositoryScopedMixin, APIView):

    @swagger_auto_schema(
        operation_summary="Repository activity feed",
        manual_parameters=[limit_parameter],
        responses={200: ActivitySerializer(many=True), 403: "Private repository"},
        tags=["Activities"]
    )
    def get(self, request, pk):
        repository = self.get_repository()
        limit = parse_limit(request.query_params.get('limit'))
        activities = repository.activities.select_related('user', 'repository')[:limit]
        return Response(ActivitySerializer(activities, many=True).data)


class ActivityCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_summary="Record an activity",
        request_body=ActivitySerializer,
        responses={201: ActivitySerializer(), 400: "Validation error"},
        tags=["Activities"]
    )
    def post(self, request):
        serializer = ActivitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        repository = serializer.validated_data.get('repository')
        if repository is not None and not repository.is_visible_to(request.user):
            return Response({"detail": "Access denied."}, status=status.HTTP_403_FORBIDDEN)

        activity = serializer.save(user=request.user)
        logger.debug(f"Activity {activity.type} recorded for {request.user.username}")
        return Response(ActivitySerializer(activity).data, status=status.HTTP_201_CREATED)
