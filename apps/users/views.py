# apps/users/views.py
import logging
from django.conf import settings
from django.contrib.auth import authenticate, login, logout
from django.db import IntegrityError, transaction
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import ensure_csrf_cookie
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_yasg.utils import swagger_auto_schema

from .keys import generate_keypair
from .models import User
from .serializers import LoginSerializer, RegisterSerializer, UserSerializer, UserUpdateSerializer

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """
    Creates an account with a freshly generated RSA key pair.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(
        operation_summary="Register",
        request_body=RegisterSerializer,
        responses={201: UserSerializer(), 400: "Validation error", 409: "Username already taken"},
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if User.objects.filter(username=data['username']).exists():
            return Response({"detail": "Username already exists."}, status=status.HTTP_409_CONFLICT)

        public_key, private_key = generate_keypair()
        if not settings.GITMESH_STORE_PRIVATE_KEYS:
            private_key = ''

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=data['username'],
                    password=data['password'],
                    display_name=data['displayName'],
                    avatar_url=data.get('avatarUrl') or None,
                    public_key=public_key,
                    private_key=private_key,
                )
        except IntegrityError:
            # Lost a race against a concurrent registration with the same username.
            return Response({"detail": "Username already exists."}, status=status.HTTP_409_CONFLICT)

        logger.info(f"Registered user {user.username} (id={user.id})")
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(
        operation_summary="Log in",
        operation_description="Checks the username and password and starts a cookie session.",
        request_body=LoginSerializer,
        responses={200: UserSerializer(), 401: "Invalid credentials"},
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request,
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
        )
        if user is None:
            logger.info(f"Failed login for {serializer.validated_data['username']}")
            return Response({"detail": "Incorrect username or password."}, status=status.HTTP_401_UNAUTHORIZED)

        login(request, user)
        return Response(UserSerializer(user).data)


class LogoutView(APIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(operation_summary="Log out", tags=["Authentication"])
    def post(self, request):
        logout(request)
        return Response({"detail": "Logged out successfully."})


@method_decorator(ensure_csrf_cookie, name='dispatch')
class SessionView(APIView):
    """
    Returns the user bound to the session cookie. Also hands the SPA its CSRF cookie.
    """
    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_summary="Current session",
        responses={200: UserSerializer(), 401: "Not authenticated"},
        tags=["Authentication"],
    )
    def get(self, request):
        if not request.user.is_authenticated:
            return Response({"detail": "Not authenticated."}, status=status.HTTP_401_UNAUTHORIZED)
        return Response(UserSerializer(request.user).data)


class CurrentUserView(generics.RetrieveUpdateAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserUpdateSerializer
    http_method_names = ['get', 'patch', 'head', 'options']

    def get_object(self):
        return self.request.user

    @swagger_auto_schema(operation_summary="My profile", responses={200: UserSerializer()}, tags=["Users"])
    def get(self, request, *args, **kwargs):
        return Response(UserSerializer(request.user).data)

    @swagger_auto_schema(
        operation_summary="Update my profile",
        request_body=UserUpdateSerializer,
        responses={200: UserSerializer()},
        tags=["Users"],
    )
    def patch(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)


class UserDetailView(generics.RetrieveAPIView):
    permission_classes = [AllowAny]
    serializer_class = UserSerializer
    queryset = User.objects.all()

    @swagger_auto_schema(operation_summary="User profile", tags=["Users"])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)
