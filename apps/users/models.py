# apps/users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models

DEFAULT_STORAGE_LIMIT = 2_000_000_000  # 2 GB


class User(AbstractUser):
    """
    Custom User model that extends Django's AbstractUser.

    Besides the login credentials, each user carries an RSA key pair that is
    generated at registration and a pair of storage quota counters. The quota
    is advisory: nothing prevents `storage_used` from exceeding `storage_limit`.
    """
    # Name shown in the UI; the username stays the login handle.
    display_name = models.CharField(max_length=255)

    # PEM encoded SubjectPublicKeyInfo.
    public_key = models.TextField()

    # PEM encoded PKCS#8 private key. Empty when private key storage is disabled.
    private_key = models.TextField(blank=True)

    avatar_url = models.URLField(max_length=512, blank=True, null=True)

    # Storage counters in bytes.
    storage_used = models.BigIntegerField(default=0)
    storage_limit = models.BigIntegerField(default=DEFAULT_STORAGE_LIMIT)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        """
        Returns the username as the string representation of the User object.
        """
        return self.username
