# apps/users/keys.py
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from django.conf import settings


def generate_keypair(key_size=None):
    """
    Generates an RSA key pair and returns it as a (public_pem, private_pem) tuple of strings.
    """
    private_key = rsa.generate_private_key(
        public_exponent=65537,
        key_size=key_size or settings.USER_KEY_SIZE,
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return public_pem.decode('ascii'), private_pem.decode('ascii')
