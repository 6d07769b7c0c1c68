# apps/network/verification.py
"""
Signature checks for payloads exchanged over the relay.

A signature covers the compact JSON serialization of the payload
(no whitespace between tokens, UTF-8), hashed with SHA-256. RSA keys use
PKCS#1 v1.5 padding, EC keys use ECDSA. Floats with an integral value are
written as integers (1.0 becomes 1), the way JavaScript clients serialize them.
"""
import base64
import binascii
import json
import logging

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

logger = logging.getLogger(__name__)


def _integral_floats_as_ints(value):
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {key: _integral_floats_as_ints(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_integral_floats_as_ints(item) for item in value]
    return value


def canonical_json(payload) -> bytes:
    return json.dumps(
        _integral_floats_as_ints(payload), separators=(',', ':'), ensure_ascii=False,
    ).encode('utf-8')


def sign_payload(payload, private_key_pem: str) -> str:
    """Signs `payload` with a PEM private key and returns the base64 signature."""
    private_key = serialization.load_pem_private_key(private_key_pem.encode('utf-8'), password=None)
    message = canonical_json(payload)

    if isinstance(private_key, rsa.RSAPrivateKey):
        signature = private_key.sign(message, padding.PKCS1v15(), hashes.SHA256())
    elif isinstance(private_key, ec.EllipticCurvePrivateKey):
        signature = private_key.sign(message, ec.ECDSA(hashes.SHA256()))
    else:
        raise TypeError(f"Unsupported key type: {type(private_key).__name__}")

    return base64.b64encode(signature).decode('ascii')


class Verifier:
    """
    Checks a base64 signature over a payload against a PEM public key.

    Never raises for bad input: malformed keys, malformed signatures and
    unsupported key types all verify as False.
    """

    def verify(self, payload, signature, public_key) -> bool:
        if not isinstance(signature, str) or not isinstance(public_key, str):
            return False

        try:
            key = serialization.load_pem_public_key(public_key.encode('utf-8'))
            raw_signature = base64.b64decode(signature, validate=True)
        except (ValueError, UnsupportedAlgorithm, binascii.Error) as e:
            logger.debug(f"Rejected malformed key or signature: {e}")
            return False

        message = canonical_json(payload)
        try:
            if isinstance(key, rsa.RSAPublicKey):
                key.verify(raw_signature, message, padding.PKCS1v15(), hashes.SHA256())
            elif isinstance(key, ec.EllipticCurvePublicKey):
                key.verify(raw_signature, message, ec.ECDSA(hashes.SHA256()))
            else:
                logger.debug(f"Unsupported public key type: {type(key).__name__}")
                return False
        except InvalidSignature:
            return False

        return True
