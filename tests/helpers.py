"""Key serialization and token helpers shared by tests."""

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from jwtcore.token.serialization import base64url_encode, int_to_base64url

NOW = 1_700_000_000
HMAC_SECRET = b"0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"


def private_pem(key, fmt=serialization.PrivateFormat.PKCS8) -> bytes:
    """Serialize a private key to unencrypted PEM."""
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=fmt,
        encryption_algorithm=serialization.NoEncryption(),
    )


def public_pem(key, fmt=serialization.PublicFormat.SubjectPublicKeyInfo) -> bytes:
    """Serialize the public half of a private key to PEM."""
    return key.public_key().public_bytes(encoding=serialization.Encoding.PEM, format=fmt)


def rsa_jwk(key, kid: str) -> dict:
    """Publish an RSA private key's public half as a JWK."""
    numbers = key.public_key().public_numbers()
    return {
        "kty": "RSA",
        "kid": kid,
        "use": "sig",
        "alg": "RS256",
        "n": int_to_base64url(numbers.n),
        "e": int_to_base64url(numbers.e),
    }


def ec_jwk(key: ec.EllipticCurvePrivateKey, kid: str) -> dict:
    """Publish an EC private key's public half as a JWK."""
    numbers = key.public_key().public_numbers()
    width = (key.curve.key_size + 7) // 8
    crv = {"secp256r1": "P-256", "secp384r1": "P-384"}[key.curve.name]
    return {
        "kty": "EC",
        "kid": kid,
        "crv": crv,
        "x": base64url_encode(numbers.x.to_bytes(width, "big")),
        "y": base64url_encode(numbers.y.to_bytes(width, "big")),
    }


def ed_jwk(key, kid: str) -> dict:
    """Publish an Ed25519 private key's public half as a JWK."""
    raw = key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw, format=serialization.PublicFormat.Raw
    )
    return {"kty": "OKP", "kid": kid, "crv": "Ed25519", "x": base64url_encode(raw)}


def flip_char(segment: str, index: int) -> str:
    """Replace one base64url character with a different one."""
    index %= len(segment)
    replacement = "A" if segment[index] != "A" else "B"
    return segment[:index] + replacement + segment[index + 1 :]
