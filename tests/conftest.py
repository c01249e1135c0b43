"""Shared test fixtures for jwtcore."""

from collections.abc import Iterator

import pytest
import structlog
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from jwtcore.crypto.algorithms import Algorithm
from jwtcore.crypto.keys import DecodingKey, EncodingKey
from tests.helpers import HMAC_SECRET, NOW, private_pem, public_pem


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test installs."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host JWT_* variables out of settings tests."""
    for name in (
        "JWT_ALGORITHMS",
        "JWT_LEEWAY",
        "JWT_VALIDATE_EXP",
        "JWT_VALIDATE_NBF",
        "JWT_REQUIRED_CLAIMS",
        "JWT_AUDIENCE",
        "JWT_ISSUER",
        "JWT_SUBJECT",
        "JWT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec256_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec384_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def ed_key() -> ed25519.Ed25519PrivateKey:
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def key_pairs(
    rsa_key: rsa.RSAPrivateKey,
    ec256_key: ec.EllipticCurvePrivateKey,
    ec384_key: ec.EllipticCurvePrivateKey,
    ed_key: ed25519.Ed25519PrivateKey,
) -> dict[Algorithm, tuple[EncodingKey, DecodingKey]]:
    """Matching encoding/decoding keys for every algorithm."""
    hmac_pair = (EncodingKey.from_secret(HMAC_SECRET), DecodingKey.from_secret(HMAC_SECRET))
    rsa_pair = (EncodingKey.from_key(rsa_key), DecodingKey.from_key(rsa_key.public_key()))
    return {
        Algorithm.HS256: hmac_pair,
        Algorithm.HS384: hmac_pair,
        Algorithm.HS512: hmac_pair,
        Algorithm.RS256: rsa_pair,
        Algorithm.RS384: rsa_pair,
        Algorithm.RS512: rsa_pair,
        Algorithm.PS256: rsa_pair,
        Algorithm.PS384: rsa_pair,
        Algorithm.PS512: rsa_pair,
        Algorithm.ES256: (
            EncodingKey.from_ec_pem(private_pem(ec256_key)),
            DecodingKey.from_ec_pem(public_pem(ec256_key)),
        ),
        Algorithm.ES384: (
            EncodingKey.from_ec_pem(private_pem(ec384_key)),
            DecodingKey.from_ec_pem(public_pem(ec384_key)),
        ),
        Algorithm.EdDSA: (
            EncodingKey.from_ed_pem(private_pem(ed_key)),
            DecodingKey.from_ed_pem(public_pem(ed_key)),
        ),
    }


@pytest.fixture
def fixed_clock():
    """A clock frozen at ``NOW``."""
    return lambda: NOW
