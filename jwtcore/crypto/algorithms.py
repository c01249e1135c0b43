"""Supported signing algorithms and the key shape each one requires."""

from enum import StrEnum
from typing import Protocol

from cryptography.hazmat.primitives import hashes


class Algorithm(StrEnum):
    """JOSE algorithm names accepted in the ``alg`` header."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    ES256 = "ES256"
    ES384 = "ES384"
    EdDSA = "EdDSA"


class AlgorithmFamily(StrEnum):
    """Signature scheme behind an algorithm."""

    HMAC = "HMAC"
    RSA_PKCS1 = "RSA_PKCS1"
    RSA_PSS = "RSA_PSS"
    EC = "EC"
    EDDSA = "EdDSA"


class KeyFamily(StrEnum):
    """Kind of key material held by an encoding or decoding key."""

    SECRET = "secret"
    RSA = "rsa"
    EC = "ec"
    ED = "ed"


class DigestName(StrEnum):
    """Digest fixed by an algorithm."""

    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"
    NONE = "none"


class KeyShape(Protocol):
    """Anything exposing the family and curve of its key material."""

    @property
    def family(self) -> KeyFamily: ...

    @property
    def curve(self) -> str | None: ...


_FAMILIES: dict[Algorithm, AlgorithmFamily] = {
    Algorithm.HS256: AlgorithmFamily.HMAC,
    Algorithm.HS384: AlgorithmFamily.HMAC,
    Algorithm.HS512: AlgorithmFamily.HMAC,
    Algorithm.RS256: AlgorithmFamily.RSA_PKCS1,
    Algorithm.RS384: AlgorithmFamily.RSA_PKCS1,
    Algorithm.RS512: AlgorithmFamily.RSA_PKCS1,
    Algorithm.PS256: AlgorithmFamily.RSA_PSS,
    Algorithm.PS384: AlgorithmFamily.RSA_PSS,
    Algorithm.PS512: AlgorithmFamily.RSA_PSS,
    Algorithm.ES256: AlgorithmFamily.EC,
    Algorithm.ES384: AlgorithmFamily.EC,
    Algorithm.EdDSA: AlgorithmFamily.EDDSA,
}

_DIGESTS: dict[Algorithm, DigestName] = {
    Algorithm.HS256: DigestName.SHA256,
    Algorithm.HS384: DigestName.SHA384,
    Algorithm.HS512: DigestName.SHA512,
    Algorithm.RS256: DigestName.SHA256,
    Algorithm.RS384: DigestName.SHA384,
    Algorithm.RS512: DigestName.SHA512,
    Algorithm.PS256: DigestName.SHA256,
    Algorithm.PS384: DigestName.SHA384,
    Algorithm.PS512: DigestName.SHA512,
    Algorithm.ES256: DigestName.SHA256,
    Algorithm.ES384: DigestName.SHA384,
    Algorithm.EdDSA: DigestName.NONE,
}

_KEY_FAMILIES: dict[AlgorithmFamily, KeyFamily] = {
    AlgorithmFamily.HMAC: KeyFamily.SECRET,
    AlgorithmFamily.RSA_PKCS1: KeyFamily.RSA,
    AlgorithmFamily.RSA_PSS: KeyFamily.RSA,
    AlgorithmFamily.EC: KeyFamily.EC,
    AlgorithmFamily.EDDSA: KeyFamily.ED,
}

# JWK curve names; EC algorithms are bound to exactly one curve.
_CURVES: dict[Algorithm, str] = {
    Algorithm.ES256: "P-256",
    Algorithm.ES384: "P-384",
    Algorithm.EdDSA: "Ed25519",
}

_HASHES: dict[DigestName, type[hashes.HashAlgorithm]] = {
    DigestName.SHA256: hashes.SHA256,
    DigestName.SHA384: hashes.SHA384,
    DigestName.SHA512: hashes.SHA512,
}


def family_of(alg: Algorithm) -> AlgorithmFamily:
    """Return the signature scheme used by ``alg``."""
    return _FAMILIES[alg]


def digest_of(alg: Algorithm) -> DigestName:
    """Return the digest fixed by ``alg`` (``NONE`` for EdDSA)."""
    return _DIGESTS[alg]


def hash_of(alg: Algorithm) -> hashes.HashAlgorithm:
    """Return a fresh ``cryptography`` hash instance for ``alg``."""
    digest = digest_of(alg)
    if digest is DigestName.NONE:
        raise ValueError(f"{alg} does not pre-digest its message")
    return _HASHES[digest]()


def required_key_family(alg: Algorithm) -> KeyFamily:
    """Return the key family that ``alg`` signs and verifies with."""
    return _KEY_FAMILIES[family_of(alg)]


def required_curve(alg: Algorithm) -> str | None:
    """Return the curve ``alg`` is bound to, if any."""
    return _CURVES.get(alg)


def key_is_compatible(alg: Algorithm, key: KeyShape) -> bool:
    """Check that ``key`` has the family (and curve) ``alg`` requires."""
    if key.family is not required_key_family(alg):
        return False
    curve = required_curve(alg)
    return curve is None or key.curve == curve
