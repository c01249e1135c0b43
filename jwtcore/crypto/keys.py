"""Encoding and decoding key material for every supported key family."""

import base64
from typing import Any, ClassVar, Literal, Self

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from pydantic import BaseModel, ConfigDict, Field, model_validator

from jwtcore.core.errors import Base64Error, KeyFormatError
from jwtcore.crypto.algorithms import KeyFamily
from jwtcore.token.serialization import base64url_decode, base64url_to_int

RSA_MIN_MODULUS_BITS = 2048

_CURVES: dict[str, ec.EllipticCurve] = {
    "P-256": ec.SECP256R1(),
    "P-384": ec.SECP384R1(),
}
_CURVE_NAMES = {curve.name: name for name, curve in _CURVES.items()}
_ED25519_KEY_BYTES = 32

PrivateKey = rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey | ed25519.Ed25519PrivateKey
PublicKey = rsa.RSAPublicKey | ec.EllipticCurvePublicKey | ed25519.Ed25519PublicKey
_Container = Literal["pem", "der"]


def _load_private(data: bytes | str, container: _Container) -> PrivateKey:
    raw = data.encode() if isinstance(data, str) else data
    try:
        if container == "pem":
            key = serialization.load_pem_private_key(raw, password=None)
        else:
            key = serialization.load_der_private_key(raw, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"Cannot load private key: {exc}") from exc
    if not isinstance(
        key, rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey | ed25519.Ed25519PrivateKey
    ):
        raise KeyFormatError(f"Unsupported private key type: {type(key).__name__}")
    return key


def _load_public(data: bytes | str, container: _Container) -> PublicKey:
    raw = data.encode() if isinstance(data, str) else data
    try:
        if container == "pem":
            key = serialization.load_pem_public_key(raw)
        else:
            key = serialization.load_der_public_key(raw)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"Cannot load public key: {exc}") from exc
    if not isinstance(
        key, rsa.RSAPublicKey | ec.EllipticCurvePublicKey | ed25519.Ed25519PublicKey
    ):
        raise KeyFormatError(f"Unsupported public key type: {type(key).__name__}")
    return key


def _family_of_key(key: PrivateKey | PublicKey) -> KeyFamily:
    """Classify a loaded key and reject shapes no algorithm can use."""
    if isinstance(key, rsa.RSAPrivateKey | rsa.RSAPublicKey):
        if key.key_size < RSA_MIN_MODULUS_BITS:
            raise KeyFormatError(
                f"RSA modulus of {key.key_size} bits is below {RSA_MIN_MODULUS_BITS}"
            )
        return KeyFamily.RSA
    if isinstance(key, ec.EllipticCurvePrivateKey | ec.EllipticCurvePublicKey):
        if key.curve.name not in _CURVE_NAMES:
            raise KeyFormatError(f"Unsupported elliptic curve: {key.curve.name}")
        return KeyFamily.EC
    if isinstance(key, ed25519.Ed25519PrivateKey | ed25519.Ed25519PublicKey):
        return KeyFamily.ED
    raise KeyFormatError(f"Unsupported key type: {type(key).__name__}")


def _expect(key: PrivateKey | PublicKey, family: KeyFamily) -> PrivateKey | PublicKey:
    actual = _family_of_key(key)
    if actual is not family:
        raise KeyFormatError(f"Expected a {family} key, got {actual}")
    return key


def _secret_bytes(secret: bytes | str) -> bytes:
    return secret.encode() if isinstance(secret, str) else bytes(secret)


def _standard_base64(secret: str | bytes) -> bytes:
    try:
        return base64.b64decode(secret, validate=True)
    except ValueError as exc:
        raise KeyFormatError(f"Secret is not valid base64: {exc}") from exc


def _b64url_field(name: str, value: str) -> bytes:
    try:
        return base64url_decode(value)
    except Base64Error as exc:
        raise KeyFormatError(f"Field {name!r} is not unpadded base64url") from exc


def _b64url_int(name: str, value: str) -> int:
    if not value:
        raise KeyFormatError(f"Field {name!r} is empty")
    try:
        return base64url_to_int(value)
    except Base64Error as exc:
        raise KeyFormatError(f"Field {name!r} is not unpadded base64url") from exc


class _KeyMaterial(BaseModel):
    """Shared shape of encoding and decoding keys."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    _holds: ClassVar[Any] = bytes

    family: KeyFamily
    material: Any = Field(repr=False)

    @model_validator(mode="before")
    @classmethod
    def _material_is_holdable(cls, data: Any) -> Any:
        if isinstance(data, dict) and "material" in data:
            material = data["material"]
            if not isinstance(material, cls._holds):
                raise KeyFormatError(
                    f"{cls.__name__} cannot hold {type(material).__name__}"
                )
        return data

    @model_validator(mode="after")
    def _family_matches_material(self) -> Self:
        if isinstance(self.material, bytes):
            actual = KeyFamily.SECRET
        else:
            actual = _family_of_key(self.material)
        if actual is not self.family:
            raise KeyFormatError(f"{self.family} key cannot hold {actual} material")
        return self

    @property
    def curve(self) -> str | None:
        """JWK curve name for EC and Ed25519 keys."""
        material = self.material
        if isinstance(material, ec.EllipticCurvePrivateKey | ec.EllipticCurvePublicKey):
            return _CURVE_NAMES[material.curve.name]
        if self.family is KeyFamily.ED:
            return "Ed25519"
        return None


class EncodingKey(_KeyMaterial):
    """Secret or private key used to sign tokens."""

    _holds: ClassVar[Any] = bytes | PrivateKey

    material: bytes | PrivateKey = Field(repr=False)

    @classmethod
    def from_secret(cls, secret: bytes | str) -> Self:
        """Build an HMAC key from raw secret bytes."""
        return cls(family=KeyFamily.SECRET, material=_secret_bytes(secret))

    @classmethod
    def from_base64_secret(cls, secret: str | bytes) -> Self:
        """Build an HMAC key from a standard-base64 encoded secret."""
        return cls(family=KeyFamily.SECRET, material=_standard_base64(secret))

    @classmethod
    def from_key(cls, key: PrivateKey) -> Self:
        """Wrap an already loaded ``cryptography`` private key."""
        return cls(family=_family_of_key(key), material=key)

    @classmethod
    def from_rsa_pem(cls, pem: bytes | str) -> Self:
        """Load a PKCS#1 or PKCS#8 PEM RSA private key."""
        key = _expect(_load_private(pem, "pem"), KeyFamily.RSA)
        return cls(family=KeyFamily.RSA, material=key)

    @classmethod
    def from_rsa_der(cls, der: bytes) -> Self:
        """Load a PKCS#1 or PKCS#8 DER RSA private key."""
        key = _expect(_load_private(der, "der"), KeyFamily.RSA)
        return cls(family=KeyFamily.RSA, material=key)

    @classmethod
    def from_ec_pem(cls, pem: bytes | str) -> Self:
        """Load a SEC1 or PKCS#8 PEM EC private key."""
        key = _expect(_load_private(pem, "pem"), KeyFamily.EC)
        return cls(family=KeyFamily.EC, material=key)

    @classmethod
    def from_ec_der(cls, der: bytes) -> Self:
        """Load a SEC1 or PKCS#8 DER EC private key."""
        key = _expect(_load_private(der, "der"), KeyFamily.EC)
        return cls(family=KeyFamily.EC, material=key)

    @classmethod
    def from_ed_pem(cls, pem: bytes | str) -> Self:
        """Load a PKCS#8 PEM Ed25519 private key."""
        key = _expect(_load_private(pem, "pem"), KeyFamily.ED)
        return cls(family=KeyFamily.ED, material=key)

    @classmethod
    def from_ed_der(cls, der: bytes) -> Self:
        """Load a PKCS#8 DER Ed25519 private key."""
        key = _expect(_load_private(der, "der"), KeyFamily.ED)
        return cls(family=KeyFamily.ED, material=key)


class DecodingKey(_KeyMaterial):
    """Secret or public key used to verify tokens."""

    _holds: ClassVar[Any] = bytes | PublicKey

    material: bytes | PublicKey = Field(repr=False)

    @classmethod
    def from_secret(cls, secret: bytes | str) -> Self:
        """Build an HMAC key from the same raw secret used for signing."""
        return cls(family=KeyFamily.SECRET, material=_secret_bytes(secret))

    @classmethod
    def from_base64_secret(cls, secret: str | bytes) -> Self:
        """Build an HMAC key from a standard-base64 encoded secret."""
        return cls(family=KeyFamily.SECRET, material=_standard_base64(secret))

    @classmethod
    def from_key(cls, key: PublicKey) -> Self:
        """Wrap an already loaded ``cryptography`` public key."""
        return cls(family=_family_of_key(key), material=key)

    @classmethod
    def from_rsa_pem(cls, pem: bytes | str) -> Self:
        """Load a PKCS#1 or SubjectPublicKeyInfo PEM RSA public key."""
        key = _expect(_load_public(pem, "pem"), KeyFamily.RSA)
        return cls(family=KeyFamily.RSA, material=key)

    @classmethod
    def from_rsa_der(cls, der: bytes) -> Self:
        """Load a PKCS#1 or SubjectPublicKeyInfo DER RSA public key."""
        key = _expect(_load_public(der, "der"), KeyFamily.RSA)
        return cls(family=KeyFamily.RSA, material=key)

    @classmethod
    def from_rsa_components(cls, n: str, e: str) -> Self:
        """Build an RSA public key from base64url modulus and exponent."""
        modulus = _b64url_int("n", n)
        exponent = _b64url_int("e", e)
        try:
            key = rsa.RSAPublicNumbers(exponent, modulus).public_key()
        except ValueError as exc:
            raise KeyFormatError(f"Invalid RSA components: {exc}") from exc
        return cls(family=_family_of_key(key), material=key)

    @classmethod
    def from_ec_pem(cls, pem: bytes | str) -> Self:
        """Load a SubjectPublicKeyInfo PEM EC public key."""
        key = _expect(_load_public(pem, "pem"), KeyFamily.EC)
        return cls(family=KeyFamily.EC, material=key)

    @classmethod
    def from_ec_der(cls, der: bytes) -> Self:
        """Load a SubjectPublicKeyInfo DER EC public key."""
        key = _expect(_load_public(der, "der"), KeyFamily.EC)
        return cls(family=KeyFamily.EC, material=key)

    @classmethod
    def from_ec_components(cls, crv: str, x: str, y: str) -> Self:
        """Build an EC public key from a JWK curve name and coordinates."""
        curve = _CURVES.get(crv)
        if curve is None:
            raise KeyFormatError(f"Unsupported elliptic curve: {crv}")
        width = (curve.key_size + 7) // 8
        x_raw = _b64url_field("x", x)
        y_raw = _b64url_field("y", y)
        if len(x_raw) != width or len(y_raw) != width:
            raise KeyFormatError(f"Coordinates for {crv} must be {width} bytes")
        numbers = ec.EllipticCurvePublicNumbers(
            int.from_bytes(x_raw, "big"), int.from_bytes(y_raw, "big"), curve
        )
        try:
            key = numbers.public_key()
        except ValueError as exc:
            raise KeyFormatError(f"Invalid EC point: {exc}") from exc
        return cls(family=KeyFamily.EC, material=key)

    @classmethod
    def from_ed_pem(cls, pem: bytes | str) -> Self:
        """Load a SubjectPublicKeyInfo PEM Ed25519 public key."""
        key = _expect(_load_public(pem, "pem"), KeyFamily.ED)
        return cls(family=KeyFamily.ED, material=key)

    @classmethod
    def from_ed_der(cls, der: bytes) -> Self:
        """Load a SubjectPublicKeyInfo DER Ed25519 public key."""
        key = _expect(_load_public(der, "der"), KeyFamily.ED)
        return cls(family=KeyFamily.ED, material=key)

    @classmethod
    def from_ed_components(cls, x: str) -> Self:
        """Build an Ed25519 public key from its base64url ``x`` member."""
        raw = _b64url_field("x", x)
        if len(raw) != _ED25519_KEY_BYTES:
            raise KeyFormatError(f"Ed25519 keys must be {_ED25519_KEY_BYTES} bytes")
        try:
            key = ed25519.Ed25519PublicKey.from_public_bytes(raw)
        except ValueError as exc:
            raise KeyFormatError(f"Invalid Ed25519 key: {exc}") from exc
        return cls(family=KeyFamily.ED, material=key)

