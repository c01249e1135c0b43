"""Conversion of published JWKs into decoding keys."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from jwtcore.core.errors import Base64Error, JSONError, KeyFormatError, KeyNotFoundError
from jwtcore.core.logging import get_logger
from jwtcore.crypto.keys import DecodingKey
from jwtcore.jwk.types import Jwk, JwkSet
from jwtcore.token.decoding import decode_header
from jwtcore.token.serialization import base64url_decode, parse_json_object

logger = get_logger(__name__)


def _require(jwk: Jwk, *names: str) -> list[str]:
    values = [getattr(jwk, name) for name in names]
    missing = [name for name, value in zip(names, values) if not value]
    if missing:
        raise KeyFormatError(
            f"JWK of type {jwk.kty} is missing {', '.join(missing)}"
        )
    return values


def _as_jwk(jwk: Jwk | Mapping[str, Any]) -> Jwk:
    if isinstance(jwk, Jwk):
        return jwk
    try:
        return Jwk.model_validate(jwk)
    except ValidationError as exc:
        raise KeyFormatError(f"Invalid JWK: {exc.error_count()} error(s)") from exc


def jwk_to_decoding_key(jwk: Jwk | Mapping[str, Any]) -> DecodingKey:
    """Build a ``DecodingKey`` from a JWK by dispatching on ``kty``.

    Raises:
        KeyFormatError: unknown ``kty`` or missing/invalid members.
    """
    entry = _as_jwk(jwk)
    try:
        match entry.kty:
            case "RSA":
                n, e = _require(entry, "n", "e")
                return DecodingKey.from_rsa_components(n, e)
            case "EC":
                crv, x, y = _require(entry, "crv", "x", "y")
                return DecodingKey.from_ec_components(crv, x, y)
            case "OKP":
                crv, x = _require(entry, "crv", "x")
                if crv != "Ed25519":
                    raise KeyFormatError(f"Unsupported OKP curve: {crv}")
                return DecodingKey.from_ed_components(x)
            case "oct":
                (k,) = _require(entry, "k")
                try:
                    return DecodingKey.from_secret(base64url_decode(k))
                except Base64Error as exc:
                    raise KeyFormatError("Field 'k' is not unpadded base64url") from exc
            case _:
                raise KeyFormatError(f"Unsupported key type: {entry.kty}")
    except KeyFormatError as exc:
        logger.debug("jwk_rejected", kid=entry.kid, kty=entry.kty, reason=exc.message)
        raise


def parse_jwks(document: str | bytes | Mapping[str, Any]) -> JwkSet:
    """Parse a ``{"keys": [...]}`` document.

    Raises:
        JSONError: the document is not JSON or lacks a valid ``keys`` list.
    """
    if isinstance(document, Mapping):
        raw: Any = document
    else:
        data = document.encode() if isinstance(document, str) else document
        raw = parse_json_object(data)
    try:
        return JwkSet.model_validate(raw)
    except ValidationError as exc:
        raise JSONError(f"Invalid JWKS: {exc.error_count()} error(s)") from exc


def find_by_kid(jwks: JwkSet, kid: str) -> Jwk | None:
    """Return the first key in ``jwks`` whose ``kid`` matches exactly."""
    return jwks.find(kid)


def decoding_key_for_token(jwks: JwkSet, token: str) -> DecodingKey:
    """Pick the key named by the token's unverified ``kid`` header.

    Selecting a key authenticates nothing; pass the result to ``decode``.

    Raises:
        KeyNotFoundError: the header has no ``kid`` or no key matches it.
        KeyFormatError: the matching key cannot be converted.
    """
    kid = decode_header(token).kid
    if kid is None:
        raise KeyNotFoundError("Token header has no kid")
    return jwk_to_decoding_key(jwks.get(kid))
