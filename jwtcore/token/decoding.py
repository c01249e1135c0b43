"""Token splitting, signature verification, and claim validation."""

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from jwtcore.core.errors import (
    AlgorithmNotAllowedError,
    Base64Error,
    CryptoFailureError,
    InvalidSignatureError,
    JSONError,
    MalformedTokenError,
    TokenError,
)
from jwtcore.core.logging import get_logger
from jwtcore.crypto.algorithms import Algorithm
from jwtcore.crypto.keys import DecodingKey
from jwtcore.crypto.signing import verify
from jwtcore.token.header import Header
from jwtcore.token.serialization import base64url_decode, deserialize_segment
from jwtcore.token.types import TokenData
from jwtcore.token.validation import Validation, validate_claims

T = TypeVar("T")

Claims = dict[str, Any]

logger = get_logger(__name__)


@lru_cache(maxsize=64)
def _adapter(claims_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(claims_type)


def _split(token: str) -> tuple[str, str, str]:
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise MalformedTokenError()
    return parts[0], parts[1], parts[2]


def _header_from(raw: dict[str, Any]) -> Header:
    if "alg" not in raw:
        raise JSONError("Header is missing 'alg'")
    try:
        return Header.model_validate(raw)
    except ValidationError as exc:
        raise JSONError(f"Invalid header: {exc.error_count()} error(s)") from exc


def _claims_from(raw: Claims, claims_type: Any) -> Any:
    try:
        return _adapter(claims_type).validate_python(raw)
    except ValidationError as exc:
        raise JSONError(f"Invalid claims: {exc.error_count()} error(s)") from exc


def _allowed_header(segment: str, validation: Validation) -> Header:
    raw = deserialize_segment(segment)
    # Membership is decided on the raw value before the header is trusted.
    alg_name = raw.get("alg")
    if not validation.allows(alg_name):
        raise AlgorithmNotAllowedError(f"Algorithm {alg_name!r} is not allowed")
    return _header_from(raw)


def _verify_signature(
    header_segment: str,
    payload_segment: str,
    signature_segment: str,
    key: DecodingKey,
    alg: Algorithm,
) -> None:
    signing_input = f"{header_segment}.{payload_segment}".encode()
    try:
        signature = base64url_decode(signature_segment)
        valid = verify(signature, signing_input, key, alg)
    except (Base64Error, CryptoFailureError) as exc:
        raise InvalidSignatureError() from exc
    if not valid:
        raise InvalidSignatureError()


def _log_rejection(exc: TokenError, header: Header | None) -> None:
    context: dict[str, Any] = {}
    if header is not None:
        context = {"alg": header.alg.value, "kid": header.kid}
    logger.debug("token_rejected", kind=exc.kind.value, reason=exc.message, **context)


def decode_header(token: str) -> Header:
    """Parse the header without verifying anything.

    Use it to pick a key by ``kid``; the result is not authenticated.
    """
    header_segment, _, _ = _split(token)
    return _header_from(deserialize_segment(header_segment))


def decode(
    token: str,
    key: DecodingKey,
    validation: Validation,
    claims_type: type[T] | Any = Claims,
) -> TokenData[T]:
    """Verify ``token`` with ``key`` and validate its claims.

    The header ``alg`` must be in ``validation.allowed_algorithms`` before
    any signature work happens. The clock is read once.

    Raises:
        TokenError: a classified subclass for the first failing step.
    """
    header: Header | None = None
    try:
        header_segment, payload_segment, signature_segment = _split(token)
        header = _allowed_header(header_segment, validation)
        _verify_signature(
            header_segment, payload_segment, signature_segment, key, header.alg
        )
        raw_claims = deserialize_segment(payload_segment)
        claims = _claims_from(raw_claims, claims_type)
        validate_claims(raw_claims, validation, validation.clock())
    except TokenError as exc:
        _log_rejection(exc, header)
        raise
    return TokenData(header=header, claims=claims)


def insecure_decode(token: str, claims_type: type[T] | Any = Claims) -> TokenData[T]:
    """Parse header and claims with no signature or claim checks.

    Never use the result for authentication.
    """
    header_segment, payload_segment, _ = _split(token)
    header = _header_from(deserialize_segment(header_segment))
    claims = _claims_from(deserialize_segment(payload_segment), claims_type)
    return TokenData(header=header, claims=claims)


def insecure_decode_with_validation(
    token: str,
    validation: Validation,
    claims_type: type[T] | Any = Claims,
) -> TokenData[T]:
    """Like :func:`decode` but skips the signature check.

    The algorithm allow-list and the claim checks still apply.
    """
    header: Header | None = None
    try:
        header_segment, payload_segment, _ = _split(token)
        header = _allowed_header(header_segment, validation)
        raw_claims = deserialize_segment(payload_segment)
        claims = _claims_from(raw_claims, claims_type)
        validate_claims(raw_claims, validation, validation.clock())
    except TokenError as exc:
        _log_rejection(exc, header)
        raise
    return TokenData(header=header, claims=claims)
