"""Classified errors raised by token, key, and key-set operations."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Flat classification of every failure the engine reports."""

    MALFORMED = "Malformed"
    BASE64 = "Base64Error"
    JSON = "JsonError"
    KEY_FORMAT = "KeyFormat"
    KEY_TYPE_MISMATCH = "KeyTypeMismatch"
    KEY_NOT_FOUND = "KeyNotFound"
    ALGORITHM_NOT_ALLOWED = "AlgorithmNotAllowed"
    INVALID_SIGNATURE = "InvalidSignature"
    EXPIRED_SIGNATURE = "ExpiredSignature"
    IMMATURE_SIGNATURE = "ImmatureSignature"
    MISSING_REQUIRED_CLAIM = "MissingRequiredClaim"
    INVALID_AUDIENCE = "InvalidAudience"
    INVALID_ISSUER = "InvalidIssuer"
    INVALID_SUBJECT = "InvalidSubject"
    CRYPTO_FAILURE = "CryptoFailure"


class TokenError(Exception):
    """Base class for all classified failures."""

    kind: ErrorKind = ErrorKind.MALFORMED
    default_message = "Token error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class MalformedTokenError(TokenError):
    kind = ErrorKind.MALFORMED
    default_message = "Token must have exactly three non-empty segments"


class Base64Error(TokenError):
    kind = ErrorKind.BASE64
    default_message = "Segment is not valid unpadded base64url"


class JSONError(TokenError):
    kind = ErrorKind.JSON
    default_message = "Segment is not a valid JSON object"


class KeyFormatError(TokenError):
    kind = ErrorKind.KEY_FORMAT
    default_message = "Key material is malformed"


class KeyTypeMismatchError(TokenError):
    kind = ErrorKind.KEY_TYPE_MISMATCH
    default_message = "Key family does not match the algorithm"


class KeyNotFoundError(TokenError):
    kind = ErrorKind.KEY_NOT_FOUND
    default_message = "No key matches the requested kid"


class AlgorithmNotAllowedError(TokenError):
    kind = ErrorKind.ALGORITHM_NOT_ALLOWED
    default_message = "Token algorithm is not allowed"


class InvalidSignatureError(TokenError):
    kind = ErrorKind.INVALID_SIGNATURE
    default_message = "Signature verification failed"


class ExpiredSignatureError(TokenError):
    kind = ErrorKind.EXPIRED_SIGNATURE
    default_message = "Token has expired"


class ImmatureSignatureError(TokenError):
    kind = ErrorKind.IMMATURE_SIGNATURE
    default_message = "Token is not valid yet"


class MissingRequiredClaimError(TokenError):
    """Raised when a claim listed in ``required_claims`` is absent."""

    kind = ErrorKind.MISSING_REQUIRED_CLAIM

    def __init__(self, claim: str) -> None:
        self.claim = claim
        super().__init__(f"Missing required claim: {claim}")


class InvalidAudienceError(TokenError):
    kind = ErrorKind.INVALID_AUDIENCE
    default_message = "Invalid audience"


class InvalidIssuerError(TokenError):
    kind = ErrorKind.INVALID_ISSUER
    default_message = "Invalid issuer"


class InvalidSubjectError(TokenError):
    kind = ErrorKind.INVALID_SUBJECT
    default_message = "Invalid subject"


class CryptoFailureError(TokenError):
    kind = ErrorKind.CRYPTO_FAILURE
    default_message = "Cryptographic primitive failed"
