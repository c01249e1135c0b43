"""Create, verify, and validate signed compact JSON Web Tokens."""

from jwtcore.core.errors import (
    AlgorithmNotAllowedError,
    Base64Error,
    CryptoFailureError,
    ErrorKind,
    ExpiredSignatureError,
    ImmatureSignatureError,
    InvalidAudienceError,
    InvalidIssuerError,
    InvalidSignatureError,
    InvalidSubjectError,
    JSONError,
    KeyFormatError,
    KeyNotFoundError,
    KeyTypeMismatchError,
    MalformedTokenError,
    MissingRequiredClaimError,
    TokenError,
)
from jwtcore.crypto.algorithms import Algorithm
from jwtcore.crypto.keys import DecodingKey, EncodingKey
from jwtcore.crypto.signing import sign, verify
from jwtcore.jwk.convert import (
    decoding_key_for_token,
    find_by_kid,
    jwk_to_decoding_key,
    parse_jwks,
)
from jwtcore.jwk.types import Jwk, JwkSet
from jwtcore.token.decoding import (
    decode,
    decode_header,
    insecure_decode,
    insecure_decode_with_validation,
)
from jwtcore.token.encoding import encode
from jwtcore.token.header import Header
from jwtcore.token.types import TokenData
from jwtcore.token.validation import Validation

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "AlgorithmNotAllowedError",
    "Base64Error",
    "CryptoFailureError",
    "DecodingKey",
    "EncodingKey",
    "ErrorKind",
    "ExpiredSignatureError",
    "Header",
    "ImmatureSignatureError",
    "InvalidAudienceError",
    "InvalidIssuerError",
    "InvalidSignatureError",
    "InvalidSubjectError",
    "JSONError",
    "Jwk",
    "JwkSet",
    "KeyFormatError",
    "KeyNotFoundError",
    "KeyTypeMismatchError",
    "MalformedTokenError",
    "MissingRequiredClaimError",
    "TokenData",
    "TokenError",
    "Validation",
    "decode",
    "decode_header",
    "decoding_key_for_token",
    "encode",
    "find_by_kid",
    "insecure_decode",
    "insecure_decode_with_validation",
    "jwk_to_decoding_key",
    "parse_jwks",
    "sign",
    "verify",
]
