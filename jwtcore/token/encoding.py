"""Compact token assembly."""

from typing import Any

from jwtcore.core.errors import KeyTypeMismatchError
from jwtcore.crypto.algorithms import key_is_compatible
from jwtcore.crypto.keys import EncodingKey
from jwtcore.crypto.signing import sign
from jwtcore.token.header import Header
from jwtcore.token.serialization import base64url_encode, serialize_segment


def encode(header: Header, claims: Any, key: EncodingKey) -> str:
    """Serialize, sign, and join ``header`` and ``claims`` into a token.

    ``claims`` may be a mapping, a pydantic model, or a dataclass.

    Raises:
        KeyTypeMismatchError: ``key`` cannot sign ``header.alg``.
        JSONError: ``claims`` cannot be serialized.
        CryptoFailureError: the signing primitive failed.
    """
    if not key_is_compatible(header.alg, key):
        raise KeyTypeMismatchError(f"{key.family} key cannot sign {header.alg}")
    signing_input = f"{serialize_segment(header)}.{serialize_segment(claims)}"
    signature = sign(signing_input.encode("ascii"), key, header.alg)
    return f"{signing_input}.{base64url_encode(signature)}"
