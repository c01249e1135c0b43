"""Result types produced by token decoding."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from jwtcore.token.header import Header

ClaimsT = TypeVar("ClaimsT")


class TokenData(BaseModel, Generic[ClaimsT]):
    """Decoded header and typed claims of a verified token."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    header: Header
    claims: ClaimsT
