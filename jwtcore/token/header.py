"""JOSE header carried in the first token segment."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from jwtcore.crypto.algorithms import Algorithm


class Header(BaseModel):
    """Token header; only ``alg`` and ``kid`` drive engine behaviour.

    Unknown members are kept and written back unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    typ: str | None = "JWT"
    alg: Algorithm = Algorithm.HS256
    cty: str | None = None
    jku: str | None = None
    jwk: dict[str, Any] | None = None
    kid: str | None = None
    x5u: str | None = None
    x5c: list[str] | None = None
    x5t: str | None = None
    x5t_s256: str | None = Field(default=None, alias="x5t#S256")

    @classmethod
    def new(cls, alg: Algorithm, kid: str | None = None) -> Self:
        """Build a header for ``alg`` with the default ``typ``."""
        return cls(alg=alg, kid=kid)
