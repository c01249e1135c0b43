"""Type definitions for published JSON Web Keys and key sets."""

from pydantic import BaseModel, ConfigDict

from jwtcore.core.errors import KeyNotFoundError


class Jwk(BaseModel):
    """Single key entry of a JWKS document."""

    model_config = ConfigDict(frozen=True, extra="allow")

    kty: str
    crv: str | None = None
    n: str | None = None
    e: str | None = None
    x: str | None = None
    y: str | None = None
    k: str | None = None
    kid: str | None = None
    alg: str | None = None
    use: str | None = None
    key_ops: list[str] | None = None


class JwkSet(BaseModel):
    """Ordered set of published keys."""

    model_config = ConfigDict(frozen=True)

    keys: list[Jwk]

    def find(self, kid: str) -> Jwk | None:
        """Return the first key whose ``kid`` equals ``kid`` exactly."""
        for jwk in self.keys:
            if jwk.kid == kid:
                return jwk
        return None

    def get(self, kid: str) -> Jwk:
        """Like :meth:`find` but raise ``KeyNotFoundError`` on a miss."""
        jwk = self.find(kid)
        if jwk is None:
            raise KeyNotFoundError(f"No key with kid {kid!r}")
        return jwk
