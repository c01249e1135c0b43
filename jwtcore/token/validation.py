"""Claim validation policy and the checks applied after verification."""

import math
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from jwtcore.core.errors import (
    ExpiredSignatureError,
    ImmatureSignatureError,
    InvalidAudienceError,
    InvalidIssuerError,
    InvalidSubjectError,
    JSONError,
    MissingRequiredClaimError,
)
from jwtcore.crypto.algorithms import Algorithm

Clock = Callable[[], int | float]


def system_clock() -> int:
    """Current UTC time in whole seconds since the epoch."""
    return int(datetime.now(UTC).timestamp())


class Validation(BaseModel):
    """Caller policy applied to every decoded token.

    An empty ``allowed_algorithms`` set rejects every token. An empty
    ``audience`` set never matches a present ``aud`` claim.
    """

    model_config = ConfigDict(frozen=True)

    allowed_algorithms: frozenset[Algorithm]
    leeway: int = Field(default=0, ge=0)
    validate_exp: bool = True
    validate_nbf: bool = False
    required_claims: frozenset[str] = frozenset()
    audience: frozenset[str] | None = None
    issuer: str | None = None
    subject: str | None = None
    clock: Clock = system_clock

    @classmethod
    def new(cls, *algorithms: Algorithm, **options: Any) -> Self:
        """Build a policy allowing exactly ``algorithms``."""
        return cls(allowed_algorithms=frozenset(algorithms), **options)

    def allows(self, alg_name: Any) -> bool:
        """Check an untrusted header ``alg`` value against the allow-list."""
        return isinstance(alg_name, str) and alg_name in {
            alg.value for alg in self.allowed_algorithms
        }


def _numeric(claims: dict[str, Any], name: str) -> int | float:
    value = claims[name]
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise JSONError(f"Claim {name!r} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise JSONError(f"Claim {name!r} must be a finite number")
    return value


def _audiences(value: Any) -> set[str]:
    if isinstance(value, str):
        return {value}
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return set(value)
    raise InvalidAudienceError("Claim 'aud' must be a string or a list of strings")


def _check_equal(
    claims: dict[str, Any], name: str, expected: str | None, error: type[Exception]
) -> None:
    if expected is None or name not in claims:
        return
    if claims[name] != expected:
        raise error()


def validate_claims(
    claims: dict[str, Any], validation: Validation, now: int | float
) -> None:
    """Apply ``validation`` to the raw claims object at instant ``now``.

    Raises the first failing check's error; missing optional claims pass.
    """
    for name in sorted(validation.required_claims):
        if name not in claims:
            raise MissingRequiredClaimError(name)

    if validation.validate_exp and "exp" in claims:
        if _numeric(claims, "exp") + validation.leeway < now:
            raise ExpiredSignatureError()

    if validation.validate_nbf and "nbf" in claims:
        if _numeric(claims, "nbf") - validation.leeway > now:
            raise ImmatureSignatureError()

    if validation.audience is not None and "aud" in claims:
        if not _audiences(claims["aud"]) & validation.audience:
            raise InvalidAudienceError()

    _check_equal(claims, "iss", validation.issuer, InvalidIssuerError)
    _check_equal(claims, "sub", validation.subject, InvalidSubjectError)
