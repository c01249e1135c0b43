"""Validation settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from jwtcore.core.logging import configure_logging
from jwtcore.crypto.algorithms import Algorithm
from jwtcore.token.validation import Clock, Validation, system_clock

DEFAULT_ALGORITHMS = "RS256"
LEEWAY_DEFAULT = 0


def _split_list(value: str) -> list[str]:
    """Parse a comma-separated list, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


class ValidationSettings(BaseSettings):
    """Token validation policy read from ``JWT_*`` variables."""

    model_config = SettingsConfigDict(env_prefix="JWT_")

    algorithms: str = DEFAULT_ALGORITHMS
    leeway: int = LEEWAY_DEFAULT
    validate_exp: bool = True
    validate_nbf: bool = False
    required_claims: str = ""
    audience: str = ""
    issuer: str | None = None
    subject: str | None = None
    log_level: str = "info"

    def get_algorithm_list(self) -> list[Algorithm]:
        """Parse the configured algorithm names.

        Raises:
            ValueError: a name is not a supported algorithm.
        """
        names = _split_list(self.algorithms)
        unknown = [name for name in names if name not in Algorithm.__members__]
        if unknown:
            raise ValueError(f"Unsupported algorithms: {', '.join(unknown)}")
        return [Algorithm(name) for name in names]

    def get_audience_set(self) -> frozenset[str] | None:
        """Configured audiences, or ``None`` when no audience is expected."""
        audiences = _split_list(self.audience)
        return frozenset(audiences) if audiences else None

    def apply_logging(self) -> None:
        """Configure structured logging at the configured level."""
        configure_logging(self.log_level)

    def to_validation(self, clock: Clock | None = None) -> Validation:
        """Build the ``Validation`` policy these settings describe."""
        return Validation(
            allowed_algorithms=frozenset(self.get_algorithm_list()),
            leeway=self.leeway,
            validate_exp=self.validate_exp,
            validate_nbf=self.validate_nbf,
            required_claims=frozenset(_split_list(self.required_claims)),
            audience=self.get_audience_set(),
            issuer=self.issuer or None,
            subject=self.subject or None,
            clock=clock or system_clock,
        )
