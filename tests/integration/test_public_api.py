"""Smoke test of the top-level package exports."""

from datetime import UTC, datetime

from pydantic import BaseModel

import jwtcore
from jwtcore import DecodingKey, EncodingKey, Header, Validation, decode, encode


class Claims(BaseModel):
    sub: str
    company: str
    exp: int


class TestPublicApi:
    """Tests for the documented entry points."""

    def test_hmac_round_trip(self) -> None:
        claims = Claims(
            sub="b@b.com",
            company="ACME",
            exp=int(datetime.now(UTC).timestamp()) + 10_000,
        )
        token = encode(Header(), claims, EncodingKey.from_secret("secret"))
        data = decode(
            token,
            DecodingKey.from_secret("secret"),
            Validation.new(jwtcore.Algorithm.HS256),
            Claims,
        )
        assert data.claims == claims
        assert data.header.alg is jwtcore.Algorithm.HS256

    def test_exports_are_importable(self) -> None:
        for name in jwtcore.__all__:
            assert hasattr(jwtcore, name)
