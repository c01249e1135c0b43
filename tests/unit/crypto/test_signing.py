"""Tests for raw signing and verification."""

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from jwtcore.core.errors import CryptoFailureError, KeyTypeMismatchError
from jwtcore.crypto.algorithms import Algorithm
from jwtcore.crypto.keys import DecodingKey, EncodingKey
from jwtcore.crypto.signing import sign, verify

MESSAGE = b"hello world"


class TestRoundTrip:
    """Tests for sign followed by verify."""

    @pytest.mark.parametrize("alg", list(Algorithm))
    def test_every_algorithm(self, key_pairs, alg: Algorithm) -> None:
        enc, dec = key_pairs[alg]
        signature = sign(MESSAGE, enc, alg)
        assert verify(signature, MESSAGE, dec, alg) is True

    def test_str_message_is_utf8(self, key_pairs) -> None:
        enc, dec = key_pairs[Algorithm.HS256]
        signature = sign("hello world", enc, Algorithm.HS256)
        assert verify(signature, MESSAGE, dec, Algorithm.HS256)

    @pytest.mark.parametrize("alg", list(Algorithm))
    def test_other_message_fails(self, key_pairs, alg: Algorithm) -> None:
        enc, dec = key_pairs[alg]
        signature = sign(MESSAGE, enc, alg)
        assert verify(signature, b"hello there", dec, alg) is False


class TestSignatureShape:
    """Tests for algorithm-specific signature encodings."""

    @pytest.mark.parametrize(
        ("alg", "length"),
        [
            (Algorithm.HS256, 32),
            (Algorithm.HS384, 48),
            (Algorithm.HS512, 64),
            (Algorithm.ES256, 64),
            (Algorithm.ES384, 96),
            (Algorithm.EdDSA, 64),
            (Algorithm.RS256, 256),
        ],
    )
    def test_fixed_lengths(self, key_pairs, alg: Algorithm, length: int) -> None:
        enc, _ = key_pairs[alg]
        assert len(sign(MESSAGE, enc, alg)) == length

    def test_hmac_is_deterministic(self, key_pairs) -> None:
        enc, _ = key_pairs[Algorithm.HS384]
        assert sign(MESSAGE, enc, Algorithm.HS384) == sign(MESSAGE, enc, Algorithm.HS384)

    def test_pss_is_randomized(self, key_pairs) -> None:
        enc, dec = key_pairs[Algorithm.PS256]
        first = sign(MESSAGE, enc, Algorithm.PS256)
        second = sign(MESSAGE, enc, Algorithm.PS256)
        assert first != second
        assert verify(first, MESSAGE, dec, Algorithm.PS256)
        assert verify(second, MESSAGE, dec, Algorithm.PS256)

    def test_pkcs1_signature_does_not_verify_as_pss(self, key_pairs) -> None:
        enc, dec = key_pairs[Algorithm.RS256]
        signature = sign(MESSAGE, enc, Algorithm.RS256)
        assert verify(signature, MESSAGE, dec, Algorithm.PS256) is False


class TestKeyMismatch:
    """Tests for keys that do not fit the algorithm."""

    def test_secret_cannot_sign_rsa(self) -> None:
        with pytest.raises(KeyTypeMismatchError):
            sign(MESSAGE, EncodingKey.from_secret(b"s"), Algorithm.RS256)

    def test_rsa_public_key_cannot_verify_hmac(self, key_pairs) -> None:
        _, dec = key_pairs[Algorithm.RS256]
        with pytest.raises(KeyTypeMismatchError):
            verify(b"\x00" * 32, MESSAGE, dec, Algorithm.HS256)

    def test_curve_mismatch(self, key_pairs) -> None:
        enc, _ = key_pairs[Algorithm.ES384]
        with pytest.raises(KeyTypeMismatchError):
            sign(MESSAGE, enc, Algorithm.ES256)


class TestMalformedSignatures:
    """Tests for structurally invalid signatures."""

    def test_ec_wrong_length_is_crypto_failure(self, key_pairs) -> None:
        enc, dec = key_pairs[Algorithm.ES256]
        signature = sign(MESSAGE, enc, Algorithm.ES256)
        with pytest.raises(CryptoFailureError, match="64 bytes"):
            verify(signature[:-1], MESSAGE, dec, Algorithm.ES256)

    def test_ec_der_signature_rejected(self, key_pairs, ec256_key) -> None:
        _, dec = key_pairs[Algorithm.ES256]
        der = ec256_key.sign(MESSAGE, ec.ECDSA(hashes.SHA256()))
        if len(der) == 64:
            pytest.skip("DER encoding happened to be 64 bytes")
        with pytest.raises(CryptoFailureError):
            verify(der, MESSAGE, dec, Algorithm.ES256)

    def test_truncated_hmac_is_false(self, key_pairs) -> None:
        enc, dec = key_pairs[Algorithm.HS256]
        signature = sign(MESSAGE, enc, Algorithm.HS256)
        assert verify(signature[:16], MESSAGE, dec, Algorithm.HS256) is False

    def test_wrong_secret_is_false(self) -> None:
        signature = sign(MESSAGE, EncodingKey.from_secret(b"a"), Algorithm.HS256)
        assert not verify(signature, MESSAGE, DecodingKey.from_secret(b"b"), Algorithm.HS256)
