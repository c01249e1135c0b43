"""Signature creation and verification dispatched by algorithm family."""

import secrets

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hmac
from cryptography.hazmat.primitives.asymmetric import ec, padding
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from jwtcore.core.errors import CryptoFailureError, KeyTypeMismatchError
from jwtcore.crypto.algorithms import (
    Algorithm,
    AlgorithmFamily,
    family_of,
    hash_of,
    key_is_compatible,
)
from jwtcore.crypto.keys import DecodingKey, EncodingKey


def _as_bytes(message: bytes | str) -> bytes:
    return message.encode() if isinstance(message, str) else message


def _pss(alg: Algorithm) -> padding.PSS:
    digest = hash_of(alg)
    return padding.PSS(mgf=padding.MGF1(digest), salt_length=digest.digest_size)


def _ec_width(key: ec.EllipticCurvePrivateKey | ec.EllipticCurvePublicKey) -> int:
    return (key.curve.key_size + 7) // 8


def _hmac(secret: bytes, message: bytes, alg: Algorithm) -> bytes:
    mac = hmac.HMAC(secret, hash_of(alg))
    mac.update(message)
    return mac.finalize()


def sign(message: bytes | str, key: EncodingKey, alg: Algorithm) -> bytes:
    """Compute the raw signature of ``message`` under ``key`` for ``alg``.

    EC signatures are returned as fixed-width ``r || s``, not DER.

    Raises:
        KeyTypeMismatchError: the key family (or curve) does not fit ``alg``.
        CryptoFailureError: the primitive rejected the key or input.
    """
    if not key_is_compatible(alg, key):
        raise KeyTypeMismatchError(f"{key.family} key cannot sign {alg}")
    data = _as_bytes(message)
    family = family_of(alg)
    try:
        match family:
            case AlgorithmFamily.HMAC:
                return _hmac(key.material, data, alg)
            case AlgorithmFamily.RSA_PKCS1:
                return key.material.sign(data, padding.PKCS1v15(), hash_of(alg))
            case AlgorithmFamily.RSA_PSS:
                return key.material.sign(data, _pss(alg), hash_of(alg))
            case AlgorithmFamily.EC:
                der = key.material.sign(data, ec.ECDSA(hash_of(alg)))
                r, s = decode_dss_signature(der)
                width = _ec_width(key.material)
                return r.to_bytes(width, "big") + s.to_bytes(width, "big")
            case AlgorithmFamily.EDDSA:
                return key.material.sign(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CryptoFailureError(f"{alg} signing failed: {exc}") from exc
    raise CryptoFailureError(f"No signer for {family}")


def verify(
    signature: bytes, message: bytes | str, key: DecodingKey, alg: Algorithm
) -> bool:
    """Check ``signature`` over ``message`` under ``key`` for ``alg``.

    Returns ``False`` for a well-formed signature that does not match.

    Raises:
        KeyTypeMismatchError: the key family (or curve) does not fit ``alg``.
        CryptoFailureError: the signature has an impossible length for
            ``alg`` or the primitive failed for another reason.
    """
    if not key_is_compatible(alg, key):
        raise KeyTypeMismatchError(f"{key.family} key cannot verify {alg}")
    data = _as_bytes(message)
    family = family_of(alg)
    if family is AlgorithmFamily.HMAC:
        expected = _hmac(key.material, data, alg)
        return secrets.compare_digest(expected, signature)
    try:
        match family:
            case AlgorithmFamily.RSA_PKCS1:
                key.material.verify(signature, data, padding.PKCS1v15(), hash_of(alg))
            case AlgorithmFamily.RSA_PSS:
                key.material.verify(signature, data, _pss(alg), hash_of(alg))
            case AlgorithmFamily.EC:
                width = _ec_width(key.material)
                if len(signature) != 2 * width:
                    raise CryptoFailureError(
                        f"{alg} signature must be {2 * width} bytes, got {len(signature)}"
                    )
                r = int.from_bytes(signature[:width], "big")
                s = int.from_bytes(signature[width:], "big")
                key.material.verify(encode_dss_signature(r, s), data, ec.ECDSA(hash_of(alg)))
            case AlgorithmFamily.EDDSA:
                key.material.verify(signature, data)
    except InvalidSignature:
        return False
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CryptoFailureError(f"{alg} verification failed: {exc}") from exc
    return True
