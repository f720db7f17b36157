"""RSA encryption, PEM key formatting and hex digests."""

from __future__ import annotations

import base64
import hashlib
import hmac

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

_BEGIN_MARKER = "-----BEGIN PUBLIC KEY-----"
_END_MARKER = "-----END PUBLIC KEY-----"
_PEM_LINE_WIDTH = 64


def rsa_encrypt(message: str, public_key: str) -> str:
    """Encrypt ``message`` with a PEM RSA public key (PKCS#1 v1.5), base64 encoded."""
    try:
        key = serialization.load_pem_public_key(public_key.encode("utf-8"))
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise ValueError("failed to load public key") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise ValueError("failed to load public key: not an RSA key")
    try:
        encrypted = key.encrypt(message.encode("utf-8"), padding.PKCS1v15())
    except ValueError as exc:
        raise ValueError("failed to encrypt message") from exc
    return base64.b64encode(encrypted).decode("ascii")


def format_rsa_public_key(key: str) -> str:
    """Rewrap a single-line PEM public key into 64-character lines."""
    if not key:
        raise ValueError("input key is empty")
    begin = key.find(_BEGIN_MARKER)
    if begin == -1:
        raise ValueError("input key does not contain BEGIN PUBLIC KEY marker")
    end = key.find(_END_MARKER)
    if end == -1:
        raise ValueError("input key does not contain END PUBLIC KEY marker")
    start = begin + len(_BEGIN_MARKER)
    body = key[start:start + max(end - len(_BEGIN_MARKER), 0)]
    lines = [_BEGIN_MARKER]
    lines.extend(body[i:i + _PEM_LINE_WIDTH] for i in range(0, len(body), _PEM_LINE_WIDTH))
    lines.append(_END_MARKER)
    return "\n".join(lines)


def hmac_sha256(message: str, key: str) -> str:
    """Return the lower-case hex HMAC-SHA256 of ``message`` under ``key``."""
    return hmac.new(key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def md5(text: str) -> str:
    """Return the lower-case hex MD5 digest of ``text``."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()