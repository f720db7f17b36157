import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from mhyscan.cryptokit import format_rsa_public_key, hmac_sha256, md5, rsa_encrypt

BEGIN = "-----BEGIN PUBLIC KEY-----"
END = "-----END PUBLIC KEY-----"


@pytest.fixture(scope="module")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="module")
def public_pem(private_key):
    return private_key.public_key().public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode("ascii")


def test_hmac_sha256_known_vector():
    assert hmac_sha256("what do ya want for nothing?", "Jefe") == (
        "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    )


def test_hmac_sha256_is_lower_hex_and_key_dependent():
    first = hmac_sha256("message", "secret")
    assert len(first) == 64
    assert first == first.lower()
    assert hmac_sha256("message", "token") != first or False
    assert hmac_sha256("message", "secret") == first


def test_md5_known_values():
    assert md5("") == "d41d8cd98f00b204e9800998ecf8427e"
    assert md5("abc") == "900150983cd24fb0d6963f7d28e17f72"


def test_rsa_encrypt_round_trip(private_key, public_pem):
    cipher = rsa_encrypt("hello world", public_pem)
    plain = private_key.decrypt(base64.b64decode(cipher), padding.PKCS1v15())
    assert plain == b"hello world"


def test_rsa_encrypt_bad_key():
    with pytest.raises(ValueError):
        rsa_encrypt("hello", "not a key")


def test_format_single_line_key_matches_standard_pem(public_pem):
    body = "".join(public_pem.strip().splitlines()[1:-1])
    formatted = format_rsa_public_key(BEGIN + body + END)
    assert formatted == public_pem.strip()


def test_format_wraps_at_64_characters():
    body = "A" * 64 + "B" * 36
    lines = format_rsa_public_key(BEGIN + body + END).split("\n")
    assert lines == [BEGIN, "A" * 64, "B" * 36, END]


def test_formatted_key_is_usable(private_key, public_pem):
    body = "".join(public_pem.strip().splitlines()[1:-1])
    key = format_rsa_public_key(BEGIN + body + END)
    cipher = rsa_encrypt("abc", key)
    assert private_key.decrypt(base64.b64decode(cipher), padding.PKCS1v15()) == b"abc"


@pytest.mark.parametrize("key", ["", "abc" + END, BEGIN + "abc"])
def test_format_rejects_bad_input(key):
    with pytest.raises(ValueError):
        format_rsa_public_key(key)