import pytest

from calcrypt.macs import sha256_hmac_new


def _mac(key_bytes, *chunks):
    m = sha256_hmac_new(key_bytes)
    for chunk in chunks:
        m.update(chunk)
    return m.finalize()


def test_rfc4231_case_1():
    result = _mac(bytes([0x0B] * 20), b"Hi There")
    assert result.hex() == (
        "b0344c61d8db38535ca8afceaf0bf12b881dc200c9833da726e9376c2e32cff7"
    )


def test_incremental_matches_single_update():
    secret = b"secret"
    data = bytes(range(256)) * 3
    assert _mac(secret, data) == _mac(secret, data[:1], data[1:200], memoryview(data[200:]))


def test_digest_size_and_name():
    secret = b"secret"
    m = sha256_hmac_new(secret)
    assert m.alg_name == "SHA256 HMAC"
    assert m.digest_size == 32
    assert len(m.finalize()) == 32


def test_different_keys_give_different_macs():
    assert _mac(bytes([1] * 16), b"message") != _mac(bytes([2] * 16), b"message")


def test_accepts_bytearray_key():
    assert _mac(bytearray([7] * 32), b"payload") == _mac(bytes([7] * 32), b"payload")


def test_update_after_finalize_raises():
    secret = b"secret"
    m = sha256_hmac_new(secret)
    m.finalize()
    assert m.good is False
    with pytest.raises(RuntimeError):
        m.update(b"more")


def test_double_finalize_raises():
    secret = b"secret"
    m = sha256_hmac_new(secret)
    m.update(b"x")
    m.finalize()
    with pytest.raises(RuntimeError):
        m.finalize()