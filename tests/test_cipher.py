import pytest

from calcrypt.cipher import (
    BufferTooLargeError,
    CalError,
    InvalidArgumentError,
    InvalidKeyLengthError,
    InvalidMaterialSizeError,
    InvalidStateError,
    SymmetricCipher,
    generate_iv,
    generate_key,
)

KEY_LEN = 32
BLOCK = 16
INT_MAX = 2**31 - 1


class _EchoCipher(SymmetricCipher):
    alg_name = "ECHO 256"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail = False
        self.resets = 0
        self.pending = b""

    def _encrypt(self, data):
        if self.fail:
            raise InvalidArgumentError("rejected")
        self.pending += data
        return b""

    def _decrypt(self, data):
        return self._encrypt(data)

    def _finalize_encryption(self):
        out, self.pending = self.pending, b""
        return out

    def _finalize_decryption(self):
        return self._finalize_encryption()

    def _reset(self):
        self.resets += 1
        self.pending = b""


class _NoIvCipher(_EchoCipher):
    iv_size = 0


class _CounterCipher(_EchoCipher):
    counter_mode = True


class _HugeInput:
    def __len__(self):
        return INT_MAX


def test_generate_key_length():
    assert len(generate_key(KEY_LEN)) == KEY_LEN
    assert generate_key(0) == b""


def test_generate_key_random():
    keys = {generate_key(KEY_LEN) for _ in range(8)}
    assert len(keys) == 8


def test_generate_iv_plain_length():
    assert len(generate_iv(BLOCK, False)) == BLOCK


def test_generate_iv_counter_mode_starts_at_one():
    iv = generate_iv(BLOCK, True)
    assert len(iv) == BLOCK
    assert iv[-4:] == b"\x00\x00\x00\x01"


def test_generate_iv_counter_mode_too_short():
    with pytest.raises(ValueError):
        generate_iv(3, True)


def test_generated_materials_when_missing():
    cipher = _EchoCipher()
    assert len(cipher.key) == len(generate_key(KEY_LEN))
    assert len(cipher.iv) == len(generate_iv(BLOCK, False))
    assert cipher.good is True


def test_counter_mode_generated_iv():
    cipher = _CounterCipher()
    assert cipher.iv[-4:] == generate_iv(BLOCK, True)[-4:]
    assert cipher.iv[-4:] == b"\x00\x00\x00\x01"


def test_given_materials_are_kept():
    key = generate_key(KEY_LEN)
    iv = generate_iv(BLOCK, False)
    cipher = _EchoCipher(key, iv, aad=b"aad", tag=b"t" * 16)
    assert cipher.key == key
    assert cipher.iv == iv
    assert cipher.aad == b"aad"
    assert cipher.tag == b"t" * 16


def test_validate_materials_fails():
    with pytest.raises(InvalidMaterialSizeError):
        _EchoCipher(generate_key(KEY_LEN), generate_iv(BLOCK - 1, False))
    with pytest.raises(InvalidMaterialSizeError):
        _EchoCipher(generate_key(KEY_LEN), generate_iv(BLOCK + 1, False))
    with pytest.raises(InvalidKeyLengthError):
        _EchoCipher(generate_key(KEY_LEN - 1), generate_iv(BLOCK, False))
    with pytest.raises(InvalidKeyLengthError):
        _EchoCipher(generate_key(KEY_LEN - 1), generate_iv(KEY_LEN + 1, False))


def test_no_iv_cipher_rejects_iv():
    with pytest.raises(InvalidMaterialSizeError):
        _NoIvCipher(generate_key(KEY_LEN), generate_iv(BLOCK, False))
    assert _NoIvCipher(generate_key(KEY_LEN)).iv == b""


def test_errors_share_base_class():
    assert issubclass(InvalidKeyLengthError, CalError)
    with pytest.raises(CalError):
        _EchoCipher(generate_key(5))


def test_input_too_large_keeps_cipher_good():
    cipher = _EchoCipher(generate_key(KEY_LEN), generate_iv(BLOCK, False))
    with pytest.raises(BufferTooLargeError):
        SymmetricCipher.encrypt(cipher, _HugeInput())
    assert cipher.good is True
    with pytest.raises(BufferTooLargeError):
        SymmetricCipher.decrypt(cipher, _HugeInput())
    assert cipher.good is True


def test_stream_roundtrip_through_hooks():
    cipher = _EchoCipher(generate_key(KEY_LEN), generate_iv(BLOCK, False))
    assert SymmetricCipher.encrypt(cipher, b"hello ") == b""
    assert SymmetricCipher.encrypt(cipher, bytearray(b"world")) == b""
    assert SymmetricCipher.finalize_encryption(cipher) == b"hello world"


def test_failure_marks_bad_then_invalid_state():
    cipher = _EchoCipher(generate_key(KEY_LEN), generate_iv(BLOCK, False))
    cipher.fail = True
    with pytest.raises(InvalidArgumentError):
        SymmetricCipher.encrypt(cipher, b"data")
    assert cipher.good is False
    cipher.fail = False
    with pytest.raises(InvalidStateError):
        SymmetricCipher.encrypt(cipher, b"data")
    with pytest.raises(InvalidStateError):
        SymmetricCipher.finalize_decryption(cipher)


def test_reset_restores_good_state():
    cipher = _EchoCipher(generate_key(KEY_LEN), generate_iv(BLOCK, False))
    cipher.fail = True
    with pytest.raises(InvalidArgumentError):
        SymmetricCipher.decrypt(cipher, b"data")
    cipher.fail = False
    SymmetricCipher.reset(cipher)
    assert cipher.good is True
    assert cipher.resets == 1
    assert SymmetricCipher.decrypt(cipher, b"abc") == b""
    assert SymmetricCipher.finalize_decryption(cipher) == b"abc"