"""Common behaviour for the AES-256 symmetric ciphers: materials, state and errors."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import ClassVar, Sized

AES_256_KEY_BYTE_LEN = 32
AES_256_KEY_BIT_LEN = AES_256_KEY_BYTE_LEN * 8
AES_256_CIPHER_BLOCK_SIZE = 16

_INT_MAX = 2**31 - 1
_COUNTER_LEN = 4


class CalError(Exception):
    """Base class for every error raised by the cipher layer."""


class InvalidStateError(CalError):
    """The cipher is not in a state where the operation is allowed."""


class InvalidArgumentError(CalError, ValueError):
    """The underlying cipher rejected its input."""


class InvalidKeyLengthError(CalError, ValueError):
    """The key does not have the length the algorithm requires."""


class InvalidMaterialSizeError(CalError, ValueError):
    """An IV or other cipher material has the wrong size."""


class BufferTooLargeError(CalError, ValueError):
    """The input is larger than the algorithm can process in one call."""


def generate_key(length: int) -> bytes:
    """Return ``length`` cryptographically random bytes for use as a key."""
    if length < 0:
        raise ValueError("key length must not be negative")
    return os.urandom(length)


def generate_iv(length: int, is_counter_mode: bool) -> bytes:
    """Return a random IV; in counter mode the last four bytes hold a counter of 1."""
    if length < 0:
        raise ValueError("IV length must not be negative")
    if not is_counter_mode:
        return os.urandom(length)
    if length < _COUNTER_LEN:
        raise ValueError(f"a counter-mode IV needs at least {_COUNTER_LEN} bytes")
    return os.urandom(length - _COUNTER_LEN) + (1).to_bytes(_COUNTER_LEN, "big")


def _as_bytes(value: bytes | bytearray | memoryview | None) -> bytes | None:
    return None if value is None else bytes(value)


class SymmetricCipher(ABC):
    """A streaming AES-256 cipher.

    ``encrypt``/``decrypt`` return whatever output is ready; the finalize
    calls flush the rest. ``reset`` prepares the same key and IV for reuse.
    """

    alg_name: ClassVar[str] = "AES 256"
    provider: ClassVar[str] = "cryptography"
    block_size: ClassVar[int] = AES_256_CIPHER_BLOCK_SIZE
    key_length_bits: ClassVar[int] = AES_256_KEY_BIT_LEN
    iv_size: ClassVar[int] = AES_256_CIPHER_BLOCK_SIZE
    counter_mode: ClassVar[bool] = False

    def __init__(
        self,
        key: bytes | bytearray | memoryview | None = None,
        iv: bytes | bytearray | memoryview | None = None,
        *,
        tag: bytes | bytearray | memoryview | None = None,
        aad: bytes | bytearray | memoryview | None = None,
    ) -> None:
        key_len = self.key_length_bits // 8
        key_bytes = _as_bytes(key)
        if key_bytes is None:
            key_bytes = generate_key(key_len)
        elif len(key_bytes) != key_len:
            raise InvalidKeyLengthError(
                f"{self.alg_name} needs a {key_len}-byte key, got {len(key_bytes)} bytes"
            )

        iv_bytes = _as_bytes(iv)
        if self.iv_size:
            if iv_bytes is None:
                iv_bytes = generate_iv(self.iv_size, self.counter_mode)
            elif len(iv_bytes) != self.iv_size:
                raise InvalidMaterialSizeError(
                    f"{self.alg_name} needs a {self.iv_size}-byte IV, got {len(iv_bytes)} bytes"
                )
        elif iv_bytes:
            raise InvalidMaterialSizeError(f"{self.alg_name} takes no IV")
        else:
            iv_bytes = b""

        self._key = key_bytes
        self._iv = iv_bytes
        self._tag = _as_bytes(tag) or b""
        self._aad = _as_bytes(aad) or b""
        self.good = True

    @property
    def key(self) -> bytes:
        return self._key

    @property
    def iv(self) -> bytes:
        return self._iv

    @property
    def tag(self) -> bytes:
        return self._tag

    @property
    def aad(self) -> bytes:
        return self._aad

    def _check_input(self, data: Sized) -> None:
        if len(data) > _INT_MAX - self.block_size:
            raise BufferTooLargeError(
                f"{self.alg_name} cannot process {len(data)} bytes in one call"
            )

    def _require_good(self) -> None:
        if not self.good:
            raise InvalidStateError(f"{self.alg_name} cipher is not in a usable state")

    def encrypt(self, data: bytes | bytearray | memoryview) -> bytes:
        """Encrypt ``data`` and return the output that is ready so far."""
        self._check_input(data)
        self._require_good()
        try:
            return self._encrypt(bytes(data))
        except CalError:
            self.good = False
            raise

    def decrypt(self, data: bytes | bytearray | memoryview) -> bytes:
        """Decrypt ``data`` and return the output that is ready so far."""
        self._check_input(data)
        self._require_good()
        try:
            return self._decrypt(bytes(data))
        except CalError:
            self.good = False
            raise

    def finalize_encryption(self) -> bytes:
        """Flush and return the remaining ciphertext."""
        self._require_good()
        try:
            return self._finalize_encryption()
        except CalError:
            self.good = False
            raise

    def finalize_decryption(self) -> bytes:
        """Flush and return the remaining plaintext."""
        self._require_good()
        try:
            return self._finalize_decryption()
        except CalError:
            self.good = False
            raise

    def reset(self) -> None:
        """Make the cipher ready for a new operation with the same materials."""
        try:
            self._reset()
        except CalError:
            self.good = False
            raise
        self.good = True

    @abstractmethod
    def _encrypt(self, data: bytes) -> bytes: ...

    @abstractmethod
    def _decrypt(self, data: bytes) -> bytes: ...

    @abstractmethod
    def _finalize_encryption(self) -> bytes: ...

    @abstractmethod
    def _finalize_decryption(self) -> bytes: ...

    @abstractmethod
    def _reset(self) -> None: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(alg_name={self.alg_name!r}, good={self.good})"