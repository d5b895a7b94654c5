"""AES-256 in counter mode and AES-256 key wrapping."""

from __future__ import annotations

from typing import ClassVar, Iterator

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.keywrap import (
    InvalidUnwrap,
    aes_key_unwrap,
    aes_key_wrap,
)

from .cipher import (
    AES_256_CIPHER_BLOCK_SIZE,
    CalError,
    InvalidArgumentError,
    InvalidStateError,
    SymmetricCipher,
)

_COUNTER_LEN = 4
_COUNTER_OFFSET = AES_256_CIPHER_BLOCK_SIZE - _COUNTER_LEN
_COUNTER_MAX = 2 ** (8 * _COUNTER_LEN) - 1
_KEYWRAP_BLOCK_SIZE = 8
_AES_KEY_SIZES = (16, 24, 32)


class _CounterExhaustedError(CalError, OverflowError):
    """The 32-bit block counter in the IV would wrap around."""


def _xor(data: bytes, keystream: bytes) -> bytes:
    """XOR ``data`` with ``keystream`` up to the length of the shorter one."""
    return bytes(a ^ b for a, b in zip(data, keystream))


def _blocks(data: bytes) -> Iterator[bytes]:
    """Yield ``data`` in consecutive block-sized slices; the last may be short."""
    for offset in range(0, len(data), AES_256_CIPHER_BLOCK_SIZE):
        yield data[offset : offset + AES_256_CIPHER_BLOCK_SIZE]


class AesCtr256(SymmetricCipher):
    """AES-256-CTR with a 16-byte IV whose last four bytes are a big-endian counter.

    Only the 32-bit counter is incremented; running it past its maximum is an
    error. Partial blocks are held back until finalization. Encryption and
    decryption are the same operation.
    """

    alg_name: ClassVar[str] = "AES-CTR 256"
    counter_mode: ClassVar[bool] = True

    def __init__(self, key=None, iv=None) -> None:
        super().__init__(key, iv)
        self._ecb = Cipher(algorithms.AES(self.key), modes.ECB()).encryptor()
        self._start()

    def _start(self) -> None:
        self._counter_block = self.iv
        self._overflow = b""
        self._finished = False

    def _check_open(self) -> None:
        if self._finished:
            raise InvalidStateError(f"{self.alg_name} cipher must be reset after finalizing")

    def _next_keystream(self) -> bytes:
        keystream = self._ecb.update(self._counter_block)
        prefix = self._counter_block[:_COUNTER_OFFSET]
        counter = int.from_bytes(self._counter_block[_COUNTER_OFFSET:], "big") + 1
        if counter > _COUNTER_MAX:
            raise _CounterExhaustedError(f"{self.alg_name} block counter overflowed")
        self._counter_block = prefix + counter.to_bytes(_COUNTER_LEN, "big")
        return keystream

    def _process(self, data: bytes, final: bool) -> bytes:
        buffered, self._overflow = self._overflow + data, b""
        output = bytearray()
        for block in _blocks(buffered):
            if len(block) == AES_256_CIPHER_BLOCK_SIZE or final:
                output += _xor(block, self._next_keystream())
            else:
                self._overflow = block
        return bytes(output)

    def _encrypt(self, data: bytes) -> bytes:
        self._check_open()
        if not data:
            return b""
        return self._process(data, final=False)

    def _decrypt(self, data: bytes) -> bytes:
        return self._encrypt(data)

    def _finalize_encryption(self) -> bytes:
        self._check_open()
        self._finished = True
        return self._process(b"", final=True)

    def _finalize_decryption(self) -> bytes:
        return self._finalize_encryption()

    def _reset(self) -> None:
        self._start()


class AesKeywrap256(SymmetricCipher):
    """AES-256 key wrap: input is collected and wrapped or unwrapped on finalize.

    The collected input must be a raw AES key (16, 24 or 32 bytes) when
    wrapping, and must unwrap to one when unwrapping.
    """

    alg_name: ClassVar[str] = "AES-KEYWRAP 256"
    block_size: ClassVar[int] = _KEYWRAP_BLOCK_SIZE
    iv_size: ClassVar[int] = 0

    def __init__(self, key=None) -> None:
        super().__init__(key)
        self._start()

    def _start(self) -> None:
        self._buffer = bytearray()
        self._finished = False

    def _check_open(self) -> None:
        if self._finished:
            raise InvalidStateError(f"{self.alg_name} cipher must be reset after finalizing")

    def _collect(self, data: bytes) -> bytes:
        self._check_open()
        self._buffer += data
        return b""

    def _encrypt(self, data: bytes) -> bytes:
        return self._collect(data)

    def _decrypt(self, data: bytes) -> bytes:
        return self._collect(data)

    def _finalize_encryption(self) -> bytes:
        self._check_open()
        self._finished = True
        to_wrap = bytes(self._buffer)
        if len(to_wrap) not in _AES_KEY_SIZES:
            raise InvalidArgumentError(
                f"{self.alg_name} can only wrap an AES key, got {len(to_wrap)} bytes"
            )
        return aes_key_wrap(self.key, to_wrap)

    def _finalize_decryption(self) -> bytes:
        self._check_open()
        self._finished = True
        wrapped = bytes(self._buffer)
        try:
            unwrapped = aes_key_unwrap(self.key, wrapped)
        except (InvalidUnwrap, ValueError) as exc:
            raise InvalidArgumentError(f"{self.alg_name} unwrapping failed") from exc
        if len(unwrapped) not in _AES_KEY_SIZES:
            raise InvalidArgumentError(
                f"{self.alg_name} unwrapped {len(unwrapped)} bytes, which is not an AES key"
            )
        return unwrapped

    def _reset(self) -> None:
        self._start()


def aes_ctr_256_new(key=None, iv=None) -> AesCtr256:
    """Create an AES-256-CTR cipher; missing key or IV are generated randomly."""
    return AesCtr256(key, iv)


def aes_keywrap_256_new(key=None) -> AesKeywrap256:
    """Create an AES-256 key-wrap cipher; a missing key is generated randomly."""
    return AesKeywrap256(key)