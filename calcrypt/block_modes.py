"""AES-256 in CBC mode (with PKCS#7 padding) and in GCM mode."""

from __future__ import annotations

from typing import ClassVar

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .cipher import (
    AES_256_CIPHER_BLOCK_SIZE,
    InvalidArgumentError,
    InvalidStateError,
    SymmetricCipher,
)

_RESERVE_SIZE = AES_256_CIPHER_BLOCK_SIZE * 2
_GCM_IV_SIZE = AES_256_CIPHER_BLOCK_SIZE - 4
_GCM_TAG_SIZE = AES_256_CIPHER_BLOCK_SIZE


class AesCbc256(SymmetricCipher):
    """AES-256-CBC; the final call adds (or strips) PKCS#7 padding.

    Input is buffered so that the last one or two blocks are held back
    until finalization, where padding is applied or removed.
    """

    alg_name: ClassVar[str] = "AES-CBC 256"

    def __init__(self, key=None, iv=None) -> None:
        super().__init__(key, iv)
        self._start()

    def _start(self) -> None:
        cipher = Cipher(algorithms.AES(self.key), modes.CBC(self.iv))
        self._encryptor = cipher.encryptor()
        self._decryptor = cipher.decryptor()
        self._overflow = b""
        self._finished = False

    def _take_ready(self, data: bytes) -> bytes:
        """Append ``data`` to the held-back bytes and return what may be processed now."""
        buffered = self._overflow + data
        if len(buffered) > _RESERVE_SIZE:
            keep = len(buffered) % _RESERVE_SIZE or _RESERVE_SIZE
            self._overflow = buffered[-keep:]
            return buffered[:-keep]
        self._overflow = buffered
        return b""

    def _check_open(self) -> None:
        if self._finished:
            raise InvalidStateError(f"{self.alg_name} cipher must be reset after finalizing")

    def _encrypt(self, data: bytes) -> bytes:
        self._check_open()
        ready = self._take_ready(data)
        return self._encryptor.update(ready) if ready else b""

    def _decrypt(self, data: bytes) -> bytes:
        self._check_open()
        ready = self._take_ready(data)
        return self._decryptor.update(ready) if ready else b""

    def _finalize_encryption(self) -> bytes:
        self._check_open()
        self._finished = True
        if not self._overflow:
            return b""
        padder = padding.PKCS7(AES_256_CIPHER_BLOCK_SIZE * 8).padder()
        padded = padder.update(self._overflow) + padder.finalize()
        self._overflow = b""
        return self._encryptor.update(padded) + self._encryptor.finalize()

    def _finalize_decryption(self) -> bytes:
        self._check_open()
        self._finished = True
        if not self._overflow:
            return b""
        remaining, self._overflow = self._overflow, b""
        try:
            padded = self._decryptor.update(remaining) + self._decryptor.finalize()
            unpadder = padding.PKCS7(AES_256_CIPHER_BLOCK_SIZE * 8).unpadder()
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as exc:
            raise InvalidArgumentError(f"{self.alg_name} decryption failed: {exc}") from exc

    def _reset(self) -> None:
        self._start()


class AesGcm256(SymmetricCipher):
    """AES-256-GCM with a 12-byte IV, optional AAD and an authentication tag.

    After ``finalize_encryption`` the computed tag is available as ``tag``;
    decryption verifies against ``tag`` when it is finalized.
    """

    alg_name: ClassVar[str] = "AES-GCM 256"
    iv_size: ClassVar[int] = _GCM_IV_SIZE

    def __init__(self, key=None, iv=None, aad=None, tag=None) -> None:
        super().__init__(key, iv, tag=tag, aad=aad)
        self._start()

    def _start(self) -> None:
        self._encryptor = None
        self._decryptor = None
        self._overflow = b""
        self._finished = False

    def _check_open(self) -> None:
        if self._finished:
            raise InvalidStateError(f"{self.alg_name} cipher must be reset after finalizing")

    def _encryption_context(self):
        if self._encryptor is None:
            encryptor = Cipher(algorithms.AES(self.key), modes.GCM(self.iv)).encryptor()
            if self.aad:
                encryptor.authenticate_additional_data(self.aad)
            self._encryptor = encryptor
        return self._encryptor

    def _decryption_context(self):
        if self._decryptor is None:
            tag = self._tag or bytes(_GCM_TAG_SIZE)
            try:
                mode = modes.GCM(self.iv, tag, min_tag_length=min(len(tag), _GCM_TAG_SIZE))
            except ValueError as exc:
                raise InvalidArgumentError(f"{self.alg_name} rejected the tag: {exc}") from exc
            decryptor = Cipher(algorithms.AES(self.key), mode).decryptor()
            if self.aad:
                decryptor.authenticate_additional_data(self.aad)
            self._decryptor = decryptor
        return self._decryptor

    def _take_ready(self, data: bytes) -> bytes:
        """Hold back the last full block plus any partial block until finalization."""
        buffered = self._overflow + data
        if len(buffered) > AES_256_CIPHER_BLOCK_SIZE:
            split = len(buffered) - (
                AES_256_CIPHER_BLOCK_SIZE + len(buffered) % AES_256_CIPHER_BLOCK_SIZE
            )
            self._overflow = buffered[split:]
            return buffered[:split]
        self._overflow = buffered
        return b""

    def _encrypt(self, data: bytes) -> bytes:
        self._check_open()
        if not data:
            return b""
        ready = self._take_ready(data)
        context = self._encryption_context()
        return context.update(ready) if ready else b""

    def _decrypt(self, data: bytes) -> bytes:
        self._check_open()
        if not data:
            return b""
        ready = self._take_ready(data)
        context = self._decryption_context()
        return context.update(ready) if ready else b""

    def _finalize_encryption(self) -> bytes:
        self._check_open()
        self._finished = True
        context = self._encryption_context()
        remaining, self._overflow = self._overflow, b""
        output = context.update(remaining) + context.finalize()
        tag_len = len(self._tag) or _GCM_TAG_SIZE
        self._tag = context.tag[:tag_len]
        return output

    def _finalize_decryption(self) -> bytes:
        self._check_open()
        self._finished = True
        context = self._decryption_context()
        remaining, self._overflow = self._overflow, b""
        try:
            return context.update(remaining) + context.finalize()
        except InvalidTag as exc:
            raise InvalidArgumentError(f"{self.alg_name} tag verification failed") from exc

    def _reset(self) -> None:
        self._start()


def aes_cbc_256_new(key=None, iv=None) -> AesCbc256:
    """Create an AES-256-CBC cipher; missing key or IV are generated randomly."""
    return AesCbc256(key, iv)


def aes_gcm_256_new(key=None, iv=None, aad=None, tag=None) -> AesGcm256:
    """Create an AES-256-GCM cipher; missing key or IV are generated randomly."""
    return AesGcm256(key, iv, aad, tag)