"""Streaming message digests: SHA-256, SHA-1 and MD5."""

from __future__ import annotations

import hashlib
from typing import Any

SHA256_LEN = 32
SHA1_LEN = 20
MD5_LEN = 16


class Hash:
    """An incremental digest that can be finalized exactly once."""

    def __init__(self, alg_name: str, digest_size: int, state: Any) -> None:
        self.alg_name = alg_name
        self.digest_size = digest_size
        self.good = True
        self._state = state

    def update(self, data: bytes | bytearray | memoryview) -> None:
        """Feed more data into the digest."""
        if not self.good:
            raise RuntimeError(f"{self.alg_name} hash has already been finalized")
        try:
            self._state.update(data)
        except TypeError:
            self.good = False
            raise

    def finalize(self) -> bytes:
        """Return the digest; the hash cannot be used afterwards."""
        if not self.good:
            raise RuntimeError(f"{self.alg_name} hash has already been finalized")
        self.good = False
        digest = self._state.digest()
        self._state = None
        return digest

    def __repr__(self) -> str:
        return f"Hash(alg_name={self.alg_name!r}, good={self.good})"


def sha256_new() -> Hash:
    """Start a SHA-256 digest."""
    return Hash("SHA256", SHA256_LEN, hashlib.sha256())


def sha1_new() -> Hash:
    """Start a SHA-1 digest."""
    return Hash("SHA1", SHA1_LEN, hashlib.sha1())


def md5_new() -> Hash:
    """Start an MD5 digest."""
    return Hash("MD5", MD5_LEN, hashlib.md5(usedforsecurity=False))