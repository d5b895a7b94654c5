"""Streaming HMAC-SHA256."""

from __future__ import annotations

import hashlib
import hmac

SHA256_HMAC_LEN = 32


class Hmac:
    """An incremental keyed MAC that can be finalized exactly once."""

    def __init__(self, alg_name: str, digest_size: int, state: hmac.HMAC) -> None:
        self.alg_name = alg_name
        self.digest_size = digest_size
        self.good = True
        self._state: hmac.HMAC | None = state

    def update(self, data: bytes | bytearray | memoryview) -> None:
        """Feed more data into the MAC."""
        if not self.good or self._state is None:
            raise RuntimeError(f"{self.alg_name} has already been finalized")
        try:
            self._state.update(data)
        except TypeError:
            self.good = False
            raise

    def finalize(self) -> bytes:
        """Return the MAC; the object cannot be used afterwards."""
        if not self.good or self._state is None:
            raise RuntimeError(f"{self.alg_name} has already been finalized")
        self.good = False
        mac = self._state.digest()
        self._state = None
        return mac

    def __repr__(self) -> str:
        return f"Hmac(alg_name={self.alg_name!r}, good={self.good})"


def sha256_hmac_new(secret: bytes | bytearray | memoryview) -> Hmac:
    """Start an HMAC-SHA256 keyed with ``secret``."""
    state = hmac.new(bytes(secret), digestmod=hashlib.sha256)
    return Hmac("SHA256 HMAC", SHA256_HMAC_LEN, state)