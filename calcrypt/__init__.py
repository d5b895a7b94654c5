"""Streaming hashes, HMAC-SHA256 and AES-256 ciphers (CBC, GCM, CTR, key wrap)."""

__version__ = "0.1.0"

__all__ = ["hashing", "macs", "cipher", "block_modes", "ctr_wrap"]