# calcrypt

Streaming message digests, HMAC-SHA256 and AES-256 ciphers behind one small,
consistent interface. Data is fed in pieces of any size; results come back
as `bytes`, and failures are raised as exceptions.

## Installation

```
pip install calcrypt
```

For running the test suite:

```
pip install "calcrypt[test]"
pytest
```

## Hashes

`calcrypt.hashing` provides `sha256_new()`, `sha1_new()` and `md5_new()`,
each returning a `Hash`.

```python
from calcrypt.hashing import sha256_new

digest = sha256_new()
digest.update(b"hello ")
digest.update(b"world")
print(digest.finalize().hex())
```

A `Hash` can be finalized once. After that its `good` attribute is `False`
and any further `update` or `finalize` raises `RuntimeError`.

## HMAC

`calcrypt.macs.sha256_hmac_new(secret)` returns an `Hmac` with the same
`update`/`finalize` behaviour as `Hash`.

```python
from calcrypt.macs import sha256_hmac_new

mac = sha256_hmac_new(b"secret")
mac.update(b"message")
tag = mac.finalize()
```

## Symmetric ciphers

Every cipher is a `calcrypt.cipher.SymmetricCipher` with `encrypt`,
`decrypt`, `finalize_encryption`, `finalize_decryption` and `reset`.
`encrypt` and `decrypt` return whatever output is ready so far (part of the
input may be held back); the finalize call returns the rest. After
finalizing, the cipher must be `reset` before it is used again; `reset`
keeps the same key and IV. The materials are available as the read-only
properties `key`, `iv`, `tag` and `aad`.

When the key or IV is `None`, a random one is generated.

### AES-256-CBC (PKCS#7 padding)

```python
from calcrypt.block_modes import aes_cbc_256_new

cipher = aes_cbc_256_new(None, None)
ciphertext = cipher.encrypt(b"some data") + cipher.finalize_encryption()

cipher.reset()
plaintext = cipher.decrypt(ciphertext) + cipher.finalize_decryption()
```

The key is 32 bytes and the IV 16 bytes.

### AES-256-GCM

```python
from calcrypt.block_modes import aes_gcm_256_new
from calcrypt.cipher import generate_iv, generate_key

key = generate_key(32)
iv = generate_iv(12, False)

cipher = aes_gcm_256_new(key, iv, b"header", None)
ciphertext = cipher.encrypt(b"some data") + cipher.finalize_encryption()
tag = cipher.tag

decryptor = aes_gcm_256_new(key, iv, b"header", tag)
plaintext = decryptor.decrypt(ciphertext) + decryptor.finalize_decryption()
```

The IV is 12 bytes. After `finalize_encryption` the computed tag is in
`tag`; decryption checks the ciphertext against `tag` when it is finalized
and raises `InvalidArgumentError` if it does not match. Because `reset`
keeps the tag, a cipher that has just encrypted can be reset and used to
decrypt its own output.

### AES-256-CTR

```python
from calcrypt.ctr_wrap import aes_ctr_256_new

ctr = aes_ctr_256_new(None, None)
out = ctr.encrypt(b"some data") + ctr.finalize_encryption()
```

The IV is 16 bytes; its last four bytes are a big-endian block counter.
Running the counter past its maximum raises a `CalError`. Encryption and
decryption are the same operation.

### AES-256 key wrap

```python
from calcrypt.cipher import generate_key
from calcrypt.ctr_wrap import aes_keywrap_256_new

wrap = aes_keywrap_256_new(generate_key(32))
wrap.encrypt(generate_key(32))
wrapped = wrap.finalize_encryption()
```

Input is collected and wrapped or unwrapped on the finalize call. Only raw
AES keys (16, 24 or 32 bytes) can be wrapped; a failed integrity check on
unwrapping raises `InvalidArgumentError`.

### Keys and IVs

`calcrypt.cipher.generate_key(length)` returns random bytes.
`calcrypt.cipher.generate_iv(length, is_counter_mode)` returns random bytes;
in counter mode the last four bytes hold a counter starting at 1.

### Errors

All cipher errors derive from `calcrypt.cipher.CalError`:

- `InvalidKeyLengthError` — the key has the wrong length;
- `InvalidMaterialSizeError` — the IV has the wrong length;
- `BufferTooLargeError` — a single input is too large (the cipher stays usable);
- `InvalidArgumentError` — an operation failed, such as bad padding, a tag
  mismatch or a failed unwrap;
- `InvalidStateError` — the cipher was used after a failure or after
  finalizing without a `reset`.

After a failed operation the cipher's `good` attribute is `False`; `reset`
makes it usable again.

## What this package does not do

It has no elliptic-curve keys or signatures, no other AES key sizes, and no
command-line tool; it is a library only.