import pytest

from calcrypt.hashing import md5_new, sha1_new, sha256_new


def _feed(h, *chunks):
    for chunk in chunks:
        h.update(chunk)
    return h.finalize()


def test_sha256_abc():
    h = sha256_new()
    h.update(b"abc")
    assert h.finalize().hex() == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_sha1_abc():
    h = sha1_new()
    h.update(b"abc")
    assert h.finalize().hex() == "a9993e364706816aba3e25717850c26c9cd0d89d"


def test_md5_empty():
    h = md5_new()
    assert h.finalize().hex() == "d41d8cd98f00b204e9800998ecf8427e"


@pytest.mark.parametrize("factory", [sha256_new, sha1_new, md5_new])
def test_incremental_matches_single_update(factory):
    data = b"The quick brown fox jumps over the lazy dog" * 7
    whole = _feed(factory(), data)
    pieces = _feed(
        factory(), data[:5], data[5:64], bytearray(data[64:100]), memoryview(data[100:])
    )
    assert whole == pieces


@pytest.mark.parametrize(
    "factory, size, name",
    [(sha256_new, 32, "SHA256"), (sha1_new, 20, "SHA1"), (md5_new, 16, "MD5")],
)
def test_digest_size_and_name(factory, size, name):
    h = factory()
    assert h.alg_name == name
    assert h.digest_size == size
    assert len(h.finalize()) == size


def test_different_inputs_differ():
    first = sha256_new()
    first.update(b"a")
    second = sha256_new()
    second.update(b"b")
    assert first.finalize().hex() == (
        "ca978112ca1bbdcafac231b39a23dc4da786eff8147c4e72b9807785afee48bb"
    )
    assert second.finalize().hex() == (
        "3e23e8160039594a33894f6564e1b1348bbd7a0088d42c4acb73eeaed59c009d"
    )


def test_update_after_finalize_raises():
    h = sha256_new()
    h.update(b"data")
    h.finalize()
    assert h.good is False
    with pytest.raises(RuntimeError):
        h.update(b"more")


def test_double_finalize_raises():
    h = sha1_new()
    h.finalize()
    with pytest.raises(RuntimeError):
        h.finalize()


def test_bad_input_type_marks_hash_unusable():
    h = md5_new()
    with pytest.raises(TypeError):
        h.update("not bytes")
    assert h.good is False