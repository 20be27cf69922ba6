import hashlib
import io

import pytest

from siegekit.md5 import MD5, digest_bytes, digest_stream


def test_empty_input_rfc_vector():
    assert MD5().hexdigest() == "d41d8cd98f00b204e9800998ecf8427e"


def test_abc_rfc_vector():
    assert MD5(b"abc").hexdigest() == "900150983cd24fb0d6963f7d28e17f72"


def test_message_digest_rfc_vector():
    assert digest_bytes(b"message digest").hex() == "f96b697d7cb7938d525a2f31aaf161d0"


@pytest.mark.parametrize("length", [0, 1, 55, 56, 57, 63, 64, 65, 119, 120, 128, 1000])
def test_boundary_lengths_match_reference(length):
    data = bytes(i % 251 for i in range(length))
    assert digest_bytes(data) == hashlib.md5(data).digest()


def test_digest_is_sixteen_bytes():
    assert len(digest_bytes(b"some data")) == 16


def test_chunked_updates_equal_one_shot():
    data = bytes(range(256)) * 7
    hasher = MD5()
    for start in range(0, len(data), 37):
        hasher.update(data[start:start + 37])
    assert hasher.digest() == digest_bytes(data)


def test_digest_does_not_change_state():
    hasher = MD5(b"first")
    before = hasher.digest()
    assert hasher.digest() == before
    hasher.update(b" second")
    assert hasher.digest() == digest_bytes(b"first second")


def test_copy_is_independent():
    hasher = MD5(b"shared prefix ")
    clone = hasher.copy()
    hasher.update(b"left")
    clone.update(b"right")
    assert hasher.digest() == digest_bytes(b"shared prefix left")
    assert clone.digest() == digest_bytes(b"shared prefix right")


def test_hexdigest_matches_digest():
    hasher = MD5(b"hex check")
    assert hasher.hexdigest() == hasher.digest().hex()


def test_accepts_bytearray_and_memoryview():
    data = b"buffer protocol"
    assert MD5(bytearray(data)).digest() == digest_bytes(data)
    assert MD5(memoryview(data)).digest() == digest_bytes(data)


def test_str_is_rejected():
    with pytest.raises(TypeError):
        MD5("text")


def test_stream_larger_than_block():
    data = bytes(i % 199 for i in range(10000))
    assert digest_stream(io.BytesIO(data)) == digest_bytes(data)


def test_empty_stream():
    assert digest_stream(io.BytesIO(b"")) == digest_bytes(b"")


def test_stream_exact_block_multiple():
    data = b"\xaa" * 8192
    assert digest_stream(io.BytesIO(data)) == hashlib.md5(data).digest()


def test_stream_read_error_propagates():
    class Broken(io.RawIOBase):
        def readable(self):
            return True

        def read(self, size=-1):
            raise OSError("device failure")

    with pytest.raises(OSError):
        digest_stream(Broken())