"""Tests for checksum helpers and the single-pass HashingReader."""

from __future__ import annotations

import hashlib
import io

from fissionpkg.core.hasher import HashingReader, sha256_hex


class TestSha256:
    def test_sha256_hex(self):
        assert sha256_hex(b"abc") == hashlib.sha256(b"abc").hexdigest()


class TestHashingReader:
    def test_digest_covers_bytes_read(self):
        reader = HashingReader(io.BytesIO(b"hello-fission"))
        assert reader.read(5) == b"hello"
        assert reader.read() == b"-fission"
        assert reader.read() == b""
        assert reader.bytes_read == len(b"hello-fission")
        assert reader.hexdigest() == hashlib.sha256(b"hello-fission").hexdigest()

    def test_partial_read_digest(self):
        reader = HashingReader(io.BytesIO(b"abcdef"))
        reader.read(3)
        assert reader.bytes_read == 3
        assert reader.hexdigest() == hashlib.sha256(b"abc").hexdigest()

    def test_not_seekable(self):
        reader = HashingReader(io.BytesIO(b"abc"))
        assert not hasattr(reader, "seek")

    def test_name_and_fileno_delegate(self, make_file):
        path = make_file("named.bin", b"data")
        with open(path, "rb") as f:
            reader = HashingReader(f)
            assert reader.name == str(path)
            assert reader.fileno() == f.fileno()
