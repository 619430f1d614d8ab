"""
Tests for the standalone Codec adapters.
"""

import lzo
import pytest

from pqcompress.codecs import (
    MAX_BUFFER,
    BrotliCodec,
    Codec,
    GzipCodec,
    IdentityCodec,
    LzoCodec,
    SnappyCodec,
)

# --- Test Data ---
SAMPLE_CHUNKS = [
    b"",
    b"x",
    b"hello world",
    b"This is some sample data for testing compression algorithms." * 10,
    bytes(range(256)) * 64,
]

CODECS = [
    IdentityCodec(),
    GzipCodec(),
    SnappyCodec(),
    LzoCodec(),
    BrotliCodec(),
]


# --- Tests for all Codecs ---
@pytest.mark.parametrize("codec", CODECS, ids=lambda c: type(c).__name__)
class TestCodecs:
    def test_implements_protocol(self, codec: Codec):
        assert isinstance(codec, Codec)

    @pytest.mark.parametrize("chunk", SAMPLE_CHUNKS, ids=lambda c: f"{len(c)}b")
    def test_compress_decompress_roundtrip(self, codec: Codec, chunk: bytes):
        """
        Tests that compressing and then decompressing data
        returns the original data.
        """
        compressed_data = codec.compress(chunk)
        decompressed_data = codec.decompress(compressed_data)

        assert isinstance(compressed_data, bytes)
        assert isinstance(decompressed_data, bytes)
        assert chunk == decompressed_data

    def test_compress_empty_bytes(self, codec: Codec):
        """Tests that codecs correctly handle empty byte strings."""
        assert codec.decompress(codec.compress(b"")) == b""

    def test_accepts_bytearray_and_memoryview(self, codec: Codec):
        original_data = b"column chunk " * 50
        compressed_data = codec.compress(bytearray(original_data))
        assert codec.decompress(memoryview(compressed_data)) == original_data

    def test_compress_is_deterministic(self, codec: Codec):
        original_data = b"repeatable payload " * 100
        assert codec.compress(original_data) == codec.compress(original_data)


@pytest.mark.parametrize(
    "codec",
    [GzipCodec(), SnappyCodec(), LzoCodec(), BrotliCodec()],
    ids=lambda c: type(c).__name__,
)
def test_compressible_data_shrinks(codec: Codec):
    original_data = b"some data to compress" * 100
    assert len(codec.compress(original_data)) < len(original_data)


class TestIdentityCodec:
    def test_returns_input_unchanged(self):
        codec = IdentityCodec()
        assert codec.compress(b"abc") == b"abc"
        assert codec.decompress(b"abc") == b"abc"

    def test_has_no_decode_errors(self):
        assert IdentityCodec.decode_errors == ()


class TestGzipCodec:
    def test_output_has_gzip_magic(self):
        assert GzipCodec().compress(b"hello")[:2] == b"\x1f\x8b"

    def test_header_mtime_is_zero(self):
        assert GzipCodec().compress(b"hello")[4:8] == b"\x00\x00\x00\x00"

    def test_level_changes_output(self):
        original_data = bytes(range(256)) * 200 + b"tail" * 1000
        fast = GzipCodec(level=1).compress(original_data)
        best = GzipCodec(level=9).compress(original_data)
        assert GzipCodec().decompress(fast) == original_data
        assert GzipCodec().decompress(best) == original_data
        assert len(best) <= len(fast)


class TestLzoCodec:
    def test_output_has_no_header(self):
        # python-lzo's own header starts with 0xf0 or 0xf1.
        compressed = LzoCodec().compress(b"hello world" * 20)
        assert compressed[0] not in (0xF0, 0xF1)

    def test_decompress_highly_compressible_block(self):
        """The output buffer grows past its initial guess."""
        original_data = b"\x00" * (4 * 1024 * 1024)
        codec = LzoCodec()
        compressed = codec.compress(original_data)
        assert len(compressed) * 3 < len(original_data)
        assert codec.decompress(compressed) == original_data

    def test_lzo1x_999_level_roundtrip(self):
        original_data = b"some data to compress with lzo" * 10
        codec = LzoCodec(level=9)
        assert codec.decompress(codec.compress(original_data)) == original_data

    def test_decoder_error_other_than_overrun_is_final(self, monkeypatch):
        buflens = []

        def input_overrun(data, header, buflen):
            buflens.append(buflen)
            raise lzo.error("Compressed data violation -4")

        monkeypatch.setattr(lzo, "decompress", input_overrun)
        with pytest.raises(lzo.error):
            LzoCodec().decompress(b"\x16hel" + b"\x00" * (1024 * 1024))
        assert len(buflens) == 1

    def test_output_overrun_doubles_buffer(self, monkeypatch):
        buflens = []

        def needs_200k(data, header, buflen):
            buflens.append(buflen)
            if buflen < 200_000:
                raise lzo.error("Compressed data violation -5")
            return b"decoded"

        monkeypatch.setattr(lzo, "decompress", needs_200k)
        assert LzoCodec().decompress(b"\x00" * 1000) == b"decoded"
        assert buflens == [65536, 131072, 262144]

    def test_buffer_stays_within_c_int(self, monkeypatch):
        buflens = []

        def always_overrun(data, header, buflen):
            buflens.append(buflen)
            raise lzo.error("Compressed data violation -5")

        monkeypatch.setattr(lzo, "decompress", always_overrun)
        with pytest.raises(lzo.error):
            LzoCodec().decompress(b"\x00" * (9 * 1024 * 1024))
        assert max(buflens) == MAX_BUFFER
        assert all(n <= MAX_BUFFER for n in buflens)


class TestBrotliCodec:
    def test_fixed_parameters(self):
        assert BrotliCodec.QUALITY == 8
        assert BrotliCodec.LGWIN == 22
