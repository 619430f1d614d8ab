"""
Defines the Codec protocol and provides one concrete adapter for each
column-chunk compression method.
"""
import gzip
import zlib
from typing import Protocol, Tuple, Type, runtime_checkable

import brotli
import lzo
import snappy

Buffer = bytes | bytearray | memoryview

#: python-lzo takes the output buffer length as a C int.
MAX_BUFFER = 2**31 - 1
#: liblzo's LZO_E_OUTPUT_OVERRUN; python-lzo appends the code to its message.
LZO_E_OUTPUT_OVERRUN = -5


def _is_output_overrun(error: BaseException) -> bool:
    return str(error).rstrip().endswith(str(LZO_E_OUTPUT_OVERRUN))


@runtime_checkable
class Codec(Protocol):
    """
    A protocol defining the interface for a column-chunk codec.
    Any object that implements a `compress` and `decompress` method can
    be used as a codec.
    """

    #: Exceptions the backend raises when asked to decode malformed input.
    decode_errors: Tuple[Type[BaseException], ...]

    def compress(self, data: Buffer) -> bytes:
        """Compresses the input bytes and returns compressed bytes."""
        ...

    def decompress(self, data: Buffer) -> bytes:
        """Decompresses the input bytes and returns original bytes."""
        ...


class IdentityCodec:
    """A pass-through codec that performs no compression."""

    decode_errors: Tuple[Type[BaseException], ...] = ()

    def compress(self, data: Buffer) -> bytes:
        return bytes(data)

    def decompress(self, data: Buffer) -> bytes:
        return bytes(data)


class GzipCodec:
    """A codec producing RFC 1952 gzip streams."""

    # BadGzipFile is an OSError; a stream cut short raises EOFError.
    decode_errors: Tuple[Type[BaseException], ...] = (
        OSError,
        EOFError,
        zlib.error,
    )

    def __init__(self, level: int = 6) -> None:
        """
        Creates a new GzipCodec.

        Args:
            level: Compression level to use. Defaults to zlib's default (6).
        """
        self._level = level

    def compress(self, data: Buffer) -> bytes:
        # A zero mtime keeps the header, and so the output, deterministic.
        return gzip.compress(data, compresslevel=self._level, mtime=0)

    def decompress(self, data: Buffer) -> bytes:
        return gzip.decompress(data)


class SnappyCodec:
    """A codec using the raw Snappy block format (no stream framing)."""

    decode_errors: Tuple[Type[BaseException], ...] = (snappy.UncompressError,)

    def compress(self, data: Buffer) -> bytes:
        return bytes(snappy.compress(bytes(data)))

    def decompress(self, data: Buffer) -> bytes:
        return bytes(snappy.decompress(bytes(data)))


class LzoCodec:
    """
    A codec using headerless LZO1X blocks.

    python-lzo prefixes its output with a five byte header by default; the
    header is disabled here so the block is a bare LZO1X stream. A bare block
    does not record its decoded size, so decompression starts from a guess
    and doubles the output buffer while the decoder reports an output overrun,
    up to the worst case LZO1X expansion. Any other decoder error is final.
    """

    decode_errors: Tuple[Type[BaseException], ...] = (lzo.error,)

    #: Smallest output buffer tried when decompressing.
    MIN_BUFFER = 64 * 1024
    #: A literal-free LZO1X run encodes at most ~255 output bytes per input byte.
    MAX_EXPANSION = 256

    def __init__(self, level: int = 1) -> None:
        """
        Creates a new LzoCodec.

        Args:
            level: 1 selects LZO1X-1, anything else LZO1X-999.
        """
        self._level = level

    def compress(self, data: Buffer) -> bytes:
        if not data:
            return b""
        return lzo.compress(bytes(data), self._level, False)

    def decompress(self, data: Buffer) -> bytes:
        if not data:
            return b""
        raw = bytes(data)
        limit = min(len(raw) * self.MAX_EXPANSION + self.MIN_BUFFER, MAX_BUFFER)
        buflen = min(max(len(raw) * 3, self.MIN_BUFFER), limit)
        while True:
            try:
                return lzo.decompress(raw, False, buflen)
            except lzo.error as e:
                # Only an undersized output buffer is worth another attempt.
                if not _is_output_overrun(e) or buflen >= limit:
                    raise
                buflen = min(buflen * 2, limit)


class BrotliCodec:
    """A codec using Brotli with a fixed generic-mode configuration."""

    decode_errors: Tuple[Type[BaseException], ...] = (brotli.error,)

    MODE = brotli.MODE_GENERIC
    QUALITY = 8
    LGWIN = 22

    def compress(self, data: Buffer) -> bytes:
        return brotli.compress(
            bytes(data), mode=self.MODE, quality=self.QUALITY, lgwin=self.LGWIN
        )

    def decompress(self, data: Buffer) -> bytes:
        # Any valid stream decodes, whatever quality and window produced it.
        return brotli.decompress(bytes(data))
