"""
The method registry and the deflate/inflate dispatchers.

The registry maps every Method to a single stateless codec instance. It is
built once at import time and exposed read-only, so lookups need no locking
and deflate/inflate may be called from any number of threads at once.
"""
import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Tuple

from .codecs import (
    BrotliCodec,
    Buffer,
    Codec,
    GzipCodec,
    IdentityCodec,
    LzoCodec,
    SnappyCodec,
)
from .errors import DecodeError, UnsupportedMethod

logger = logging.getLogger(__name__)


class Method(str, Enum):
    """The closed set of column-chunk compression methods."""

    UNCOMPRESSED = "UNCOMPRESSED"
    GZIP = "GZIP"
    SNAPPY = "SNAPPY"
    LZO = "LZO"
    BROTLI = "BROTLI"

    def __str__(self) -> str:
        return self.value


CODECS: Mapping[Method, Codec] = MappingProxyType(
    {
        Method.UNCOMPRESSED: IdentityCodec(),
        Method.GZIP: GzipCodec(),
        Method.SNAPPY: SnappyCodec(),
        Method.LZO: LzoCodec(),
        Method.BROTLI: BrotliCodec(),
    }
)


def available_methods() -> Tuple[str, ...]:
    """Returns the recognized method tokens in declaration order."""
    return tuple(m.value for m in Method)


def _resolve(method: Any) -> Method:
    try:
        return Method(method)
    except ValueError:
        raise UnsupportedMethod(method, available_methods()) from None


def get_codec(method: Any) -> Codec:
    """
    Look up the codec registered for `method`.

    Args:
        method: A Method member or its token, e.g. "SNAPPY".

    Returns:
        Codec: The adapter registered for the method.

    Raises:
        UnsupportedMethod: If `method` is not a recognized identifier.
    """
    return CODECS[_resolve(method)]


def deflate(method: Any, data: Buffer) -> bytes:
    """
    Compress `data` with the codec registered for `method`.

    Args:
        method: A Method member or its token.
        data: The raw column-chunk bytes.

    Returns:
        bytes: The compressed buffer, exactly as the codec produced it.

    Raises:
        UnsupportedMethod: If `method` is not a recognized identifier.
    """
    resolved = _resolve(method)
    result = CODECS[resolved].compress(data)
    logger.debug("deflate %s: %d -> %d bytes", resolved, len(data), len(result))
    return result


def inflate(method: Any, data: Buffer) -> bytes:
    """
    Decompress `data` with the codec registered for `method`.

    Args:
        method: A Method member or its token.
        data: A buffer previously produced by `deflate` (or any conforming
              encoder) for the same method.

    Returns:
        bytes: The original bytes.

    Raises:
        UnsupportedMethod: If `method` is not a recognized identifier.
        DecodeError: If `data` is not a valid encoding for the method. The
                     decoder's own exception is chained as the cause.
    """
    resolved = _resolve(method)
    codec = CODECS[resolved]
    try:
        result = codec.decompress(data)
    except codec.decode_errors as e:
        logger.debug("inflate %s failed on %d bytes: %s", resolved, len(data), e)
        raise DecodeError(resolved, e) from e
    logger.debug("inflate %s: %d -> %d bytes", resolved, len(data), len(result))
    return result
