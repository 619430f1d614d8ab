"""
pqcompress: Column-chunk compression codecs for columnar storage formats.
"""
import logging
from importlib.metadata import version, PackageNotFoundError

try:
    __version__: str = version("pqcompress")
except PackageNotFoundError:
    # Handle case where package is not installed (e.g., in development)
    __version__ = "0.0.0-dev"

from .codecs import (
    Codec,
    IdentityCodec,
    GzipCodec,
    SnappyCodec,
    LzoCodec,
    BrotliCodec,
)
from .errors import CodecError, UnsupportedMethod, DecodeError
from .registry import (
    CODECS,
    Method,
    available_methods,
    deflate,
    get_codec,
    inflate,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Dispatch
    "deflate",
    "inflate",
    "get_codec",
    "available_methods",
    "Method",
    "CODECS",
    # Codec Adapters
    "Codec",
    "IdentityCodec",
    "GzipCodec",
    "SnappyCodec",
    "LzoCodec",
    "BrotliCodec",
    # Errors
    "CodecError",
    "UnsupportedMethod",
    "DecodeError",
]
