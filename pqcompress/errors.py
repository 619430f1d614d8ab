"""
Typed errors raised by pqcompress.

Every error derives from CodecError so callers can reject a column chunk
with a single except clause.
"""
from typing import Any, Tuple


class CodecError(Exception):
    """Base error for pqcompress."""


class UnsupportedMethod(CodecError, ValueError):
    """
    The compression method is not one of the recognized identifiers.

    Attributes:
        method: The offending token, exactly as the caller supplied it.
    """

    def __init__(self, method: Any, available: Tuple[str, ...] = ()):
        self.method = method
        message = f"Unsupported compression method: {method}"
        if available:
            message += f". Available methods: {', '.join(available)}"
        super().__init__(message)


def _describe(cause: BaseException) -> str:
    # Some decoders raise a bare exception chained from the real failure.
    if str(cause):
        return str(cause)
    if cause.__cause__ is not None and str(cause.__cause__):
        return str(cause.__cause__)
    return type(cause).__name__


class DecodeError(CodecError):
    """
    The input to inflate is not a valid encoding for the named method.

    Attributes:
        method: The method whose decoder rejected the input.
        cause: The exception raised by the underlying decoder.
    """

    def __init__(self, method: Any, cause: BaseException):
        self.method = method
        self.cause = cause
        super().__init__(f"{method} decompression failed: {_describe(cause)}")
