"""
Error classification for certificate decoding.

Provides error codes and the exception raised by ``certpeek.decode`` so
callers that need to know why an input was rejected can tell the failure
modes apart. ``certpeek.parse`` collapses all of them to ``None``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    """Specific error codes for decode failures."""

    EMPTY_INPUT = "EMPTY_INPUT"
    DER_FRAMING = "DER_FRAMING"  # Outer TLV header or length is unusable
    UNRECOGNIZED_STRUCTURE = "UNRECOGNIZED_STRUCTURE"  # Neither certificate nor TBS body


@dataclass
class CertificateDecodeError(Exception):
    """
    Raised when a buffer holds neither a certificate nor a TBS body.

    Preserves the error code and details from both decode attempts for
    diagnostics.
    """

    message: str
    error_code: ErrorCode
    error_details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


def describe_exception(e: BaseException) -> Dict[str, Any]:
    """
    Summarize an exception raised by the ASN.1 decoder.

    Args:
        e: The exception to describe

    Returns:
        Dict with the exception type and its first message line
    """
    message = str(e)
    return {
        "exception_type": type(e).__name__,
        "raw_message": message.splitlines()[0] if message else "",
    }
