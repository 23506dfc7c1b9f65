"""
DER decoding of certificates and bare to-be-signed bodies.

Wraps asn1crypto. A buffer is first framed to find the outermost TLV, then
decoded as a complete certificate and, failing that, as a bare TBS body
(for example an unsigned certificate template).
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Union

from asn1crypto import parser, x509

from .errors import CertificateDecodeError, ErrorCode, describe_exception
from .extensions import iter_extensions
from .fields import iter_attributes

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
DAYS_PER_400_YEARS = 146097  # Gregorian cycle

# Fields every TBS body must carry, in encoding order
TBS_FIELDS = (
    "version",
    "serial_number",
    "signature",
    "issuer",
    "validity",
    "subject",
    "subject_public_key_info",
    "issuer_unique_id",
    "subject_unique_id",
    "extensions",
)

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class DecodedBody:
    """A successfully decoded TBS body and the span of input it came from."""

    tbs: x509.TbsCertificate
    consumed: int
    pending: bool


def frame(data: bytes) -> int:
    """
    Find the length of the outermost TLV.

    Args:
        data: DER buffer, possibly followed by trailing bytes

    Returns:
        Number of bytes the outermost TLV occupies

    Raises:
        ValueError: If the header or length is truncated or invalid
    """
    _, _, _, header, contents, trailer = parser.parse(data)
    return len(header) + len(contents) + len(trailer)


def epoch_seconds(value: Any) -> int:
    """
    Convert a decoded UTCTime/GeneralizedTime to epoch seconds.

    asn1crypto returns ``extended_datetime`` for year 0, which ``datetime``
    cannot hold; it is shifted by one 400 year cycle and back.
    """
    if isinstance(value, datetime):
        return calendar.timegm(value.utctimetuple())
    shifted = calendar.timegm(
        (value.year + 400, value.month, value.day, value.hour, value.minute, value.second)
    )
    return shifted - DAYS_PER_400_YEARS * SECONDS_PER_DAY


def serial_bytes(tbs: x509.TbsCertificate) -> bytes:
    """
    Return the serial number as minimal big-endian unsigned bytes.

    The INTEGER content octets are used as encoded, minus any leading zero
    sign-padding. At least one byte is kept, so serial 0 is ``b"\\x00"``.
    """
    contents = tbs["serial_number"].contents
    stripped = contents.lstrip(b"\x00")
    return stripped or b"\x00"


def validate_body(tbs: x509.TbsCertificate) -> None:
    """
    Force the lazy asn1crypto structures that a TBS body must carry.

    Attribute values and extension payloads are left undecoded; those are
    handled field by field later.

    Raises:
        ValueError: If the structure does not parse
    """
    for name in TBS_FIELDS:
        tbs[name]

    if not tbs["serial_number"].contents:
        raise ValueError("Empty serial number")

    for name in ("issuer", "subject"):
        for _ in iter_attributes(tbs[name]):
            pass

    validity = tbs["validity"]
    epoch_seconds(validity["not_before"].native)
    epoch_seconds(validity["not_after"].native)

    for extension in iter_extensions(tbs):
        extension["extn_id"].dotted
        extension["critical"]


def _decode_signed(der: bytes) -> x509.TbsCertificate:
    certificate = x509.Certificate.load(der, strict=True)
    tbs = certificate["tbs_certificate"]
    certificate["signature_algorithm"]
    certificate["signature_value"]
    validate_body(tbs)
    return tbs


def _decode_pending(der: bytes) -> x509.TbsCertificate:
    tbs = x509.TbsCertificate.load(der, strict=True)
    validate_body(tbs)
    return tbs


def decode_body(data: BytesLike) -> DecodedBody:
    """
    Decode a buffer as a certificate, falling back to a bare TBS body.

    Args:
        data: Buffer purported to hold DER

    Returns:
        DecodedBody with ``pending`` set when only the TBS body decoded

    Raises:
        CertificateDecodeError: If neither shape decodes
        TypeError: If data is not bytes-like
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"data must be bytes-like, not {type(data).__name__}")
    data = bytes(data)
    if not data:
        raise CertificateDecodeError("Empty input", ErrorCode.EMPTY_INPUT)

    try:
        consumed = frame(data)
    except Exception as e:
        raise CertificateDecodeError(
            f"Invalid DER framing: {e}", ErrorCode.DER_FRAMING, describe_exception(e)
        ) from e

    der = data[:consumed]
    details: Dict[str, Any] = {"consumed": consumed, "trailing": len(data) - consumed}

    try:
        return DecodedBody(tbs=_decode_signed(der), consumed=consumed, pending=False)
    except Exception as e:
        logger.debug(f"Not a complete certificate, trying TBS body: {e}")
        details["certificate"] = describe_exception(e)

    try:
        return DecodedBody(tbs=_decode_pending(der), consumed=consumed, pending=True)
    except Exception as e:
        logger.debug(f"Not a TBS certificate body either: {e}")
        details["tbs_certificate"] = describe_exception(e)

    raise CertificateDecodeError(
        "Input is neither a certificate nor a TBS certificate body",
        ErrorCode.UNRECOGNIZED_STRUCTURE,
        details,
    )
