"""
X.509 certificate model and parsing.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from .alternate_name import CertificateAlternateName
from .decoder import BytesLike, DecodedBody, decode_body, epoch_seconds, serial_bytes
from .errors import CertificateDecodeError, ErrorCode, describe_exception
from .extensions import extract_alternate_names, is_authority
from .fields import extract_name_fields
from .validity import CertificateValidity

if TYPE_CHECKING:
    from cryptography import x509

logger = logging.getLogger(__name__)


class CertificateKind(str, Enum):
    """Which shape of input a certificate was decoded from."""

    SIGNED = "signed"  # Complete certificate with signature
    PENDING = "pending"  # Bare TBS body, no signature


@dataclass(frozen=True)
class CertificateData:
    """Fields extracted from a decoded certificate or TBS body."""

    authority: bool
    issuer_name: Optional[str]
    issuer_country: Optional[str]
    issuer_state: Optional[str]
    issuer_organization: Optional[str]
    issuer_organizational_unit: Optional[str]
    subject_name: Optional[str]
    subject_alternate_names: Tuple[CertificateAlternateName, ...]
    subject_country: Optional[str]
    subject_state: Optional[str]
    subject_organization: Optional[str]
    subject_organizational_unit: Optional[str]
    validity: CertificateValidity
    serial: bytes = field(repr=False)
    raw: bytes = field(repr=False)

    @classmethod
    def from_decoded(cls, decoded: DecodedBody, data: bytes) -> "CertificateData":
        """
        Build the record from a decoded body.

        Args:
            decoded: Result of the decode step
            data: The original input buffer

        Returns:
            CertificateData with ``raw`` set to the consumed prefix of data
        """
        tbs = decoded.tbs
        issuer = extract_name_fields(tbs["issuer"])
        subject = extract_name_fields(tbs["subject"])
        validity = tbs["validity"]

        return cls(
            authority=is_authority(tbs),
            issuer_name=issuer.common_name,
            issuer_country=issuer.country,
            issuer_state=issuer.state,
            issuer_organization=issuer.organization,
            issuer_organizational_unit=issuer.organizational_unit,
            subject_name=subject.common_name,
            subject_alternate_names=extract_alternate_names(tbs, subject.common_name),
            subject_country=subject.country,
            subject_state=subject.state,
            subject_organization=subject.organization,
            subject_organizational_unit=subject.organizational_unit,
            validity=CertificateValidity.from_timestamps(
                epoch_seconds(validity["not_before"].native),
                epoch_seconds(validity["not_after"].native),
            ),
            serial=serial_bytes(tbs),
            raw=bytes(data[: decoded.consumed]),
        )


@dataclass(frozen=True)
class Certificate:
    """
    A parsed certificate, tagged with the shape it was decoded from.

    ``SIGNED`` means the input was a complete certificate; ``PENDING`` means
    only the to-be-signed body was present. Both expose the same read-only
    accessors, which delegate to ``data``.
    """

    kind: CertificateKind
    data: CertificateData

    @staticmethod
    def parse(data: BytesLike) -> Optional["Certificate"]:
        """Parse DER bytes, returning None if neither shape decodes."""
        return parse(data)

    @staticmethod
    def from_cryptography(cert: "x509.Certificate") -> Optional["Certificate"]:
        """
        Parse a certificate already loaded with ``cryptography``.

        Args:
            cert: cryptography Certificate object

        Returns:
            The parsed certificate (SIGNED for any valid object)
        """
        from cryptography.hazmat.primitives import serialization

        return parse(cert.public_bytes(serialization.Encoding.DER))

    @property
    def is_signed(self) -> bool:
        return self.kind is CertificateKind.SIGNED

    @property
    def is_pending(self) -> bool:
        return self.kind is CertificateKind.PENDING

    @property
    def authority(self) -> bool:
        return self.data.authority

    @property
    def issuer_name(self) -> Optional[str]:
        return self.data.issuer_name

    @property
    def issuer_country(self) -> Optional[str]:
        return self.data.issuer_country

    @property
    def issuer_state(self) -> Optional[str]:
        return self.data.issuer_state

    @property
    def issuer_organization(self) -> Optional[str]:
        return self.data.issuer_organization

    @property
    def issuer_organizational_unit(self) -> Optional[str]:
        return self.data.issuer_organizational_unit

    @property
    def subject_name(self) -> Optional[str]:
        return self.data.subject_name

    @property
    def subject_alternate_names(self) -> Tuple[CertificateAlternateName, ...]:
        return self.data.subject_alternate_names

    @property
    def subject_country(self) -> Optional[str]:
        return self.data.subject_country

    @property
    def subject_state(self) -> Optional[str]:
        return self.data.subject_state

    @property
    def subject_organization(self) -> Optional[str]:
        return self.data.subject_organization

    @property
    def subject_organizational_unit(self) -> Optional[str]:
        return self.data.subject_organizational_unit

    @property
    def validity(self) -> CertificateValidity:
        return self.data.validity

    @property
    def serial(self) -> bytes:
        return self.data.serial

    @property
    def raw(self) -> bytes:
        return self.data.raw


def decode(data: BytesLike) -> Certificate:
    """
    Decode a DER certificate or bare TBS certificate body.

    Trailing bytes after the first DER element are ignored; ``raw`` holds
    exactly the bytes that were consumed.

    Args:
        data: Buffer purported to hold DER

    Returns:
        Certificate tagged SIGNED or PENDING

    Raises:
        CertificateDecodeError: If the buffer holds neither shape
        TypeError: If data is not bytes-like
    """
    decoded = decode_body(data)
    try:
        certificate_data = CertificateData.from_decoded(decoded, bytes(data))
    except Exception as e:
        raise CertificateDecodeError(
            f"Failed to extract certificate fields: {e}",
            ErrorCode.UNRECOGNIZED_STRUCTURE,
            describe_exception(e),
        ) from e

    kind = CertificateKind.PENDING if decoded.pending else CertificateKind.SIGNED
    return Certificate(kind=kind, data=certificate_data)


def parse(data: BytesLike) -> Optional[Certificate]:
    """
    Parse a DER certificate or bare TBS certificate body.

    Malformed, truncated or unrelated input yields None; this never raises
    for bytes-like input.

    Args:
        data: Buffer purported to hold DER

    Returns:
        Certificate, or None if neither shape decodes
    """
    try:
        return decode(data)
    except CertificateDecodeError as e:
        logger.debug(f"No certificate decoded ({e.error_code.value}): {e}")
        return None
