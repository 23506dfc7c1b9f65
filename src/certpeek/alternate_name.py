"""
Subject alternative name values.
"""

from dataclasses import dataclass
from enum import Enum


class AlternateNameKind(str, Enum):
    """Supported general-name kinds."""

    DIRECTORY = "directory"
    HOSTNAME = "hostname"
    ADDRESS = "address"
    EMAIL = "email"
    URI = "uri"


@dataclass(frozen=True)
class CertificateAlternateName:
    """An identity from the Subject Alternative Name extension."""

    kind: AlternateNameKind
    value: str

    @classmethod
    def directory(cls, value: str) -> "CertificateAlternateName":
        return cls(AlternateNameKind.DIRECTORY, value)

    @classmethod
    def hostname(cls, value: str) -> "CertificateAlternateName":
        return cls(AlternateNameKind.HOSTNAME, value)

    @classmethod
    def address(cls, value: str) -> "CertificateAlternateName":
        return cls(AlternateNameKind.ADDRESS, value)

    @classmethod
    def email(cls, value: str) -> "CertificateAlternateName":
        return cls(AlternateNameKind.EMAIL, value)

    @classmethod
    def uri(cls, value: str) -> "CertificateAlternateName":
        return cls(AlternateNameKind.URI, value)

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value
