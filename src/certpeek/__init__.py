"""
certpeek - X.509 Certificate Inspection

Parses DER-encoded X.509 certificates, or bare to-be-signed certificate
bodies, into immutable values exposing issuer and subject identity,
alternate names, validity window, serial number and the raw bytes consumed.
"""

__version__ = "1.0.0"
__author__ = "certpeek Team"

__all__ = [
    "parse",
    "decode",
    "Certificate",
    "CertificateKind",
    "CertificateData",
    "CertificateValidity",
    "CertificateAlternateName",
    "AlternateNameKind",
    "CertificateDecodeError",
    "ErrorCode",
]


def __getattr__(name: str):
    """Lazy import module attributes on first access."""
    if name in ("parse", "decode", "Certificate", "CertificateKind", "CertificateData"):
        from . import certificate

        return getattr(certificate, name)
    elif name == "CertificateValidity":
        from .validity import CertificateValidity
        return CertificateValidity
    elif name in ("CertificateAlternateName", "AlternateNameKind"):
        from . import alternate_name

        return getattr(alternate_name, name)
    elif name in ("CertificateDecodeError", "ErrorCode"):
        from . import errors

        return getattr(errors, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
