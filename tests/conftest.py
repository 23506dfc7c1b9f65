"""
Shared certificate fixtures.

Certificates are generated at test time with cryptography's
CertificateBuilder.
"""

import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

GOOGLE_SERIAL = 0xC32C4755630366DD0A1C6E610FA46597
GOOGLE_NOT_BEFORE = 1675280639
GOOGLE_NOT_AFTER = 1682538238


def utc(timestamp: int) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(timestamp, tz=datetime.timezone.utc)


@pytest.fixture(scope="session")
def signing_key():
    """EC key used to sign every generated certificate."""
    return ec.generate_private_key(ec.SECP256R1(), default_backend())


@pytest.fixture(scope="session")
def build_certificate(signing_key):
    """
    Factory building a signed cryptography Certificate.

    Keyword arguments override the defaults: subject/issuer as lists of
    NameAttribute, san as a list of GeneralName (None for no extension),
    ca for basicConstraints (None for no extension), serial, not_before,
    not_after.
    """

    def build(
        subject=None,
        issuer=None,
        san=None,
        ca=None,
        serial=1000,
        not_before=None,
        not_after=None,
    ):
        now = datetime.datetime.now(datetime.timezone.utc)
        subject_name = x509.Name(
            subject
            if subject is not None
            else [
                x509.NameAttribute(NameOID.COUNTRY_NAME, "US"),
                x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Test Org"),
                x509.NameAttribute(NameOID.COMMON_NAME, "test.example.com"),
            ]
        )
        issuer_name = x509.Name(issuer) if issuer is not None else subject_name

        builder = (
            x509.CertificateBuilder()
            .subject_name(subject_name)
            .issuer_name(issuer_name)
            .public_key(signing_key.public_key())
            .serial_number(serial)
            .not_valid_before(not_before or now - datetime.timedelta(days=1))
            .not_valid_after(not_after or now + datetime.timedelta(days=365))
        )
        if san is not None:
            builder = builder.add_extension(x509.SubjectAlternativeName(san), critical=False)
        if ca is not None:
            builder = builder.add_extension(
                x509.BasicConstraints(ca=ca, path_length=None), critical=True
            )

        return builder.sign(signing_key, hashes.SHA256(), backend=default_backend())

    return build


@pytest.fixture
def der(build_certificate):
    """DER encoding of a default test certificate."""
    return build_certificate().public_bytes(serialization.Encoding.DER)


@pytest.fixture(scope="session")
def google_certificate(build_certificate):
    """
    Rebuilt stand-in for the captured www.google.com certificate.

    Copies that certificate's issuer, subject, SAN, serial and validity
    fields, but is signed here with a throwaway key, so its bytes and
    signature differ from the captured certificate.
    """
    return build_certificate(
        subject=[x509.NameAttribute(NameOID.COMMON_NAME, "www.google.com")],
        issuer=[
            x509.NameAttribute(NameOID.COUNTRY_NAME, "US"),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Google Trust Services LLC"),
            x509.NameAttribute(NameOID.COMMON_NAME, "GTS CA 1C3"),
        ],
        san=[x509.DNSName("www.google.com")],
        ca=False,
        serial=GOOGLE_SERIAL,
        not_before=utc(GOOGLE_NOT_BEFORE),
        not_after=utc(GOOGLE_NOT_AFTER),
    )


@pytest.fixture(scope="session")
def google_der(google_certificate):
    return google_certificate.public_bytes(serialization.Encoding.DER)


@pytest.fixture(scope="session")
def google_tbs(google_certificate):
    """The to-be-signed body of the google certificate, without signature."""
    return google_certificate.tbs_certificate_bytes
