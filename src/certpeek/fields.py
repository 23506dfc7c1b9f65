"""
Identity attribute extraction from X.509 issuer and subject names.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from asn1crypto import core, x509

logger = logging.getLogger(__name__)

# Attribute type OIDs
COMMON_NAME = "2.5.4.3"
COUNTRY_NAME = "2.5.4.6"
STATE_OR_PROVINCE_NAME = "2.5.4.8"
ORGANIZATION_NAME = "2.5.4.10"
ORGANIZATIONAL_UNIT_NAME = "2.5.4.11"

# Short names used when rendering a directory name as text
SHORT_NAMES = {
    COMMON_NAME: "CN",
    COUNTRY_NAME: "C",
    STATE_OR_PROVINCE_NAME: "ST",
    "2.5.4.7": "L",
    "2.5.4.9": "street",
    ORGANIZATION_NAME: "O",
    ORGANIZATIONAL_UNIT_NAME: "OU",
    "2.5.4.5": "serialNumber",
    "2.5.4.4": "SN",
    "2.5.4.42": "givenName",
    "2.5.4.12": "title",
    "0.9.2342.19200300.100.1.1": "UID",
    "0.9.2342.19200300.100.1.25": "DC",
    "1.2.840.113549.1.9.1": "emailAddress",
}


@dataclass(frozen=True)
class NameFields:
    """The identity attributes pulled out of one issuer or subject name."""

    common_name: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    organization: Optional[str] = None
    organizational_unit: Optional[str] = None


def iter_attributes(name: x509.Name) -> Iterator[Tuple[str, x509.NameTypeAndValue]]:
    """Yield ``(dotted_oid, attribute)`` pairs in encoding order."""
    for rdn in name.chosen:
        for attribute in rdn:
            yield attribute["type"].dotted, attribute


def ia5_text(value: core.IA5String) -> str:
    """
    Return an IA5String exactly as encoded.

    asn1crypto's ``native`` IDNA-decodes DNSName and EmailAddress values and
    converts URI values to IRIs; the raw octets avoid both.

    Raises:
        ValueError: If the octets are not ASCII
    """
    return value.contents.decode("ascii")


def attribute_text(attribute: x509.NameTypeAndValue) -> Optional[str]:
    """
    Decode an attribute value as text.

    emailAddress and domainComponent values are returned as encoded.

    Returns:
        The string value, or None if the value is not decodable text
    """
    try:
        value = attribute["value"]
        if isinstance(value, core.IA5String):
            return ia5_text(value)
        value = value.native
    except (ValueError, TypeError, KeyError) as e:
        logger.debug(f"Undecodable attribute value: {e}")
        return None
    if isinstance(value, str):
        return value
    return None


def first_text(name: x509.Name, oid: str) -> Optional[str]:
    """
    Find the first attribute of a type that decodes as text.

    Later occurrences of the same type are ignored; occurrences that fail
    to decode are skipped.

    Args:
        name: Issuer or subject name
        oid: Dotted attribute type OID

    Returns:
        The attribute text, or None if no occurrence decodes
    """
    for attribute_oid, attribute in iter_attributes(name):
        if attribute_oid != oid:
            continue
        text = attribute_text(attribute)
        if text is not None:
            return text
    return None


def extract_name_fields(name: x509.Name) -> NameFields:
    """Extract the five identity attributes from a name."""
    return NameFields(
        common_name=first_text(name, COMMON_NAME),
        country=first_text(name, COUNTRY_NAME),
        state=first_text(name, STATE_OR_PROVINCE_NAME),
        organization=first_text(name, ORGANIZATION_NAME),
        organizational_unit=first_text(name, ORGANIZATIONAL_UNIT_NAME),
    )


def format_name(name: x509.Name) -> str:
    """
    Render a name as ``CN=example.com, O=Example``.

    Attributes are kept in encoding order, multi-valued RDNs are joined with
    `` + ``, and values that are not text are rendered as ``#`` followed by
    the hex of their encoding.
    """
    parts = []
    for rdn in name.chosen:
        rendered = []
        for attribute in rdn:
            oid = attribute["type"].dotted
            text = attribute_text(attribute)
            if text is None:
                text = "#" + attribute["value"].dump().hex()
            rendered.append(f"{SHORT_NAMES.get(oid, oid)}={text}")
        parts.append(" + ".join(rendered))
    return ", ".join(parts)
