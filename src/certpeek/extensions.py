"""
Extension handling: CA flag and Subject Alternative Name extraction.
"""

import ipaddress
import logging
from typing import Any, List, Optional, Tuple

from asn1crypto import core, x509

from .alternate_name import CertificateAlternateName
from .fields import format_name, ia5_text

logger = logging.getLogger(__name__)

BASIC_CONSTRAINTS = "2.5.29.19"
SUBJECT_ALT_NAME = "2.5.29.17"

# Octet counts accepted for iPAddress entries
IPV4_LENGTH = 4
IPV6_LENGTH = 16


def iter_extensions(tbs: x509.TbsCertificate) -> List[x509.Extension]:
    """Return the extension list, empty when the body carries none."""
    extensions = tbs["extensions"]
    if isinstance(extensions, core.Void):
        return []
    return list(extensions)


def find_extension(tbs: x509.TbsCertificate, oid: str) -> Optional[Any]:
    """
    Return the parsed value of a single extension.

    Args:
        tbs: Decoded to-be-signed body
        oid: Dotted extension OID

    Returns:
        The parsed extension value, or None if the extension is missing,
        present more than once, or fails to parse
    """
    matches = [
        extension for extension in iter_extensions(tbs) if extension["extn_id"].dotted == oid
    ]
    if not matches:
        return None
    if len(matches) > 1:
        logger.debug(f"Extension {oid} appears {len(matches)} times, ignoring it")
        return None

    try:
        return matches[0]["extn_value"].parsed
    except (ValueError, TypeError, KeyError) as e:
        logger.debug(f"Failed to parse extension {oid}: {e}")
        return None


def is_authority(tbs: x509.TbsCertificate) -> bool:
    """Check the cA flag of the basicConstraints extension."""
    constraints = find_extension(tbs, BASIC_CONSTRAINTS)
    if constraints is None:
        return False
    try:
        return bool(constraints["ca"].native)
    except (ValueError, TypeError, KeyError):
        return False


def map_general_name(general_name: x509.GeneralName) -> Optional[CertificateAlternateName]:
    """
    Map one general name to an alternate name.

    Returns:
        The mapped alternate name, or None for unsupported kinds and
        iPAddress entries that are neither 4 nor 16 octets
    """
    kind = general_name.name
    value = general_name.chosen

    if kind == "directory_name":
        return CertificateAlternateName.directory(format_name(value))
    if kind == "rfc822_name":
        return CertificateAlternateName.email(ia5_text(value))
    if kind == "dns_name":
        return CertificateAlternateName.hostname(ia5_text(value))
    if kind == "uniform_resource_identifier":
        return CertificateAlternateName.uri(ia5_text(value))
    if kind == "ip_address":
        octets = value.contents
        if len(octets) not in (IPV4_LENGTH, IPV6_LENGTH):
            logger.debug(f"Dropping iPAddress entry with {len(octets)} octets")
            return None
        return CertificateAlternateName.address(str(ipaddress.ip_address(octets)))

    logger.debug(f"Dropping unsupported general name kind: {kind}")
    return None


def extract_alternate_names(
    tbs: x509.TbsCertificate, subject_name: Optional[str]
) -> Tuple[CertificateAlternateName, ...]:
    """
    Read the Subject Alternative Name extension.

    Entries that cannot be mapped are dropped, as are entries whose text is
    exactly the subject common name (case-sensitive).

    Args:
        tbs: Decoded to-be-signed body
        subject_name: Subject common name, if any

    Returns:
        Alternate names in extension order
    """
    general_names = find_extension(tbs, SUBJECT_ALT_NAME)
    if general_names is None:
        return ()

    alternate_names: List[CertificateAlternateName] = []
    try:
        entries = list(general_names)
    except (ValueError, TypeError) as e:
        logger.debug(f"Malformed Subject Alternative Name extension: {e}")
        return ()

    for general_name in entries:
        try:
            alternate = map_general_name(general_name)
        except (ValueError, TypeError, KeyError) as e:
            logger.debug(f"Dropping undecodable general name: {e}")
            continue
        if alternate is None:
            continue
        if subject_name is not None and alternate.value == subject_name:
            continue
        alternate_names.append(alternate)

    return tuple(alternate_names)
