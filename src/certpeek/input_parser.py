"""
Input file reading: DER and PEM certificate files.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from asn1crypto import pem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputBlob:
    """One DER buffer read from an input file."""

    label: str
    data: bytes
    pem_type: Optional[str] = None


class InputParser:
    """
    Reads certificate files for the command-line tool.

    A file holds either one raw DER buffer or one or more PEM blocks of any
    type (CERTIFICATE, TBS bodies, and so on).
    """

    @staticmethod
    def read_blobs(file_path: str) -> List[InputBlob]:
        """
        Read a file into DER buffers.

        Args:
            file_path: Path to a DER or PEM file

        Returns:
            One blob for a DER file, one per block for a PEM file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file looks like PEM but cannot be unarmored
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Certificate file not found: {file_path}")

        data = path.read_bytes()
        return InputParser.split_blobs(data, str(path))

    @staticmethod
    def split_blobs(data: bytes, label: str) -> List[InputBlob]:
        """
        Split raw file contents into DER buffers.

        Args:
            data: File contents
            label: Name used to label the blobs

        Returns:
            List of InputBlob; PEM blocks are labelled ``label#N``
        """
        if not pem.detect(data):
            return [InputBlob(label=label, data=data)]

        blobs = []
        for index, (pem_type, _headers, der_bytes) in enumerate(
            pem.unarmor(data, multiple=True), 1
        ):
            blobs.append(InputBlob(label=f"{label}#{index}", data=der_bytes, pem_type=pem_type))

        if not blobs:
            raise ValueError(f"No PEM blocks found in {label}")

        logger.debug(f"Read {len(blobs)} PEM block(s) from {label}")
        return blobs
