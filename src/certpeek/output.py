"""
Output formatting and JSON export.
"""

import dataclasses
import hashlib
import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from .certificate import Certificate


def _isoformat(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def to_json_ready(value: Any) -> Any:
    """
    Convert dataclass output to JSON-compatible values.

    bytes become lowercase hex, datetimes ISO-8601 with ``Z``, enums their
    values, tuples lists.
    """
    if isinstance(value, dict):
        return {key: to_json_ready(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_ready(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, datetime):
        return _isoformat(value)
    if isinstance(value, Enum):
        return value.value
    return value


def certificate_to_dict(certificate: Certificate) -> Dict[str, Any]:
    """
    Flatten a certificate into a JSON-ready dictionary.

    Args:
        certificate: Parsed certificate

    Returns:
        Dictionary with the certificate fields plus ``kind``,
        ``is_within_valid_time`` and the SHA-256 of the raw bytes
    """
    result = to_json_ready(dataclasses.asdict(certificate.data))
    result["validity"]["timestamp_begin"] = certificate.validity.timestamp_begin
    result["validity"]["timestamp_end"] = certificate.validity.timestamp_end
    result["kind"] = certificate.kind.value
    result["is_within_valid_time"] = certificate.validity.is_within_valid_time()
    result["sha256"] = hashlib.sha256(certificate.raw).hexdigest()
    return result


class OutputFormatter:
    """Handles formatting and exporting parse results."""

    def __init__(self, output_path: str):
        """
        Initialize output formatter.

        Args:
            output_path: Path to output file, or "-" for stdout
        """
        self.output_path = Path(output_path)

    def create_output(
        self,
        results: List[Dict[str, Any]],
        parameters: Dict[str, Any],
        statistics: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Create structured output dictionary.

        Args:
            results: One entry per input blob
            parameters: Run parameters
            statistics: Parse statistics

        Returns:
            Complete output structure
        """
        return {
            "metadata": {
                "version": "1.0",
                "generated_at": _isoformat(datetime.now(timezone.utc)),
                "parameters": parameters,
                "statistics": statistics,
            },
            "results": results,
        }

    def write_json(self, data: Dict[str, Any]) -> None:
        """
        Write data to JSON file atomically.

        Args:
            data: Data to write
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = self.output_path.with_suffix(".tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            temp_path.replace(self.output_path)

        except Exception as e:
            if temp_path.exists():
                temp_path.unlink()
            raise IOError(f"Failed to write output file: {e}") from e

    def write_stdout(self, data: Dict[str, Any]) -> None:
        """
        Write data to stdout.

        Args:
            data: Data to write
        """
        print(json.dumps(data, indent=2, ensure_ascii=False))
