"""
Console output and parse statistics.
"""

import sys
import threading
import time
from dataclasses import dataclass
from typing import Optional

from .certificate import Certificate


@dataclass
class ParseStatistics:
    """Statistics for a parse run."""

    total: int = 0
    signed: int = 0
    pending: int = 0
    failed: int = 0
    start_time: float = 0.0

    def __post_init__(self):
        if self.start_time == 0.0:
            self.start_time = time.time()

    @property
    def parsed(self) -> int:
        return self.signed + self.pending

    @property
    def elapsed_time(self) -> float:
        """Get elapsed time in seconds."""
        return time.time() - self.start_time

    def record(self, certificate: Optional[Certificate]) -> None:
        """Count one input and its outcome."""
        self.total += 1
        if certificate is None:
            self.failed += 1
        elif certificate.is_pending:
            self.pending += 1
        else:
            self.signed += 1


class ConsoleOutput:
    """
    Handles console output.

    Thread-safe so several callers can share one instance.
    """

    def __init__(self, quiet: bool = False, use_colors: bool = True):
        """
        Initialize console output handler.

        Args:
            quiet: Suppress informational output
            use_colors: Use ANSI color codes (if terminal supports)
        """
        self.quiet = quiet
        self.use_colors = use_colors and self._supports_color()
        self._lock = threading.Lock()

    @staticmethod
    def _supports_color() -> bool:
        """Check if terminal supports ANSI colors."""
        if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
            return False

        import os

        term = os.environ.get("TERM", "")
        if term in ("dumb", ""):
            return False

        return True

    def _colorize(self, text: str, color_code: str) -> str:
        """
        Add ANSI color codes to text.

        Args:
            text: Text to colorize
            color_code: ANSI color code

        Returns:
            Colorized text (or plain text if colors disabled)
        """
        if not self.use_colors:
            return text
        return f"\033[{color_code}m{text}\033[0m"

    def success(self, message: str) -> None:
        """Print success message in green."""
        if self.quiet:
            return
        with self._lock:
            print(self._colorize(message, "32"))

    def error(self, message: str) -> None:
        """Print error message in red."""
        with self._lock:
            print(self._colorize(message, "31"), file=sys.stderr)

    def warning(self, message: str) -> None:
        """Print warning message in yellow."""
        with self._lock:
            print(self._colorize(message, "33"), file=sys.stderr)

    def info(self, message: str) -> None:
        """Print info message."""
        if self.quiet:
            return
        with self._lock:
            print(message)

    @staticmethod
    def format_certificate(label: str, certificate: Certificate) -> str:
        """
        Render a certificate as indented text.

        Args:
            label: Input label shown in the heading
            certificate: Parsed certificate

        Returns:
            Multi-line text block
        """
        validity = certificate.validity
        lines = [
            f"{label} [{certificate.kind.value}]",
            f"  Serial:        {certificate.serial.hex(':').upper()}",
            f"  Authority:     {'yes' if certificate.authority else 'no'}",
            "  Issuer:",
        ]
        for field_label, value in (
            ("Name", certificate.issuer_name),
            ("Country", certificate.issuer_country),
            ("State", certificate.issuer_state),
            ("Organization", certificate.issuer_organization),
            ("Org. unit", certificate.issuer_organizational_unit),
        ):
            if value is not None:
                lines.append(f"    {field_label + ':':<13}{value}")

        lines.append("  Subject:")
        for field_label, value in (
            ("Name", certificate.subject_name),
            ("Country", certificate.subject_country),
            ("State", certificate.subject_state),
            ("Organization", certificate.subject_organization),
            ("Org. unit", certificate.subject_organizational_unit),
        ):
            if value is not None:
                lines.append(f"    {field_label + ':':<13}{value}")

        for alternate in certificate.subject_alternate_names:
            lines.append(f"    {alternate.kind.value + ':':<13}{alternate.value}")

        lines.append(
            f"  Validity:      {validity.time_begin.isoformat()} -> {validity.time_end.isoformat()}"
            f" ({'current' if validity.is_within_valid_time() else 'not current'})"
        )
        return "\n".join(lines)

    def print_certificate(self, label: str, certificate: Certificate) -> None:
        """Print a certificate to stdout, even in quiet mode."""
        with self._lock:
            print(self.format_certificate(label, certificate))

    def print_summary(self, stats: ParseStatistics) -> None:
        """
        Print final parse summary.

        Args:
            stats: Final statistics
        """
        if self.quiet:
            return
        with self._lock:
            print()
            print("=" * 60)
            print("Parse Summary")
            print("=" * 60)
            print(f"Inputs:         {stats.total}")
            print(f"Signed:         {stats.signed}")
            print(f"Pending (TBS):  {stats.pending}")
            print(f"Failed:         {stats.failed}")
            print(f"Elapsed:        {stats.elapsed_time:.3f}s")
            print("=" * 60)
