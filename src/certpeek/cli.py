"""
Command-line interface for certpeek.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from . import __version__

if TYPE_CHECKING:
    from .console import ConsoleOutput

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "-"
DEFAULT_FORMAT = "text"


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="certpeek",
        description="Inspect DER or PEM encoded X.509 certificates and TBS certificate bodies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show a certificate
  certpeek server.der

  # Several files, JSON to a file
  certpeek chain.pem unsigned.der --format json -o results.json
        """,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument("files", nargs="+", metavar="FILE", help="DER or PEM input file")

    # Output options
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default=DEFAULT_FORMAT,
        help=f"Output format (default: {DEFAULT_FORMAT})",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        default=DEFAULT_OUTPUT,
        help="JSON output file path, '-' for stdout (default: -)",
    )

    # Logging options
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="Log output to file",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress informational output",
    )

    return parser


def validate_args(args: argparse.Namespace) -> Optional[str]:
    """
    Validate parsed arguments.

    Returns:
        Error message if validation fails, None otherwise.
    """
    if args.output != DEFAULT_OUTPUT and args.format != "json":
        return "--output requires --format json."

    for file_path in args.files:
        if Path(file_path).is_dir():
            return f"Not a file: {file_path}"

    return None


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 if every input decoded, 1 otherwise).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    error = validate_args(args)
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    from .console import ConsoleOutput

    log_level = getattr(logging, args.log_level.upper())
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=args.log_file if args.log_file else None,
    )

    console = ConsoleOutput(quiet=args.quiet)

    try:
        return run(args, console)
    except KeyboardInterrupt:
        console.error("\nInterrupted by user")
        return 130
    except Exception as e:
        console.error(f"Fatal error: {e}")
        logger.exception("Fatal error while parsing")
        return 1


def run(args: argparse.Namespace, console: "ConsoleOutput") -> int:
    """
    Parse every input file and report the results.

    Args:
        args: Parsed command-line arguments
        console: Console output handler

    Returns:
        Exit code
    """
    from .certificate import decode
    from .console import ParseStatistics
    from .errors import CertificateDecodeError
    from .input_parser import InputParser
    from .output import OutputFormatter, certificate_to_dict

    stats = ParseStatistics()
    results: List[Dict[str, Any]] = []

    for file_path in args.files:
        try:
            blobs = InputParser.read_blobs(file_path)
        except (OSError, ValueError) as e:
            console.error(f"Cannot read {file_path}: {e}")
            logger.debug(f"Failed to read {file_path}", exc_info=True)
            stats.total += 1
            stats.failed += 1
            results.append({"input": file_path, "status": "error", "error": str(e)})
            continue

        for blob in blobs:
            if blob.pem_type is not None and "CERTIFICATE" not in blob.pem_type:
                console.warning(f"{blob.label}: unexpected PEM block type {blob.pem_type}")
            try:
                certificate = decode(blob.data)
            except CertificateDecodeError as e:
                stats.record(None)
                console.error(f"{blob.label}: {e}")
                results.append(
                    {
                        "input": blob.label,
                        "status": "error",
                        "error": str(e),
                        "error_code": e.error_code.value,
                        "error_details": e.error_details,
                    }
                )
                continue

            stats.record(certificate)
            results.append(
                {
                    "input": blob.label,
                    "status": "success",
                    "certificate": certificate_to_dict(certificate),
                }
            )
            if args.format == "text":
                console.print_certificate(blob.label, certificate)

    if args.format == "json":
        output_formatter = OutputFormatter(args.output)
        output_data = output_formatter.create_output(
            results=results,
            parameters={"files": list(args.files)},
            statistics={
                "total": stats.total,
                "signed": stats.signed,
                "pending": stats.pending,
                "failed": stats.failed,
                "elapsed_seconds": stats.elapsed_time,
            },
        )
        if args.output == DEFAULT_OUTPUT:
            output_formatter.write_stdout(output_data)
        else:
            output_formatter.write_json(output_data)
            console.success(f"Results written to: {args.output}")
    else:
        console.print_summary(stats)

    return 1 if stats.failed else 0


if __name__ == "__main__":
    sys.exit(main())
