"""
Command Line Interface for Bristol circuits.
Provides commands for inspecting, validating and indexing circuit files.

Usage:
    python -m bristol_circuits info PATH [--full] [--json]
    python -m bristol_circuits validate PATH
    python -m bristol_circuits index ROOT [--json]
    python -m bristol_circuits serve [--host HOST] [--port PORT]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .circuit import Circuit
from .circuits.formats import (
    circuit_to_json,
    compute_circuit_hash,
    index_circuit_directory,
    load_circuit,
)
from .exceptions import BristolFormatError
from .validation import validate_circuit

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_INVALID = 2


def setup_logging(level: str = "WARNING"):
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bristol_circuits",
        description="Bristol Circuits - Parse, inspect and validate Bristol format circuits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set the logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Info command
    info_parser = subparsers.add_parser("info", help="Show circuit file info")
    info_parser.add_argument("path", help="Path to Bristol circuit file")
    info_parser.add_argument("--full", "-f", action="store_true", help="Show all gates")
    info_parser.add_argument("--json", "-j", action="store_true", help="Print canonical JSON")

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", help="Parse a circuit file and check its consistency"
    )
    validate_parser.add_argument("path", help="Path to Bristol circuit file")

    # Index command
    index_parser = subparsers.add_parser("index", help="Parse every circuit file under a directory")
    index_parser.add_argument("root", help="Root directory to scan")
    index_parser.add_argument(
        "--ext",
        action="append",
        dest="extensions",
        help="File extension to include (repeatable, default: .txt and .bristol)",
    )
    index_parser.add_argument("--json", "-j", action="store_true", help="JSON output")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Server host (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Server port (default: 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    return parser


def _report_error(path: str, error: Exception) -> None:
    kind = getattr(error, "kind", type(error).__name__)
    print(f"✗ {path}: {kind}: {error}", file=sys.stderr)


def format_circuit_info(circuit: Circuit, path: str, full: bool = False) -> str:
    """Format a human readable circuit summary."""
    header = circuit.header
    lines = [
        f"File: {path}",
        f"Gates: {circuit.gate_count} (declared {header.num_gates})",
        f"Wires: {header.num_wires}",
        f"Input ports: {header.num_inputs} {list(header.num_input_wires)}",
        f"Output ports: {header.num_outputs} {list(header.num_output_wires)}",
        f"Hash: {compute_circuit_hash(circuit)}",
        "",
        "Composition:",
    ]
    for gate_type, count in circuit.gate_composition().items():
        lines.append(f"  {gate_type}: {count}")

    if full:
        lines.append("")
        lines.append("Gates (type inputs -> outputs):")
        for i, gate in enumerate(circuit.gates):
            inputs = " ".join(str(w) for w in gate.inputs)
            outputs = " ".join(str(w) for w in gate.outputs)
            lines.append(f"  {i:4}: {gate.gate_type.value:<3} {inputs} -> {outputs}")

    return "\n".join(lines)


def cmd_info(args) -> int:
    """Handle info command."""
    try:
        circuit = load_circuit(args.path)
    except (BristolFormatError, OSError, UnicodeDecodeError) as e:
        logger.error(f"Info failed: {e}")
        _report_error(args.path, e)
        return EXIT_PARSE_ERROR

    if args.json:
        print(json.dumps(circuit_to_json(circuit, source=str(args.path)), indent=2))
    else:
        print(format_circuit_info(circuit, args.path, full=args.full))

    return EXIT_OK


def cmd_validate(args) -> int:
    """Handle validate command."""
    try:
        circuit = load_circuit(args.path)
    except (BristolFormatError, OSError, UnicodeDecodeError) as e:
        logger.error(f"Validation failed: {e}")
        _report_error(args.path, e)
        return EXIT_PARSE_ERROR

    report = validate_circuit(circuit)
    if report.is_valid:
        print(f"✓ {args.path}: valid ({circuit.gate_count} gates, {circuit.header.num_wires} wires)")
        return EXIT_OK

    print(f"✗ {args.path}: {len(report.issues)} issue(s)")
    for issue in report.issues:
        print(f"  [{issue.kind}] {issue.message}")
    return EXIT_INVALID


def cmd_index(args) -> int:
    """Handle index command."""
    root = Path(args.root)
    if not root.is_dir():
        print(f"Directory not found: {root}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    entries = index_circuit_directory(root, args.extensions)
    failed = [entry for entry in entries if not entry["ok"]]

    if args.json:
        print(json.dumps(entries, indent=2))
    else:
        print(f"Found {len(entries)} circuit files ({len(failed)} failed):\n")
        for entry in entries:
            if entry["ok"]:
                print(
                    f"✓ {entry['hash'][:8]}  {entry['num_wires']:6}w  "
                    f"{entry['gate_count']:7}g  {entry['path']}"
                )
            else:
                print(f"✗ {entry['error_kind']:<20} {entry['path']}: {entry['error']}")

    return EXIT_PARSE_ERROR if failed else EXIT_OK


def cmd_serve(args) -> int:
    """Handle serve command."""
    from .api.server import run_server

    run_server(host=args.host, port=args.port, reload=args.reload, debug=args.debug)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_PARSE_ERROR

    setup_logging(args.log_level)

    if args.command == "info":
        return cmd_info(args)
    elif args.command == "validate":
        return cmd_validate(args)
    elif args.command == "index":
        return cmd_index(args)
    else:
        return cmd_serve(args)


if __name__ == "__main__":
    sys.exit(main())
