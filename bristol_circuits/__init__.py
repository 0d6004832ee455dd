"""
Bristol Circuits.

Parser for Bristol format boolean circuits, the interchange format used by
secure multi-party computation and garbled-circuit tooling. Provides the
circuit data model, the text parser, consistency checks, file utilities,
a command line interface and an HTTP API.
"""

__version__ = "0.1.0"

from .circuit import AndGate, Circuit, Gate, GateType, Header, InvGate, XorGate
from .exceptions import (
    ArityMismatch,
    BristolFormatError,
    CircuitValidationError,
    MalformedNumber,
    StructuralError,
    UnknownGateType,
    UnsupportedGateType,
)
from .parser import SourceLine, parse, parse_gate, parse_header, split_lines
from .validation import ValidationIssue, ValidationReport, validate_circuit
from .circuits import circuit_to_json, load_circuit

__all__ = [
    # Data model
    "Circuit",
    "Header",
    "Gate",
    "GateType",
    "XorGate",
    "AndGate",
    "InvGate",
    # Parsing
    "parse",
    "parse_header",
    "parse_gate",
    "split_lines",
    "SourceLine",
    # Errors
    "BristolFormatError",
    "StructuralError",
    "MalformedNumber",
    "ArityMismatch",
    "UnsupportedGateType",
    "UnknownGateType",
    "CircuitValidationError",
    # Validation
    "validate_circuit",
    "ValidationReport",
    "ValidationIssue",
    # Files
    "load_circuit",
    "circuit_to_json",
]
