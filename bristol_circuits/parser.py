"""
Bristol format parser.

Converts the text of a Bristol circuit file into a Circuit:

    <num_gates> <num_wires>
    <num_input_ports> <in_port_0_wires> ...
    <num_output_ports> <out_port_0_wires> ...

    <in_count> <out_count> <wire_ids...> <GATE_TAG>
    ...

The header is always the first three non-blank lines. Every remaining
non-blank line is one gate, typed by its trailing tag.
"""

import logging
import re
from typing import Callable, Dict, List, NamedTuple, Sequence, Tuple

from .circuit import AndGate, Circuit, Gate, Header, InvGate, XorGate
from .exceptions import (
    ArityMismatch,
    BristolFormatError,
    MalformedNumber,
    StructuralError,
    UnknownGateType,
    UnsupportedGateType,
)

logger = logging.getLogger(__name__)

HEADER_LINES = 3
MAX_WIRE_VALUE = 2**32 - 1

# Tags that are part of the Bristol vocabulary but not implemented here
UNSUPPORTED_GATE_TAGS = ("EQ", "EQW", "MAND")

_DIGITS = re.compile(r"[0-9]+")


class SourceLine(NamedTuple):
    """A non-blank line together with its 1-based position in the source text."""

    number: int
    text: str


# =============================================================================
# Line Tokenizer
# =============================================================================

def split_lines(text: str) -> List[SourceLine]:
    """
    Split raw text into non-blank lines, in order.

    Only the line terminator is removed (``\\n`` and an optional ``\\r``);
    whitespace inside a line is left for field splitting. Blank lines are
    dropped but the source line numbers are kept.

    Raises:
        StructuralError: if fewer than three non-blank lines remain.
    """
    lines = []
    for number, raw in enumerate(text.split("\n"), 1):
        if raw.endswith("\r"):
            raw = raw[:-1]
        if raw:
            lines.append(SourceLine(number, raw))

    if len(lines) < HEADER_LINES:
        raise StructuralError(
            "too few lines for a header",
            field="header",
            expected=f"at least {HEADER_LINES} non-blank lines",
            found=str(len(lines)),
        )

    return lines


def _parse_number(token: str, source: SourceLine, field: str) -> int:
    """Parse a non-negative 32-bit integer token."""
    if not _DIGITS.fullmatch(token):
        raise MalformedNumber(
            "not a non-negative integer",
            line_number=source.number,
            line=source.text,
            field=field,
            expected="a non-negative integer",
            found=repr(token),
        )

    value = int(token)
    if value > MAX_WIRE_VALUE:
        raise MalformedNumber(
            "integer out of range",
            line_number=source.number,
            line=source.text,
            field=field,
            expected=f"at most {MAX_WIRE_VALUE}",
            found=token,
        )
    return value


def _tokens(source: SourceLine, field: str) -> List[str]:
    tokens = source.text.split()
    if not tokens:
        raise StructuralError(
            "line has no tokens",
            line_number=source.number,
            line=source.text,
            field=field,
        )
    return tokens


# =============================================================================
# Header Parser
# =============================================================================

def _parse_general_line(source: SourceLine) -> Tuple[int, int]:
    tokens = _tokens(source, "header")
    if len(tokens) != 2:
        raise StructuralError(
            "wrong number of tokens",
            line_number=source.number,
            line=source.text,
            field="header",
            expected="2 (num_gates num_wires)",
            found=str(len(tokens)),
        )

    num_gates = _parse_number(tokens[0], source, "num_gates")
    num_wires = _parse_number(tokens[1], source, "num_wires")
    return num_gates, num_wires


def _parse_port_line(source: SourceLine, field: str) -> Tuple[int, ...]:
    tokens = _tokens(source, field)
    num_ports = _parse_number(tokens[0], source, f"{field} port count")

    port_tokens = tokens[1:]
    if len(port_tokens) != num_ports:
        raise StructuralError(
            "declared port count does not match the port list",
            line_number=source.number,
            line=source.text,
            field=field,
            expected=f"{num_ports} port wire counts",
            found=str(len(port_tokens)),
        )

    return tuple(
        _parse_number(token, source, f"{field} port {index}")
        for index, token in enumerate(port_tokens)
    )


def parse_header(lines: Sequence[SourceLine]) -> Header:
    """
    Parse the three header lines into a Header.

    Line 1 holds num_gates and num_wires, line 2 the input ports and line 3
    the output ports (a port count followed by that many wire counts).
    """
    if len(lines) != HEADER_LINES:
        raise StructuralError(
            "header must be exactly three lines",
            field="header",
            expected=str(HEADER_LINES),
            found=str(len(lines)),
        )

    num_gates, num_wires = _parse_general_line(lines[0])
    num_input_wires = _parse_port_line(lines[1], "input ports")
    num_output_wires = _parse_port_line(lines[2], "output ports")

    return Header(
        num_gates=num_gates,
        num_wires=num_wires,
        num_input_wires=num_input_wires,
        num_output_wires=num_output_wires,
    )


# =============================================================================
# Gate Parser
# =============================================================================

def _gate_wires(
    tokens: List[str], source: SourceLine, tag: str, num_inputs: int, num_outputs: int
) -> List[int]:
    """Check a gate line's arity and token count, then return its wire ids."""
    # counts must be the exact tokens "2"/"1"; padded forms like "02" are rejected
    _parse_number(tokens[0], source, f"{tag} input count")
    _parse_number(tokens[1], source, f"{tag} output count")
    in_count, out_count = tokens[0], tokens[1]

    if in_count != str(num_inputs):
        raise ArityMismatch(
            "wrong number of input wires",
            line_number=source.number,
            line=source.text,
            field=f"{tag} input count",
            expected=str(num_inputs),
            found=in_count,
        )
    if out_count != str(num_outputs):
        raise ArityMismatch(
            "wrong number of output wires",
            line_number=source.number,
            line=source.text,
            field=f"{tag} output count",
            expected=str(num_outputs),
            found=out_count,
        )

    wire_tokens = tokens[2:-1]
    if len(wire_tokens) != num_inputs + num_outputs:
        raise StructuralError(
            "wrong number of wire ids",
            line_number=source.number,
            line=source.text,
            field=f"{tag} wires",
            expected=str(num_inputs + num_outputs),
            found=str(len(wire_tokens)),
        )

    return [
        _parse_number(token, source, f"{tag} wire {index}")
        for index, token in enumerate(wire_tokens)
    ]


def _parse_xor(tokens: List[str], source: SourceLine) -> Gate:
    input_a, input_b, output = _gate_wires(tokens, source, "XOR", 2, 1)
    return XorGate(input_a=input_a, input_b=input_b, output=output)


def _parse_and(tokens: List[str], source: SourceLine) -> Gate:
    input_a, input_b, output = _gate_wires(tokens, source, "AND", 2, 1)
    return AndGate(input_a=input_a, input_b=input_b, output=output)


def _parse_inv(tokens: List[str], source: SourceLine) -> Gate:
    input_wire, output = _gate_wires(tokens, source, tokens[-1], 1, 1)
    return InvGate(input=input_wire, output=output)


GATE_PARSERS: Dict[str, Callable[[List[str], SourceLine], Gate]] = {
    "XOR": _parse_xor,
    "AND": _parse_and,
    "INV": _parse_inv,
    "NOT": _parse_inv,
}


def parse_gate(source: SourceLine) -> Gate:
    """
    Parse one gate line, dispatching on its trailing tag.

    Tags are matched exactly (upper case). EQ, EQW and MAND raise
    UnsupportedGateType; any other unknown tag raises UnknownGateType.
    """
    tokens = _tokens(source, "gate")
    tag = tokens[-1]

    gate_parser = GATE_PARSERS.get(tag)
    if gate_parser is None:
        if tag in UNSUPPORTED_GATE_TAGS:
            raise UnsupportedGateType(
                tag, line_number=source.number, line=source.text, field="gate type"
            )
        raise UnknownGateType(
            tag, line_number=source.number, line=source.text, field="gate type"
        )

    if len(tokens) < 3:
        raise StructuralError(
            "gate line too short",
            line_number=source.number,
            line=source.text,
            field="gate",
            expected="<in_count> <out_count> <wire ids...> <tag>",
            found=f"{len(tokens)} token(s)",
        )

    return gate_parser(tokens, source)


# =============================================================================
# Circuit Assembly
# =============================================================================

def parse(text: str) -> Circuit:
    """
    Parse the full text of a Bristol circuit file.

    Args:
        text: Complete file contents

    Returns:
        Circuit with the header and every gate in source order

    Raises:
        BristolFormatError: on the first malformed line; no partial circuit
            is returned.
    """
    try:
        lines = split_lines(text)
        logger.debug(f"Tokenized {len(lines)} non-blank lines")

        header = parse_header(lines[:HEADER_LINES])
        logger.debug(
            f"Parsed header: {header.num_gates} gates, {header.num_wires} wires, "
            f"{header.num_inputs} input ports, {header.num_outputs} output ports"
        )

        gates = tuple(parse_gate(line) for line in lines[HEADER_LINES:])
    except BristolFormatError as e:
        logger.error(f"Failed to parse Bristol circuit: {e}")
        raise

    circuit = Circuit(header=header, gates=gates)
    logger.info(
        f"Parsed Bristol circuit: {circuit.gate_count} gates "
        f"(declared {header.num_gates}), {header.num_wires} wires"
    )
    return circuit
