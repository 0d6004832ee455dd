"""
In-memory representation of a Bristol format boolean circuit.

A Circuit owns one Header and an ordered tuple of gates. Gate order is the
textual order of the source file, which is also the evaluation order.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple, Union


class GateType(str, Enum):
    """Gate kinds supported by the parser."""

    XOR = "XOR"
    AND = "AND"
    INV = "INV"


@dataclass(frozen=True)
class XorGate:
    input_a: int
    input_b: int
    output: int

    gate_type: ClassVar[GateType] = GateType.XOR

    @property
    def inputs(self) -> Tuple[int, ...]:
        return (self.input_a, self.input_b)

    @property
    def outputs(self) -> Tuple[int, ...]:
        return (self.output,)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.gate_type.value,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
        }


@dataclass(frozen=True)
class AndGate:
    input_a: int
    input_b: int
    output: int

    gate_type: ClassVar[GateType] = GateType.AND

    @property
    def inputs(self) -> Tuple[int, ...]:
        return (self.input_a, self.input_b)

    @property
    def outputs(self) -> Tuple[int, ...]:
        return (self.output,)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.gate_type.value,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
        }


@dataclass(frozen=True)
class InvGate:
    """Negation; written as either INV or NOT in Bristol files."""

    input: int
    output: int

    gate_type: ClassVar[GateType] = GateType.INV

    @property
    def inputs(self) -> Tuple[int, ...]:
        return (self.input,)

    @property
    def outputs(self) -> Tuple[int, ...]:
        return (self.output,)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.gate_type.value,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
        }


Gate = Union[XorGate, AndGate, InvGate]


@dataclass(frozen=True)
class Header:
    """Dimensional metadata from the first three lines of a Bristol file."""

    num_gates: int
    num_wires: int
    num_input_wires: Tuple[int, ...]  # wires per input port, in port order
    num_output_wires: Tuple[int, ...]  # wires per output port, in port order

    @property
    def num_inputs(self) -> int:
        return len(self.num_input_wires)

    @property
    def num_outputs(self) -> int:
        return len(self.num_output_wires)

    @property
    def total_input_wires(self) -> int:
        return sum(self.num_input_wires)

    @property
    def total_output_wires(self) -> int:
        return sum(self.num_output_wires)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "num_gates": self.num_gates,
            "num_wires": self.num_wires,
            "num_input_wires": list(self.num_input_wires),
            "num_output_wires": list(self.num_output_wires),
        }


@dataclass(frozen=True)
class Circuit:
    """A parsed Bristol circuit: header plus gates in evaluation order."""

    header: Header
    gates: Tuple[Gate, ...]

    @property
    def gate_count(self) -> int:
        return len(self.gates)

    def gate_composition(self) -> Dict[str, int]:
        """Count gates per kind (XOR, AND, INV), including kinds with zero gates."""
        counts = Counter(gate.gate_type.value for gate in self.gates)
        return {gate_type.value: counts.get(gate_type.value, 0) for gate_type in GateType}

    def input_wires(self) -> range:
        """Circuit input wires occupy the lowest wire ids."""
        return range(self.header.total_input_wires)

    def output_wires(self) -> range:
        """Circuit output wires occupy the highest wire ids."""
        num_wires = self.header.num_wires
        return range(num_wires - self.header.total_output_wires, num_wires)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.header.to_dict(),
            "gates": [gate.to_dict() for gate in self.gates],
        }
