"""
Consistency checks for parsed circuits.

The parser only extracts structure. These checks compare the header
against the gate list and follow wires through the gates in evaluation
order. They report problems instead of raising unless asked to.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .circuit import Circuit
from .exceptions import CircuitValidationError

logger = logging.getLogger(__name__)

GATE_COUNT_MISMATCH = "gate_count_mismatch"
PORT_WIRES_EXCEED_WIRES = "port_wires_exceed_wires"
WIRE_OUT_OF_RANGE = "wire_out_of_range"
UNDRIVEN_WIRE = "undriven_wire"
MULTIPLE_DRIVERS = "multiple_drivers"


@dataclass
class ValidationIssue:
    """One inconsistency found in a circuit."""

    kind: str
    message: str
    gate_index: Optional[int] = None  # 0-based position in Circuit.gates
    wire: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "gate_index": self.gate_index,
            "wire": self.wire,
        }


@dataclass
class ValidationReport:
    """Result of validate_circuit."""

    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def kinds(self) -> List[str]:
        return sorted({issue.kind for issue in self.issues})

    def raise_for_issues(self) -> None:
        if self.issues:
            raise CircuitValidationError(self.issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "issue_count": len(self.issues),
            "issues": [issue.to_dict() for issue in self.issues],
        }


def validate_circuit(circuit: Circuit) -> ValidationReport:
    """
    Check a parsed circuit for internal consistency.

    Checks performed:
    - declared num_gates equals the number of gates
    - input and output port wires fit inside num_wires
    - every gate wire id is below num_wires
    - every gate input is a circuit input or the output of an earlier gate
    - no gate writes a circuit input or a wire already written

    Args:
        circuit: Parsed circuit

    Returns:
        ValidationReport listing every issue found
    """
    header = circuit.header
    report = ValidationReport()

    if header.num_gates != circuit.gate_count:
        report.issues.append(
            ValidationIssue(
                kind=GATE_COUNT_MISMATCH,
                message=(
                    f"header declares {header.num_gates} gates "
                    f"but {circuit.gate_count} were parsed"
                ),
            )
        )

    port_wires = header.total_input_wires + header.total_output_wires
    if port_wires > header.num_wires:
        report.issues.append(
            ValidationIssue(
                kind=PORT_WIRES_EXCEED_WIRES,
                message=(
                    f"input and output ports use {port_wires} wires "
                    f"but the circuit has {header.num_wires}"
                ),
            )
        )

    driven = set(circuit.input_wires())

    for index, gate in enumerate(circuit.gates):
        tag = gate.gate_type.value

        for wire in gate.inputs + gate.outputs:
            if wire >= header.num_wires:
                report.issues.append(
                    ValidationIssue(
                        kind=WIRE_OUT_OF_RANGE,
                        message=(
                            f"gate {index} ({tag}) uses wire {wire}, "
                            f"outside [0, {header.num_wires})"
                        ),
                        gate_index=index,
                        wire=wire,
                    )
                )

        for wire in gate.inputs:
            if wire not in driven:
                report.issues.append(
                    ValidationIssue(
                        kind=UNDRIVEN_WIRE,
                        message=f"gate {index} ({tag}) reads wire {wire} before it is driven",
                        gate_index=index,
                        wire=wire,
                    )
                )

        for wire in gate.outputs:
            if wire in driven:
                report.issues.append(
                    ValidationIssue(
                        kind=MULTIPLE_DRIVERS,
                        message=f"gate {index} ({tag}) writes wire {wire}, which is already driven",
                        gate_index=index,
                        wire=wire,
                    )
                )
            driven.add(wire)

    if report.is_valid:
        logger.debug(f"Circuit passed validation ({circuit.gate_count} gates)")
    else:
        logger.warning(
            f"Circuit validation found {len(report.issues)} issue(s): {', '.join(report.kinds())}"
        )

    return report
