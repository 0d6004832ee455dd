"""
Pydantic models for API request/response schemas.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    """Request model for parsing Bristol circuit text."""

    text: str = Field(..., description="Full contents of a Bristol circuit file")
    validate_circuit: bool = Field(
        False,
        alias="validate",
        description="Also run consistency checks on the parsed circuit",
    )

    model_config = {"populate_by_name": True}


class ValidateRequest(BaseModel):
    """Request model for validating Bristol circuit text."""

    text: str = Field(..., description="Full contents of a Bristol circuit file")


class HeaderResponse(BaseModel):
    """Response model for the circuit header."""

    num_gates: int
    num_wires: int
    num_input_wires: List[int]
    num_output_wires: List[int]


class GateResponse(BaseModel):
    """Response model for a single gate."""

    type: str
    inputs: List[int]
    outputs: List[int]


class ValidationIssueResponse(BaseModel):
    """Response model for one validation issue."""

    kind: str
    message: str
    gate_index: Optional[int] = None
    wire: Optional[int] = None


class ValidationResponse(BaseModel):
    """Response model for a validation report."""

    is_valid: bool
    issue_count: int
    issues: List[ValidationIssueResponse]

    @classmethod
    def from_report(cls, report):
        """Create response from ValidationReport."""
        return cls(**report.to_dict())


class CircuitResponse(BaseModel):
    """Response model for a parsed circuit."""

    header: HeaderResponse
    gates: List[GateResponse]
    gate_count: int
    composition: Dict[str, int]
    hash: str
    validation: Optional[ValidationResponse] = None

    @classmethod
    def from_circuit(cls, circuit, circuit_hash: str, validation=None):
        """Create response from Circuit."""
        body = circuit.to_dict()
        return cls(
            header=HeaderResponse(**body["header"]),
            gates=[GateResponse(**gate) for gate in body["gates"]],
            gate_count=circuit.gate_count,
            composition=circuit.gate_composition(),
            hash=circuit_hash,
            validation=validation,
        )


class GateTypesResponse(BaseModel):
    """Gate tags understood by the parser."""

    supported_tags: List[str]
    tag_to_kind: Dict[str, str]
    unsupported_tags: List[str]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    supported_gate_tags: List[str]


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    detail: Optional[str] = None
    line_number: Optional[int] = None
    line: Optional[str] = None
    field: Optional[str] = None
    expected: Optional[str] = None
    found: Optional[str] = None
    timestamp: datetime
    request_id: Optional[str] = None
