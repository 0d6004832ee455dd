"""
API endpoints for parsing and validating Bristol circuits.

Parse failures are not caught here; the exception handlers registered in
server.create_app turn them into structured error responses.
"""

import logging
from datetime import datetime

from fastapi import APIRouter

from .. import __version__
from ..circuit import GateType
from ..circuits.formats import compute_circuit_hash_short
from ..parser import GATE_PARSERS, UNSUPPORTED_GATE_TAGS, parse
from ..validation import validate_circuit
from .models import (
    CircuitResponse,
    GateTypesResponse,
    HealthResponse,
    ParseRequest,
    ValidateRequest,
    ValidationResponse,
)

logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

_TAG_TO_KIND = {
    "XOR": GateType.XOR.value,
    "AND": GateType.AND.value,
    "INV": GateType.INV.value,
    "NOT": GateType.INV.value,
}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version=__version__,
        supported_gate_tags=sorted(GATE_PARSERS),
    )


@router.get("/gate-types", response_model=GateTypesResponse)
async def gate_types() -> GateTypesResponse:
    """List the gate tags the parser accepts and the ones it rejects as unsupported."""
    return GateTypesResponse(
        supported_tags=sorted(GATE_PARSERS),
        tag_to_kind=_TAG_TO_KIND,
        unsupported_tags=list(UNSUPPORTED_GATE_TAGS),
    )


@router.post("/circuits/parse", response_model=CircuitResponse)
async def parse_circuit(request: ParseRequest) -> CircuitResponse:
    """
    Parse Bristol circuit text.

    Args:
        request: Circuit text and whether to validate it

    Returns:
        Parsed header and gates, gate composition and circuit hash
    """
    logger.info(f"API: Parsing circuit ({len(request.text)} chars)")
    circuit = parse(request.text)

    validation = None
    if request.validate_circuit:
        validation = ValidationResponse.from_report(validate_circuit(circuit))

    return CircuitResponse.from_circuit(
        circuit,
        circuit_hash=compute_circuit_hash_short(circuit),
        validation=validation,
    )


@router.post("/circuits/validate", response_model=ValidationResponse)
async def validate_circuit_text(request: ValidateRequest) -> ValidationResponse:
    """Parse Bristol circuit text and return only its validation report."""
    logger.info(f"API: Validating circuit ({len(request.text)} chars)")
    circuit = parse(request.text)
    return ValidationResponse.from_report(validate_circuit(circuit))
