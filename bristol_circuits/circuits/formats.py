"""
Bristol Circuit File Utilities

Loading, JSON export, hashing and directory discovery for Bristol format
circuit files. The canonical JSON form is:

    {"format": "bristol", "version": 1,
     "header": {"num_gates": 4, "num_wires": 8, ...},
     "gates": [{"type": "AND", "inputs": [0, 1], "outputs": [4]}, ...],
     "hash": "<16 hex chars>"}

Gate order is always evaluation order.
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..circuit import Circuit
from ..exceptions import BristolFormatError
from ..parser import parse

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = [".txt", ".bristol"]


# =============================================================================
# File I/O
# =============================================================================

def load_circuit(path: Union[str, Path]) -> Circuit:
    """
    Read and parse a Bristol circuit file.

    Raises:
        OSError: if the file cannot be read
        BristolFormatError: if the contents are not a valid Bristol circuit
    """
    path = Path(path)
    logger.debug(f"Loading Bristol circuit from {path}")
    return parse(path.read_text(encoding="utf-8"))


# =============================================================================
# JSON Format
# =============================================================================

def _canonical_json(circuit: Circuit) -> str:
    return json.dumps(circuit.to_dict(), sort_keys=True, separators=(",", ":"))


def circuit_to_json(circuit: Circuit, source: Optional[str] = None) -> Dict[str, Any]:
    """
    Convert a circuit to canonical JSON format.

    Returns dict with format, version, header, gates, hash and source.
    """
    body = circuit.to_dict()
    result = {
        "format": "bristol",
        "version": 1,
        "header": body["header"],
        "gates": body["gates"],
        "hash": compute_circuit_hash_short(circuit),
    }
    if source:
        result["source"] = source

    return result


# =============================================================================
# Hash Computation
# =============================================================================

def compute_circuit_hash(circuit: Circuit) -> str:
    """Compute SHA-256 hash of the canonical JSON of header and gates."""
    return hashlib.sha256(_canonical_json(circuit).encode()).hexdigest()


def compute_circuit_hash_short(circuit: Circuit, length: int = 16) -> str:
    """Compute truncated hash for display/dedup."""
    return compute_circuit_hash(circuit)[:length]


# =============================================================================
# Circuit Search/Discovery
# =============================================================================

def find_circuit_files(root: Union[str, Path], extensions: Optional[List[str]] = None) -> List[Path]:
    """
    Find all circuit files under a directory.

    Default extensions: .txt, .bristol
    """
    if extensions is None:
        extensions = DEFAULT_EXTENSIONS

    root = Path(root)
    files = []
    for ext in extensions:
        files.extend(root.rglob(f"*{ext}"))

    return sorted(set(files))


def index_circuit_directory(
    root: Union[str, Path], extensions: Optional[List[str]] = None
) -> List[Dict[str, Any]]:
    """
    Parse every circuit file in a directory.

    A file that fails to load is reported in its own entry (``ok`` false,
    with ``error`` and ``error_kind``) and does not stop the batch.

    Returns list of {path, ok, num_wires, gate_count, composition, hash}
    or {path, ok, error_kind, error} per file.
    """
    index = []
    for path in find_circuit_files(root, extensions):
        try:
            circuit = load_circuit(path)
        except BristolFormatError as e:
            logger.warning(f"Failed to parse {path}: {e}")
            index.append({
                "path": str(path),
                "ok": False,
                "error_kind": e.kind,
                "error": str(e),
            })
            continue
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            index.append({
                "path": str(path),
                "ok": False,
                "error_kind": type(e).__name__,
                "error": str(e),
            })
            continue

        index.append({
            "path": str(path),
            "ok": True,
            "num_wires": circuit.header.num_wires,
            "gate_count": circuit.gate_count,
            "composition": circuit.gate_composition(),
            "hash": compute_circuit_hash_short(circuit),
        })

    logger.info(
        f"Indexed {len(index)} circuit files under {root} "
        f"({sum(1 for entry in index if not entry['ok'])} failed)"
    )
    return index
