"""
Bristol circuit file utilities.

Provides file loading, JSON export, hashing and directory indexing.
"""

from .formats import (
    # File I/O
    load_circuit,

    # JSON format
    circuit_to_json,

    # Hashing
    compute_circuit_hash,
    compute_circuit_hash_short,

    # Discovery
    find_circuit_files,
    index_circuit_directory,
)

__all__ = [
    'load_circuit',
    'circuit_to_json',
    'compute_circuit_hash',
    'compute_circuit_hash_short',
    'find_circuit_files',
    'index_circuit_directory',
]
