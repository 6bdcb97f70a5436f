"""
Symbolic memory layer for bounded model checking using Z3

Translates a program's stack/heap objects and pointer values into Z3
constraints over integers, arrays and algebraic datatypes, so that a
symbolic-execution driver can reason about aliasing, pointer arithmetic
and out-of-bounds access.

The library is organized into logical modules:
- core: program types, layout queries, symbolic objects, errors
- space: object space registry and disjointness obligations
- encoding: Z3 session encoder, pointer/box datatypes, debug dumps
"""

# Core abstractions
from memspace.core.types import Typ, TypeKind, PointerKind
from memspace.core.symbol import Symbol
from memspace.core.layout import flattened_field_count, object_space_length
from memspace.core.errors import (
    ContractViolation, LayoutError, UnsizedArrayError, EmptyAggregateError,
    NotRegisteredError, DuplicateSpaceError, SortMismatchError
)

# Object spaces
from memspace.space.registry import ObjectSpace, ObjectSpaceRegistry

# Main encoder
from memspace.encoding.encoder import MemSpaceEncoder

__version__ = "0.0.1"
__all__ = [
    # Types and symbols
    "Typ", "TypeKind", "PointerKind", "Symbol",
    "flattened_field_count", "object_space_length",
    # Errors
    "ContractViolation", "LayoutError", "UnsizedArrayError", "EmptyAggregateError",
    "NotRegisteredError", "DuplicateSpaceError", "SortMismatchError",
    # Spaces and encoder
    "ObjectSpace", "ObjectSpaceRegistry", "MemSpaceEncoder",
]
