"""
Core abstractions for the memory layer.

This module contains the fundamental building blocks:
- Program type representation and layout queries
- Symbolic objects
- Contract-violation exceptions
"""

from memspace.core.types import Typ, TypeKind, PointerKind
from memspace.core.symbol import Symbol
from memspace.core.layout import (
    is_struct, is_array, is_tuple, is_pointer_like, fields,
    array_element_and_size, flattened_field_count, object_space_length
)
from memspace.core.errors import (
    ContractViolation, LayoutError, UnsizedArrayError, EmptyAggregateError,
    NotRegisteredError, DuplicateSpaceError, SortMismatchError
)
