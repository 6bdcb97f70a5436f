"""
Type layout queries used to size object spaces

Object spaces are measured in fields, not bytes: every scalar leaf
(bool, integer, pointer) takes one slot, and aggregates are flattened
into the sum of their leaves.
"""

from typing import List, Optional, Tuple, Union

from memspace.core.types import Typ, TypeKind
from memspace.core.errors import LayoutError, UnsizedArrayError, EmptyAggregateError


def is_struct(ty: Typ) -> bool:
    return ty.is_struct()


def is_array(ty: Typ) -> bool:
    return ty.is_array()


def is_tuple(ty: Typ) -> bool:
    return ty.is_tuple()


def is_pointer_like(ty: Typ) -> bool:
    """Raw pointers, references and boxes"""
    return ty.is_any_ptr()


def fields(ty: Typ) -> Union[List[Tuple[str, Typ]], List[Typ]]:
    """
    Ordered components of an aggregate.

    Returns (name, type) pairs for a struct and element types for a tuple.

    Raises:
        EmptyAggregateError: struct declared without fields
        LayoutError: ty is not an aggregate
    """
    if ty.is_struct():
        name, struct_fields = ty.struct_def()
        if not struct_fields:
            raise EmptyAggregateError(f"Struct {name} has no fields")
        return list(struct_fields)
    if ty.is_tuple():
        return list(ty.tuple_def())
    raise LayoutError(f"{ty} is not an aggregate type")


def array_element_and_size(ty: Typ) -> Tuple[Typ, Optional[int]]:
    """Element type and fixed length of an array (None when unsized)"""
    if not ty.is_array():
        raise LayoutError(f"{ty} is not an array type")
    return ty.elem_type(), ty.array_size()


def flattened_field_count(ty: Typ) -> int:
    """
    Number of scalar leaves in a type.

    - unit: 0
    - bool, integers, raw pointers, references, boxes: 1
    - [E; n]: n * count(E); unsized arrays are rejected
    - struct: sum over declared fields
    - tuple: sum over elements

    Slices and functions have no fixed field count.
    """
    if ty.kind == TypeKind.UNIT:
        return 0

    if ty.is_bool() or ty.is_integer() or ty.is_any_ptr():
        return 1

    if ty.is_array():
        elem, size = array_element_and_size(ty)
        if size is None:
            raise UnsizedArrayError(f"{ty} has no fixed size; resolve it before flattening")
        return size * flattened_field_count(elem)

    if ty.is_struct():
        return sum(flattened_field_count(fty) for _, fty in fields(ty))

    if ty.is_tuple():
        return sum(flattened_field_count(ety) for ety in fields(ty))

    raise LayoutError(f"{ty} has no flattened field count")


def object_space_length(ty: Typ) -> int:
    """
    Length of the object space reserved for a value of type ty.

    Aggregates are flattened, everything else takes a single slot.
    Zero-length spaces are rejected since an empty range would be
    vacuously disjoint from every other object.
    """
    if ty.is_struct() or ty.is_array() or ty.is_tuple():
        length = flattened_field_count(ty)
        if length == 0:
            raise EmptyAggregateError(f"{ty} flattens to zero fields")
        return length
    return 1
