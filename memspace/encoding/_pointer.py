"""
Pointer and box encoding for Z3

A pointer is the datatype value pointer(base, offset, meta) over integers.
A box (owning heap pointer) wraps exactly one pointer, so boxes and raw
pointers have different sorts but share the same addressing scheme.
"""

import z3
from typing import Optional, Union

from memspace.core.errors import SortMismatchError

IntLike = Union[int, z3.ArithRef]


class PointerEncoder:
    """Builds and destructures pointer and box values"""

    def __init__(self, encoder):
        """
        Args:
            encoder: Parent MemSpaceEncoder (object space registry for
                     object_pointer)
        """
        self.encoder = encoder
        self._pointer_sort = None
        self._box_sort = None
        self.set_pointer_logic()

    def set_pointer_logic(self):
        """Declare the pointer and box datatypes"""
        if self._pointer_sort is not None:
            return

        # A pointer is a tuple (base, offset, meta)
        pointer = z3.Datatype("pointer")
        pointer.declare("pointer",
                        ("base", z3.IntSort()),
                        ("offset", z3.IntSort()),
                        ("meta", z3.IntSort()))
        self._pointer_sort = pointer.create()

        # A box pointer is a tuple (pointer)
        box = z3.Datatype("box")
        box.declare("box", ("box_ptr", self._pointer_sort))
        self._box_sort = box.create()

    def pointer_sort(self) -> z3.DatatypeSortRef:
        return self._pointer_sort

    def box_sort(self) -> z3.DatatypeSortRef:
        return self._box_sort

    def is_pointer(self, expr) -> bool:
        return isinstance(expr, z3.ExprRef) and expr.sort() == self._pointer_sort

    def is_box(self, expr) -> bool:
        return isinstance(expr, z3.ExprRef) and expr.sort() == self._box_sort

    def mk_pointer(self, base: IntLike, offset: IntLike,
                   meta: Optional[IntLike] = None) -> z3.DatatypeRef:
        metadata = z3.IntVal(0) if meta is None else _int_term(meta, "meta")
        return self._pointer_sort.constructor(0)(
            _int_term(base, "base"), _int_term(offset, "offset"), metadata)

    def mk_pointer_base(self, pt: z3.DatatypeRef) -> z3.ArithRef:
        return self._pointer_sort.accessor(0, 0)(self._check_pointer(pt))

    def mk_pointer_offset(self, pt: z3.DatatypeRef) -> z3.ArithRef:
        return self._pointer_sort.accessor(0, 1)(self._check_pointer(pt))

    def mk_pointer_meta(self, pt: z3.DatatypeRef) -> z3.ArithRef:
        return self._pointer_sort.accessor(0, 2)(self._check_pointer(pt))

    def mk_box(self, inner_pt: z3.DatatypeRef) -> z3.DatatypeRef:
        return self._box_sort.constructor(0)(self._check_pointer(inner_pt))

    def mk_box_ptr(self, box: z3.DatatypeRef) -> z3.DatatypeRef:
        if not self.is_box(box):
            raise SortMismatchError(f"Expected a box value, got {_describe(box)}")
        return self._box_sort.accessor(0, 0)(box)

    def fresh_pointer(self, name: str) -> z3.DatatypeRef:
        return z3.Const(name, self._pointer_sort)

    def fresh_box(self, name: str) -> z3.DatatypeRef:
        return z3.Const(name, self._box_sort)

    def object_pointer(self, obj, offset: IntLike = 0,
                       meta: Optional[IntLike] = None) -> z3.DatatypeRef:
        """Pointer into obj at a field offset; registers obj if needed"""
        base = self.encoder.registry.base_of(obj)
        return self.mk_pointer(base, offset, meta)

    def _check_pointer(self, pt):
        if not self.is_pointer(pt):
            raise SortMismatchError(f"Expected a pointer value, got {_describe(pt)}")
        return pt


def _int_term(value: IntLike, what: str) -> z3.ArithRef:
    if isinstance(value, bool):
        raise SortMismatchError(f"Pointer {what} must be an integer, got {value!r}")
    if isinstance(value, int):
        return z3.IntVal(value)
    if z3.is_int(value):
        return value
    raise SortMismatchError(f"Pointer {what} must be an integer term, got {_describe(value)}")


def _describe(value) -> str:
    if isinstance(value, z3.ExprRef):
        return f"{value} of sort {value.sort()}"
    return repr(value)
