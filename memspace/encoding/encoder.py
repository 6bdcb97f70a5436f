"""
Z3 Encoder for the symbolic memory layer

One MemSpaceEncoder is one verification session. It owns the solver
assertion set, the allocation-liveness context and the object space
registry, and hands itself to the delegates that need them:

- ObjectSpaceRegistry: base/length of every symbolic object
- DisjointnessEncoder: non-overlap obligations between live spaces
- PointerEncoder: pointer and box datatype values

Nothing here decides satisfiability; constraints are only added.
"""

import z3
from contextlib import contextmanager
from typing import Iterator, List, Optional

from memspace.core.symbol import Symbol
from memspace.core.errors import SortMismatchError
from memspace.space.registry import ObjectSpace, ObjectSpaceRegistry
from memspace.space._disjointness import DisjointnessEncoder
from memspace.encoding._pointer import PointerEncoder, IntLike


class MemSpaceEncoder:
    """Encodes object spaces and pointers into Z3 constraints"""

    def __init__(self, solver: Optional[z3.Solver] = None, verbose: bool = False):
        """
        Args:
            solver: Solver whose assertion set is shared with the driver
                    (a fresh z3.Solver by default)
            verbose: Print debug information
        """
        self.solver = solver if solver is not None else z3.Solver()
        self.verbose = verbose
        # Every assertion added by this session, in emission order
        self.assertions: List[z3.BoolRef] = []
        # Array(Int, Bool): base address -> allocation alive
        self._cur_alloc_expr: Optional[z3.ArrayRef] = None

        self.disjointness = DisjointnessEncoder(self)
        self.registry = ObjectSpaceRegistry(self)
        self._pointer_encoder = PointerEncoder(self)

    # -------------------------------------------------------------------------
    # Solver context
    # -------------------------------------------------------------------------

    def mk_int_symbol(self, name: str) -> z3.ArithRef:
        return z3.Int(name)

    def mk_smt_int(self, value: int) -> z3.ArithRef:
        return z3.IntVal(value)

    def assert_(self, constraint: z3.BoolRef):
        """Add a constraint to the shared assertion set"""
        self.solver.add(constraint)
        self.assertions.append(constraint)

    # -------------------------------------------------------------------------
    # Allocation-liveness context
    # -------------------------------------------------------------------------

    @property
    def current_alloc_context(self) -> Optional[z3.ArrayRef]:
        return self._cur_alloc_expr

    def mk_alloc_array(self, name: str = "alloc") -> z3.ArrayRef:
        """Declare an allocation-liveness array Array(Int, Bool)"""
        return z3.Array(name, z3.IntSort(), z3.BoolSort())

    def set_alloc_context(self, alloc_array: Optional[z3.ArrayRef]):
        """
        Set the liveness array used for disjointness of new registrations.

        Passing None disables liveness tracking; registrations made without
        a context emit no disjointness constraints.
        """
        if alloc_array is not None:
            if not (z3.is_array(alloc_array)
                    and alloc_array.domain() == z3.IntSort()
                    and alloc_array.range() == z3.BoolSort()):
                raise SortMismatchError(
                    f"Allocation context must be Array(Int, Bool), got {alloc_array!r}")
        if self.verbose:
            print(f"[memspace] alloc context set to {alloc_array}")
        self._cur_alloc_expr = alloc_array

    def clear_alloc_context(self):
        self.set_alloc_context(None)

    @contextmanager
    def alloc_context(self, alloc_array: Optional[z3.ArrayRef]) -> Iterator[None]:
        """Temporarily install a liveness array, restoring the previous one"""
        previous = self._cur_alloc_expr
        self.set_alloc_context(alloc_array)
        try:
            yield
        finally:
            self._cur_alloc_expr = previous

    # -------------------------------------------------------------------------
    # Object spaces
    # -------------------------------------------------------------------------

    def register(self, obj: Symbol) -> ObjectSpace:
        """Delegate to registry"""
        return self.registry.register(obj)

    def lookup(self, obj: Symbol) -> ObjectSpace:
        """Delegate to registry"""
        return self.registry.lookup(obj)

    def base_of(self, obj: Symbol) -> z3.ArithRef:
        """Delegate to registry"""
        return self.registry.base_of(obj)

    def is_registered(self, obj: Symbol) -> bool:
        return self.registry.contains(obj)

    # -------------------------------------------------------------------------
    # Pointers and boxes
    # -------------------------------------------------------------------------

    def pointer_sort(self) -> z3.DatatypeSortRef:
        return self._pointer_encoder.pointer_sort()

    def box_sort(self) -> z3.DatatypeSortRef:
        return self._pointer_encoder.box_sort()

    def make_pointer(self, base: IntLike, offset: IntLike,
                     meta: Optional[IntLike] = None) -> z3.DatatypeRef:
        """Delegate to pointer encoder"""
        return self._pointer_encoder.mk_pointer(base, offset, meta)

    def pointer_base(self, pt: z3.DatatypeRef) -> z3.ArithRef:
        """Delegate to pointer encoder"""
        return self._pointer_encoder.mk_pointer_base(pt)

    def pointer_offset(self, pt: z3.DatatypeRef) -> z3.ArithRef:
        """Delegate to pointer encoder"""
        return self._pointer_encoder.mk_pointer_offset(pt)

    def pointer_meta(self, pt: z3.DatatypeRef) -> z3.ArithRef:
        """Delegate to pointer encoder"""
        return self._pointer_encoder.mk_pointer_meta(pt)

    def make_box(self, pt: z3.DatatypeRef) -> z3.DatatypeRef:
        """Delegate to pointer encoder"""
        return self._pointer_encoder.mk_box(pt)

    def box_pointer(self, box: z3.DatatypeRef) -> z3.DatatypeRef:
        """Delegate to pointer encoder"""
        return self._pointer_encoder.mk_box_ptr(box)

    def is_pointer(self, expr) -> bool:
        return self._pointer_encoder.is_pointer(expr)

    def is_box(self, expr) -> bool:
        return self._pointer_encoder.is_box(expr)

    def fresh_pointer(self, name: str) -> z3.DatatypeRef:
        return self._pointer_encoder.fresh_pointer(name)

    def fresh_box(self, name: str) -> z3.DatatypeRef:
        return self._pointer_encoder.fresh_box(name)

    def object_pointer(self, obj: Symbol, offset: IntLike = 0,
                       meta: Optional[IntLike] = None) -> z3.DatatypeRef:
        """
        Pointer to field `offset` of obj, built on the object's base.

        The offset is not checked against the object's length; bounds
        checks belong to the driver.
        """
        return self._pointer_encoder.object_pointer(obj, offset, meta)
