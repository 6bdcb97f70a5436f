"""
Object space registry

Assigns every symbolic object a positive base address and a length in
flattened fields. The registry belongs to one verification session and is
append-only: entries are never removed or replaced.
"""

import z3
from typing import Dict, Iterator, NamedTuple

from memspace.core.symbol import Symbol
from memspace.core.layout import object_space_length
from memspace.core.errors import NotRegisteredError, DuplicateSpaceError


class ObjectSpace(NamedTuple):
    """Address range [base, base + length) reserved for one object"""
    base: z3.ArithRef
    length: int

    @property
    def length_term(self) -> z3.ArithRef:
        return z3.IntVal(self.length)

    @property
    def base_name(self) -> str:
        return self.base.decl().name()

    def __str__(self) -> str:
        return f"[{self.base}, {self.base} + {self.length})"


class ObjectSpaceRegistry:
    """Registry of object spaces for one session"""

    def __init__(self, encoder):
        """
        Args:
            encoder: Parent MemSpaceEncoder (solver context, assertion set,
                     liveness context and disjointness generator)
        """
        self.encoder = encoder
        # Keyed by identifier; insertion order is registration order
        self._spaces: Dict[str, ObjectSpace] = {}
        self._symbols: Dict[str, Symbol] = {}

    def __contains__(self, obj: Symbol) -> bool:
        return self.contains(obj)

    def __len__(self) -> int:
        return len(self._spaces)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def contains(self, obj: Symbol) -> bool:
        return obj.ident in self._spaces

    def object_spaces(self) -> Dict[Symbol, ObjectSpace]:
        """Snapshot of all registered spaces in registration order"""
        return {self._symbols[ident]: space for ident, space in self._spaces.items()}

    def register(self, obj: Symbol) -> ObjectSpace:
        """
        Get the object space of obj, creating it on first use.

        Creating a space declares the base constant, asserts that it is
        positive and emits disjointness obligations against every space
        registered before it.

        Raises:
            DuplicateSpaceError: the identifier is already bound to another type
            LayoutError: the type of obj cannot be sized
        """
        if self.contains(obj):
            known = self._symbols[obj.ident]
            if known != obj:
                raise DuplicateSpaceError(
                    f"{obj.ident} already registered as {known.ty}, not {obj.ty}")
            if self.encoder.verbose:
                print(f"[memspace] {obj.ident} already registered")
            return self._spaces[obj.ident]
        return self._init_space(obj)

    def lookup(self, obj: Symbol) -> ObjectSpace:
        """Get the object space of an already registered object"""
        if not self.contains(obj):
            raise NotRegisteredError(f"{obj.ident} has no object space; register it first")
        return self._spaces[obj.ident]

    def base_of(self, obj: Symbol) -> z3.ArithRef:
        return self.register(obj).base

    def _init_space(self, obj: Symbol) -> ObjectSpace:
        # Size is field-level
        length = object_space_length(obj.ty)
        base = self.encoder.mk_int_symbol(obj.base_name())

        self.encoder.assert_(base > 0)
        self.encoder.disjointness.encode(base, length, self._spaces.values())

        space = ObjectSpace(base, length)
        self._spaces[obj.ident] = space
        self._symbols[obj.ident] = obj

        if self.encoder.verbose:
            print(f"[memspace] registered {obj} at {space}")
        return space
