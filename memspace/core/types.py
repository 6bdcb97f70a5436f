"""
Program type representation for the memory layer.

Types are a small closed set of tagged variants:
- Unit, Bool, Int (signed/unsigned, with a bit width)
- Pointer (raw pointer, reference or owning box) with its pointee
- Array (element and fixed size), Slice (element only)
- Struct (named, ordered fields), Tuple (ordered elements)
- Function

Typ values are immutable and hashable so they can be used inside
symbol identifiers and as dictionary keys.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
from enum import Enum, auto

from memspace.core.errors import LayoutError


# =============================================================================
# Kinds
# =============================================================================

class TypeKind(Enum):
    """Type variants"""
    UNIT = auto()
    BOOL = auto()
    INT = auto()
    POINTER = auto()
    ARRAY = auto()
    SLICE = auto()
    STRUCT = auto()
    TUPLE = auto()
    FUNCTION = auto()


class PointerKind(Enum):
    """Flavours of pointer-like types"""
    RAW = auto()
    REF = auto()
    BOX = auto()


FieldDef = Tuple[str, 'Typ']
StructDef = Tuple[str, Tuple[FieldDef, ...]]
TupleDef = Tuple['Typ', ...]
FunctionDef = Tuple[str, Tuple['Typ', ...], 'Typ']

POINTER_WIDTH = 64


# =============================================================================
# Types
# =============================================================================

@dataclass(frozen=True)
class Typ:
    """
    Type representation.

    Only the attributes relevant to `kind` are set; the classmethod
    constructors below are the intended way to build values.

    Example: Typ.struct_type("TData", [("lo", Typ.unsigned_type(16))])
    """
    kind: TypeKind
    signed: bool = False                       # For integers
    width: int = 0                             # For integers (bits)
    pointer_sized: bool = False                # isize / usize
    pointer_kind: Optional[PointerKind] = None
    pointee: Optional['Typ'] = None            # For pointers
    mutable: bool = False                      # For pointers
    element: Optional['Typ'] = None            # For arrays/slices
    size: int = 0                              # For arrays, 0 means unsized
    type_name: Optional[str] = None            # For structs/functions
    fields: Tuple[FieldDef, ...] = ()          # For structs
    elements: Tuple['Typ', ...] = ()           # For tuples
    params: Tuple['Typ', ...] = ()             # For functions
    ret: Optional['Typ'] = None                # For functions

    def __str__(self) -> str:
        return self.name()

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def unit_type(cls) -> 'Typ':
        return cls(TypeKind.UNIT)

    @classmethod
    def bool_type(cls) -> 'Typ':
        return cls(TypeKind.BOOL)

    @classmethod
    def signed_type(cls, width: int) -> 'Typ':
        return cls(TypeKind.INT, signed=True, width=width)

    @classmethod
    def unsigned_type(cls, width: int) -> 'Typ':
        return cls(TypeKind.INT, signed=False, width=width)

    @classmethod
    def isize_type(cls) -> 'Typ':
        return cls(TypeKind.INT, signed=True, width=POINTER_WIDTH, pointer_sized=True)

    @classmethod
    def usize_type(cls) -> 'Typ':
        return cls(TypeKind.INT, signed=False, width=POINTER_WIDTH, pointer_sized=True)

    @classmethod
    def array_type(cls, elem: 'Typ', length: int) -> 'Typ':
        if length < 0:
            raise LayoutError(f"({elem}, {length}) is wrong for an array type")
        return cls(TypeKind.ARRAY, element=elem, size=length)

    @classmethod
    def infinite_array_type(cls, elem: 'Typ') -> 'Typ':
        """Array with length 0, used for arrays whose size is not known yet"""
        return cls.array_type(elem, 0)

    @classmethod
    def slice_type(cls, elem: 'Typ') -> 'Typ':
        return cls(TypeKind.SLICE, element=elem)

    @classmethod
    def slice_type_from_array_type(cls, array_type: 'Typ') -> 'Typ':
        return cls.slice_type(array_type.elem_type())

    @classmethod
    def ptr_type(cls, pointee: 'Typ', mutable: bool = False) -> 'Typ':
        return cls(TypeKind.POINTER, pointer_kind=PointerKind.RAW,
                   pointee=pointee, mutable=mutable)

    @classmethod
    def ref_type(cls, pointee: 'Typ', mutable: bool = False) -> 'Typ':
        return cls(TypeKind.POINTER, pointer_kind=PointerKind.REF,
                   pointee=pointee, mutable=mutable)

    @classmethod
    def box_type(cls, inner: 'Typ') -> 'Typ':
        return cls(TypeKind.POINTER, pointer_kind=PointerKind.BOX,
                   pointee=inner, mutable=True)

    @classmethod
    def struct_type(cls, name: str, fields) -> 'Typ':
        return cls(TypeKind.STRUCT, type_name=name,
                   fields=tuple((fname, fty) for fname, fty in fields))

    @classmethod
    def tuple_type(cls, elements) -> 'Typ':
        elements = tuple(elements)
        # The empty tuple is the unit type
        if not elements:
            return cls.unit_type()
        return cls(TypeKind.TUPLE, elements=elements)

    @classmethod
    def fn_type(cls, name: str, params=(), ret: Optional['Typ'] = None) -> 'Typ':
        return cls(TypeKind.FUNCTION, type_name=name, params=tuple(params),
                   ret=ret if ret is not None else cls.unit_type())

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    def is_unit(self) -> bool:
        return self.kind == TypeKind.UNIT

    def is_bool(self) -> bool:
        return self.kind == TypeKind.BOOL

    def is_integer(self) -> bool:
        return self.kind == TypeKind.INT

    def is_signed(self) -> bool:
        return self.is_integer() and self.signed

    def is_unsigned(self) -> bool:
        return self.is_integer() and not self.signed

    def is_isize(self) -> bool:
        return self == Typ.isize_type()

    def is_usize(self) -> bool:
        return self == Typ.usize_type()

    def is_primitive(self) -> bool:
        return self.kind in (TypeKind.BOOL, TypeKind.INT)

    def is_array(self) -> bool:
        return self.kind == TypeKind.ARRAY

    def is_slice(self) -> bool:
        return self.kind == TypeKind.SLICE

    def is_fn(self) -> bool:
        return self.kind == TypeKind.FUNCTION

    def is_struct(self) -> bool:
        return self.kind == TypeKind.STRUCT

    def is_tuple(self) -> bool:
        return self.kind == TypeKind.TUPLE

    def is_ref(self) -> bool:
        return self.kind == TypeKind.POINTER and self.pointer_kind == PointerKind.REF

    def is_ptr(self) -> bool:
        return self.kind == TypeKind.POINTER and self.pointer_kind == PointerKind.RAW

    def is_box(self) -> bool:
        return self.kind == TypeKind.POINTER and self.pointer_kind == PointerKind.BOX

    def is_any_ptr(self) -> bool:
        """Box is also a pointer in this model"""
        return self.kind == TypeKind.POINTER

    def is_primitive_ptr(self) -> bool:
        return self.is_ptr() or self.is_ref()

    def is_slice_ptr(self) -> bool:
        return self.is_any_ptr() and self.pointee_ty().is_slice()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def pointee_ty(self) -> 'Typ':
        if not self.is_any_ptr():
            raise LayoutError(f"{self} is not a pointer type")
        return self.pointee

    def array_size(self) -> Optional[int]:
        """Fixed length of an array type, or None for the unsized sentinel"""
        if not self.is_array():
            raise LayoutError(f"{self} is not an array type")
        return self.size if self.size != 0 else None

    def array_domain(self) -> 'Typ':
        """All array indices are usize"""
        if not self.is_array():
            raise LayoutError(f"{self} is not an array type")
        return Typ.usize_type()

    def elem_type(self) -> 'Typ':
        """Element type for arrays and slices"""
        if not (self.is_array() or self.is_slice()):
            raise LayoutError(f"{self} is neither an array nor a slice")
        return self.element

    def struct_def(self) -> StructDef:
        if not self.is_struct():
            raise LayoutError(f"{self} is not a struct type")
        return (self.type_name, self.fields)

    def tuple_def(self) -> TupleDef:
        if not self.is_tuple():
            raise LayoutError(f"{self} is not a tuple type")
        return self.elements

    def fn_def(self) -> FunctionDef:
        if not self.is_fn():
            raise LayoutError(f"{self} is not a function type")
        return (self.type_name, self.params, self.ret)

    def name(self) -> str:
        """Printable type name"""
        if self.kind == TypeKind.UNIT:
            return "unit"
        if self.kind == TypeKind.BOOL:
            return "bool"
        if self.kind == TypeKind.INT:
            prefix = "i" if self.signed else "u"
            if self.pointer_sized:
                return f"{prefix}size"
            return f"{prefix}{self.width}"
        if self.kind == TypeKind.ARRAY:
            return f"Array({self.element.name()})"
        if self.kind == TypeKind.SLICE:
            return f"Slice({self.element.name()})"
        if self.kind == TypeKind.POINTER:
            label = {PointerKind.RAW: "Ptr", PointerKind.REF: "Ref",
                     PointerKind.BOX: "Box"}[self.pointer_kind]
            return f"{label}({self.pointee.name()})"
        if self.kind == TypeKind.TUPLE:
            return "_tuple" + "".join(f"_{e.name()}" for e in self.elements)
        # Structs and functions are nominal
        return self.type_name
