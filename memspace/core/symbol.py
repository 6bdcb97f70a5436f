"""
Symbolic objects handed to the memory layer by the driver
"""

from dataclasses import dataclass

from memspace.core.types import Typ


BASE_SUFFIX = "_base"


@dataclass(frozen=True)
class Symbol:
    """
    A program variable or allocation site that needs an address.

    The identifier must be stable for the whole verification session;
    the object space base constant is named after it.

    Example: Symbol("data", Typ.struct_type("TData", [...]))
    """
    ident: str
    ty: Typ

    def __str__(self) -> str:
        return f"{self.ident}: {self.ty}"

    def base_name(self) -> str:
        return f"{self.ident}{BASE_SUFFIX}"
