"""
Contract violations raised by the memory layer

Every error here is a programming error in the driver (wrong call order or
ill-formed input). None of them is transient, so callers should abort the
current verification run instead of retrying.
"""


class ContractViolation(Exception):
    """Base class for input-contract violations in the memory layer"""
    pass


class LayoutError(ContractViolation):
    """Exception raised when a layout query does not apply to a type"""
    pass


class UnsizedArrayError(LayoutError):
    """Exception raised when flattening an array whose size was never resolved"""
    pass


class EmptyAggregateError(LayoutError):
    """Exception raised for aggregates without fields (zero-length object spaces)"""
    pass


class NotRegisteredError(ContractViolation):
    """Exception raised when looking up an object that has no object space"""
    pass


class DuplicateSpaceError(ContractViolation):
    """Exception raised when an identifier is registered again with a different type"""
    pass


class SortMismatchError(ContractViolation):
    """Exception raised when a term of the wrong sort reaches an encoder"""
    pass
