"""
Tests for program types and layout queries

Covers type constructors and predicates, structural decomposition and the
flattened field count used to size object spaces.
"""

import pytest

from memspace.core.types import Typ, TypeKind, PointerKind
from memspace.core.layout import (
    is_struct, is_array, is_tuple, is_pointer_like, fields,
    array_element_and_size, flattened_field_count, object_space_length
)
from memspace.core.errors import LayoutError, UnsizedArrayError, EmptyAggregateError


U8 = Typ.unsigned_type(8)
U16 = Typ.unsigned_type(16)
I32 = Typ.signed_type(32)
BOOL = Typ.bool_type()


class TestTypeConstructors:
    """Test construction, naming and predicates of types"""

    def test_integer_names(self):
        assert U16.name() == "u16"
        assert I32.name() == "i32"
        assert Typ.usize_type().name() == "usize"
        assert Typ.isize_type().name() == "isize"

    def test_integer_predicates(self):
        assert I32.is_signed() and not I32.is_unsigned()
        assert U8.is_unsigned() and U8.is_integer()
        assert Typ.usize_type().is_usize()
        assert not Typ.unsigned_type(64).is_usize(), "u64 is not usize"
        assert BOOL.is_primitive() and not BOOL.is_integer()

    def test_pointer_kinds(self):
        raw = Typ.ptr_type(I32, mutable=True)
        ref = Typ.ref_type(I32)
        box = Typ.box_type(I32)

        assert raw.pointer_kind == PointerKind.RAW and raw.is_ptr()
        assert ref.is_ref() and ref.is_primitive_ptr()
        assert box.is_box() and not box.is_primitive_ptr()
        assert all(t.is_any_ptr() for t in (raw, ref, box))
        assert raw.name() == "Ptr(i32)"
        assert box.pointee_ty() == I32

    def test_slice_pointer(self):
        slice_ref = Typ.ref_type(Typ.slice_type(U8))
        assert slice_ref.is_slice_ptr()
        assert not Typ.ref_type(U8).is_slice_ptr()

    def test_slice_from_array(self):
        arr = Typ.array_type(U8, 4)
        assert Typ.slice_type_from_array_type(arr) == Typ.slice_type(U8)

    def test_empty_tuple_is_unit(self):
        assert Typ.tuple_type([]) == Typ.unit_type()
        assert Typ.tuple_type([]).kind == TypeKind.UNIT

    def test_tuple_name(self):
        assert Typ.tuple_type([I32, BOOL]).name() == "_tuple_i32_bool"

    def test_types_are_hashable(self):
        data = Typ.struct_type("TData", [("lo", U16), ("hi", Typ.array_type(U8, 3))])
        same = Typ.struct_type("TData", [("lo", U16), ("hi", Typ.array_type(U8, 3))])

        assert data == same
        assert len({data, same, I32}) == 2

    def test_infinite_array_is_zero_length_sentinel(self):
        assert Typ.infinite_array_type(U8) == Typ.array_type(U8, 0)
        assert Typ.infinite_array_type(U8).array_size() is None
        assert Typ.array_type(U8, 3).array_size() == 3

    def test_negative_array_length_rejected(self):
        with pytest.raises(LayoutError):
            Typ.array_type(U8, -1)

    def test_accessors_check_kind(self):
        with pytest.raises(LayoutError):
            I32.pointee_ty()
        with pytest.raises(LayoutError):
            I32.array_size()
        with pytest.raises(LayoutError):
            BOOL.struct_def()
        with pytest.raises(LayoutError):
            BOOL.tuple_def()

    def test_function_type(self):
        fn = Typ.fn_type("alloc_data", [Typ.ref_type(I32)])
        name, params, ret = fn.fn_def()
        assert fn.is_fn()
        assert name == "alloc_data"
        assert params == (Typ.ref_type(I32),)
        assert ret.is_unit()


class TestStructuralQueries:
    """Test classification and decomposition of aggregates"""

    def test_classification(self):
        data = Typ.struct_type("S", [("a", BOOL)])
        assert is_struct(data) and not is_tuple(data)
        assert is_array(Typ.array_type(U8, 2))
        assert is_tuple(Typ.tuple_type([I32, I32]))
        assert is_pointer_like(Typ.box_type(data))
        assert not is_pointer_like(I32)

    def test_struct_fields_in_order(self):
        data = Typ.struct_type("TData", [("lo", U16), ("hi", Typ.array_type(U8, 3))])
        assert fields(data) == [("lo", U16), ("hi", Typ.array_type(U8, 3))]

    def test_tuple_fields(self):
        assert fields(Typ.tuple_type([I32, BOOL])) == [I32, BOOL]

    def test_fields_of_scalar_fails(self):
        with pytest.raises(LayoutError):
            fields(I32)

    def test_fields_of_empty_struct_fails(self):
        with pytest.raises(EmptyAggregateError):
            fields(Typ.struct_type("Empty", []))

    def test_array_element_and_size(self):
        assert array_element_and_size(Typ.array_type(I32, 5)) == (I32, 5)
        assert array_element_and_size(Typ.infinite_array_type(I32)) == (I32, None)

    def test_array_element_and_size_of_non_array(self):
        with pytest.raises(LayoutError):
            array_element_and_size(Typ.slice_type(I32))


class TestFlattenedFieldCount:
    """Test the field-level size of types"""

    def test_scalars(self):
        assert flattened_field_count(Typ.unit_type()) == 0
        assert flattened_field_count(BOOL) == 1
        assert flattened_field_count(Typ.usize_type()) == 1

    def test_pointers_count_as_one(self):
        big = Typ.struct_type("Big", [("a", Typ.array_type(I32, 10))])
        assert flattened_field_count(Typ.ptr_type(big)) == 1
        assert flattened_field_count(Typ.ref_type(big)) == 1
        assert flattened_field_count(Typ.box_type(big)) == 1

    def test_struct_with_array(self):
        """{a: bool, b: [i32; 3]} has 1 + 3 leaves"""
        s = Typ.struct_type("S", [("a", BOOL), ("b", Typ.array_type(I32, 3))])
        assert flattened_field_count(s) == 4

    def test_tuple(self):
        assert flattened_field_count(Typ.tuple_type([I32, I32, BOOL])) == 3

    def test_nested_arrays_multiply(self):
        matrix = Typ.array_type(Typ.array_type(U8, 3), 2)
        assert flattened_field_count(matrix) == 6

    def test_array_of_structs(self):
        pair = Typ.struct_type("Pair", [("x", I32), ("y", I32)])
        assert flattened_field_count(Typ.array_type(pair, 4)) == 8

    def test_unit_fields_do_not_count(self):
        s = Typ.struct_type("S", [("marker", Typ.unit_type()), ("v", I32)])
        assert flattened_field_count(s) == 1

    def test_unsized_array_rejected(self):
        with pytest.raises(UnsizedArrayError):
            flattened_field_count(Typ.infinite_array_type(I32))

    def test_unsized_array_inside_struct_rejected(self):
        s = Typ.struct_type("Tail", [("len", Typ.usize_type()),
                                     ("data", Typ.infinite_array_type(U8))])
        with pytest.raises(UnsizedArrayError):
            flattened_field_count(s)

    def test_empty_struct_rejected(self):
        with pytest.raises(EmptyAggregateError):
            flattened_field_count(Typ.struct_type("Empty", []))

    def test_slice_and_function_have_no_count(self):
        with pytest.raises(LayoutError):
            flattened_field_count(Typ.slice_type(U8))
        with pytest.raises(LayoutError):
            flattened_field_count(Typ.fn_type("f"))

    def test_count_is_pure(self):
        s = Typ.struct_type("S", [("a", BOOL), ("b", Typ.tuple_type([I32, U8]))])
        assert flattened_field_count(s) == flattened_field_count(s) == 3


class TestObjectSpaceLength:
    """Test the length reserved for an object of a given type"""

    def test_scalar_takes_one_slot(self):
        assert object_space_length(I32) == 1
        assert object_space_length(Typ.ref_type(I32)) == 1

    def test_unit_object_takes_one_slot(self):
        assert object_space_length(Typ.unit_type()) == 1

    def test_aggregates_are_flattened(self):
        data = Typ.struct_type("TData", [("lo", U16), ("hi", Typ.array_type(U8, 3))])
        assert object_space_length(data) == 4
        assert object_space_length(Typ.array_type(I32, 7)) == 7
        assert object_space_length(Typ.tuple_type([I32, BOOL])) == 2

    def test_zero_length_aggregate_rejected(self):
        units = Typ.tuple_type([Typ.unit_type(), Typ.unit_type()])
        with pytest.raises(EmptyAggregateError):
            object_space_length(units)
