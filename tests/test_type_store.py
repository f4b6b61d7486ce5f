import pytest

from yal.type_store import TypeStore
from yal.types import Type, TypeKind


@pytest.fixture
def ts():
    return TypeStore()


def test_builtins_have_expected_kinds(ts):
    assert ts.i32.kind is TypeKind.Int32
    assert ts.u8.kind is TypeKind.Uint8
    assert ts.error.is_err()
    assert ts.strview.is_strview()
    assert ts.default_int is ts.i32


def test_default_for(ts):
    assert ts.default_for(ts.untyped_int) is ts.i32
    assert ts.default_for(ts.u64) is ts.u64


def test_new_pack_flattens_nested(ts):
    inner = ts.new_pack([ts.i32, ts.bool])
    pack = ts.new_pack([inner, ts.u8])
    assert pack.inner == (ts.i32, ts.bool, ts.u8)
    assert pack.is_pack()


def test_new_type_registers_newest_first(ts):
    a = ts.new_ptr(ts.i32, False)
    b = ts.new_slice(ts.u8, True)
    items = list(ts)
    assert items[0] is b
    assert items[1] is a
    assert ts.error in items


def test_constructors_kinds(ts):
    assert ts.new_ptr(ts.i32, True).kind is TypeKind.PtrConst
    assert ts.new_mptr(ts.u8, False).kind is TypeKind.MultiPtr
    assert ts.new_mptr(ts.u8, True).kind is TypeKind.MultiPtrConst
    arr = ts.new_array_type(ts.u8, 6)
    assert arr.count == 6 and arr.inner == (ts.u8,)
    field = ts.new_struct_field("x", ts.i32)
    assert field.id == "x" and field.is_struct_field()
    assert ts.new_lit_field("x", ts.i32).is_lit_field()
    assert ts.new_lit([field]).is_lit()


@pytest.mark.parametrize(
    "dst,src,ok",
    [
        ("i64", "i32", True),
        ("i32", "i64", False),
        ("i64", "u32", True),
        ("i32", "u32", False),
        ("u32", "i8", False),
        ("u64", "u32", True),
        ("u16", "u32", False),
        ("i32", "bool", False),
    ],
)
def test_coerce_integers(ts, dst, src, ok):
    d, s = getattr(ts, dst), getattr(ts, src)
    result = ts.coerce(d, s)
    if ok:
        assert result is d
    else:
        assert result is None


def test_coerce_untyped(ts):
    assert ts.coerce(ts.u8, ts.untyped_int) is ts.u8
    assert ts.coerce(ts.untyped_int, ts.i16) is ts.i16


def test_coerce_error_forwarded(ts):
    assert ts.coerce(ts.error, ts.bool) is ts.error


def test_coerce_bool_and_strview(ts):
    assert ts.coerce(ts.bool, ts.bool) is ts.bool
    assert ts.coerce(ts.bool, ts.i32) is None
    assert ts.coerce(ts.strview, ts.strview) is ts.strview
    assert ts.coerce(ts.strview, ts.u8) is None


def test_coerce_multi_pointers(ts):
    mut = ts.new_mptr(ts.u8, False)
    const = ts.new_mptr(ts.u8, True)
    assert ts.coerce(const, mut) is const
    assert ts.coerce(const, const) is const
    assert ts.coerce(mut, const) is None
    assert ts.coerce(mut, mut) is mut


def test_coerce_single_packs_unpacked(ts):
    pack = ts.new_pack([ts.i64])
    assert ts.coerce(pack, ts.i32) is ts.i64
    assert ts.coerce(ts.i64, ts.new_pack([ts.i32])) is ts.i64


def test_coerce_packs(ts):
    dst = ts.new_pack([ts.i64, ts.bool])
    src = ts.new_pack([ts.untyped_int, ts.bool])
    result = ts.coerce(dst, src)
    assert result.is_pack()
    assert result.inner == (ts.i64, ts.bool)
    bad = ts.new_pack([ts.bool, ts.bool])
    assert ts.coerce(dst, bad) is None


def _counter(ts):
    struct = ts.new_struct(
        [ts.new_struct_field("cnt", ts.i32), ts.new_struct_field("total", ts.i32)]
    )
    return ts.new_distinct_of("Counter", struct)


def test_coerce_lit_to_distinct_struct(ts):
    counter = _counter(ts)
    lit = ts.new_lit(
        [
            ts.new_lit_field("cnt", ts.untyped_int),
            ts.new_lit_field("total", ts.untyped_int),
        ]
    )
    result = ts.coerce(counter, lit)
    assert result == counter
    assert result.is_distinct()
    assert result.undistinct().struct_fields()["total"].type == ts.i32


def test_coerce_lit_missing_or_unknown_field(ts):
    counter = _counter(ts)
    missing = ts.new_lit([ts.new_lit_field("total", ts.untyped_int)])
    assert ts.coerce(counter, missing) is None
    unknown = ts.new_lit(
        [
            ts.new_lit_field("cnt", ts.untyped_int),
            ts.new_lit_field("nope", ts.untyped_int),
        ]
    )
    assert ts.coerce(counter, unknown) is None
    positional = ts.new_lit([ts.untyped_int, ts.untyped_int])
    assert ts.coerce(counter, positional) is None


def test_cast(ts):
    assert ts.cast(ts.i32, ts.usize) is ts.i32
    assert ts.cast(ts.error, ts.bool) is ts.error
    assert ts.cast(ts.bool, ts.bool) is ts.bool
    assert ts.cast(ts.bool, ts.i32) is None


def test_cast_through_distinct(ts):
    cstr = ts.new_mptr(ts.u8, True)
    distinct = ts.new_distinct_of("cstr_t", cstr)
    assert ts.cast(cstr, distinct) is cstr
    result = ts.cast(distinct, cstr)
    assert result == distinct
    assert result.id == "cstr_t"


def test_namespaced_functions(ts):
    num = ts.new_distinct_of("num", ts.i32)
    decl = object()
    ts.add_function_to_type(num, "print", decl)
    same = Type(kind=TypeKind.Distinct, inner=(ts.i32,), id="num")
    assert ts.get_function_from_type(same, "print") is decl
    assert ts.get_function_from_type(num, "other") is None
    assert ts.get_function_from_type(ts.i32, "print") is None
    assert ts.namespaced_functions()[num] == {"print": decl}


def test_new_bound_from(ts):
    params = ts.new_pack([ts.i32, ts.bool])
    ret = ts.new_pack([ts.void])
    func = ts.new_func(params, ret, False)
    bound = ts.new_bound_from(func)
    assert bound.kind is TypeKind.BoundFunc
    sig = bound.as_func()
    assert sig.is_bound
    assert sig.call_params() == (ts.bool,)
    assert sig.is_void()


def test_new_bound_from_varargs_rejected(ts):
    func = ts.new_func(ts.new_pack([ts.i32]), ts.new_pack([ts.void]), True)
    with pytest.raises(ValueError):
        ts.new_bound_from(func)


def test_to_json_lists_all_types(ts):
    ts.new_ptr(ts.u8, False)
    data = ts.to_json()
    assert len(data["types"]) == len(list(ts))
    assert data["types"][0]["kind"] == "Ptr"
    assert data["types"][-1]["kind"] == "Err"