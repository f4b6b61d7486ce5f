# yal

Building blocks for the yal language compiler: the type system, compile-time
values, compiler options and two small file helpers.

## Installing

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Types

`yal.types` defines `TypeKind` and `Type`. A `Type` holds its kind, a tuple
of inner types, an `id` (field or distinct name) and a `count` (array
length). It reports its size and alignment in bytes (pointers are 8 bytes,
slices and string views 16), and prints itself in yal syntax: `*i32`,
`[*]const u8`, `[6]u8`, `func(i32, ...) i32`, `struct {a: i32, b: u8}`,
`#name(i32)`. Types compare and hash by kind, id and inner types.

- `Type.as_func()` returns a `FuncSignature` with the parameter and return
  packs; `call_params()` leaves out the receiver of a bound method.
- `Type.struct_fields()` maps each field name to a `FieldLayout` holding its
  offset and type.
- `Type.undistinct()` and `Type.unpacked()` strip distinct wrappers and
  single-item packs.
- `Type.to_json()` gives a dictionary with `kind`, `inner` and, for distinct
  types, `id`.
- `kind_name(kind)` gives the display name of a `TypeKind`.

`as_func()` and `struct_fields()` raise `ValueError` when the type is not a
function or a struct.

## The type store

`yal.type_store.TypeStore` creates types and holds the builtin ones as
attributes: `error`, `type`, `void`, `untyped_int`, `u64`, `i64`, `u32`,
`i32`, `u16`, `i16`, `u8`, `i8`, `usize`, `isize`, `bool`, `f32`, `f64`,
`strview`, `nil`, `rawptr`, and `default_int` (which is `i32`).

```python
from yal.type_store import TypeStore

ts = TypeStore()
ptr = ts.new_ptr(ts.i32, is_const=True)
print(ptr)                    # *const i32

fn = ts.new_func(ts.new_pack([ts.i32]), ts.new_pack([ts.i32]), False)
print(fn)                     # func(i32) i32
```

- `coerce(dst, src)` returns the type a value of `src` becomes where `dst`
  is expected, or `None` when it cannot be used there. Untyped integers take
  the target type, sized integers only widen, packs coerce item by item, and
  a struct literal coerces to a distinct struct type when its named fields
  match.
- `cast(dst, src)` does the same for explicit casts: any integer to any
  integer, and through distinct types.
- `default_for(ty)` turns an untyped integer into `default_int`.
- `add_function_to_type`, `get_function_from_type` and
  `namespaced_functions` attach and look up methods on a type;
  `new_bound_from` makes the bound-method type of a function.
- Iterating the store yields every type created, newest first;
  `to_json()` dumps them all under `types`.

## Values

`yal.value.Value` pairs a `Type` with an optional compile-time payload: a
type, a boolean, an unsigned 64-bit integer or a string. It prints as
`Value(i32, 42)` or `Value(string_view, "hi\n")` and converts to a dictionary
with `to_json()`. An integer payload outside the unsigned 64-bit range raises
`ValueError`.

## Helpers

`yal.utils` holds the compiler's `Options` dataclass and two file helpers:
`read_entire_file(path)` returns the file's contents as text, and
`write_file(path, contents)` writes text or bytes, replacing the file. Both
raise `OSError` when the file cannot be read or written.

## What this package does not do

It has no tokenizer, parser, name resolution, semantic analysis, lowering or
code generation, and no command-line compiler. It provides the types,
values and helpers those stages work with.