"""Type representation for the compiler: kinds, layout, formatting and JSON."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

POINTER_SIZE = 8


class TypeKind(enum.Enum):
    """Every kind of type the compiler knows about."""

    Err = enum.auto()
    Type = enum.auto()
    Void = enum.auto()
    UntypedInt = enum.auto()
    Uint64 = enum.auto()
    Int64 = enum.auto()
    Uint32 = enum.auto()
    Int32 = enum.auto()
    Uint16 = enum.auto()
    Int16 = enum.auto()
    Uint8 = enum.auto()
    Int8 = enum.auto()
    Usize = enum.auto()
    Isize = enum.auto()
    Bool = enum.auto()
    Float32 = enum.auto()
    Float64 = enum.auto()
    Ptr = enum.auto()
    PtrConst = enum.auto()
    RawPtr = enum.auto()
    MultiPtr = enum.auto()
    MultiPtrConst = enum.auto()
    Slice = enum.auto()
    SliceConst = enum.auto()
    StrView = enum.auto()
    Array = enum.auto()
    Struct = enum.auto()
    StructField = enum.auto()
    Lit = enum.auto()
    LitField = enum.auto()
    Nil = enum.auto()
    Func = enum.auto()
    FuncWithVarArgs = enum.auto()
    BoundFunc = enum.auto()
    Pack = enum.auto()
    Distinct = enum.auto()


_KIND_NAMES = {
    TypeKind.Err: "Err",
    TypeKind.Type: "Type",
    TypeKind.Void: "Void",
    TypeKind.UntypedInt: "UntypedInt",
    TypeKind.Uint64: "Uint64",
    TypeKind.Int64: "Int64",
    TypeKind.Uint32: "Uint32",
    TypeKind.Int32: "Int32",
    TypeKind.Uint16: "Uint16",
    TypeKind.Int16: "Int16",
    TypeKind.Uint8: "Uint8",
    TypeKind.Int8: "Int8",
    TypeKind.Usize: "Usize",
    TypeKind.Isize: "Isize",
    TypeKind.Bool: "Bool",
    TypeKind.Float32: "f32",
    TypeKind.Float64: "f64",
    TypeKind.StrView: "string_view",
    TypeKind.Array: "Array",
    TypeKind.Struct: "struct",
    TypeKind.StructField: "struct.field",
    TypeKind.Lit: "Lit",
    TypeKind.LitField: "LitField",
    TypeKind.Ptr: "Ptr",
    TypeKind.PtrConst: "PtrConst",
    TypeKind.RawPtr: "RawPtr",
    TypeKind.MultiPtr: "MultiPtr",
    TypeKind.MultiPtrConst: "MultiPtrConst",
    TypeKind.Nil: "Nil",
    TypeKind.Func: "Func",
    TypeKind.FuncWithVarArgs: "FuncWithVarArgs",
    TypeKind.Pack: "(pack)",
    TypeKind.BoundFunc: "BoundFunc",
    TypeKind.Distinct: "Distinct",
    TypeKind.Slice: "Slice",
    TypeKind.SliceConst: "SliceConst",
}

_SIMPLE_NAMES = {
    TypeKind.Err: "<error>",
    TypeKind.Type: "type",
    TypeKind.Void: "void",
    TypeKind.UntypedInt: "untyped_int",
    TypeKind.Uint64: "u64",
    TypeKind.Int64: "i64",
    TypeKind.Uint32: "u32",
    TypeKind.Int32: "i32",
    TypeKind.Uint16: "u16",
    TypeKind.Int16: "i16",
    TypeKind.Uint8: "u8",
    TypeKind.Int8: "i8",
    TypeKind.Usize: "usize",
    TypeKind.Isize: "isize",
    TypeKind.Bool: "bool",
    TypeKind.Float32: "f32",
    TypeKind.Float64: "f64",
    TypeKind.StrView: "string_view",
    TypeKind.Nil: "nil",
    TypeKind.RawPtr: "rawptr",
}

_SIGNED = {TypeKind.Int64, TypeKind.Int32, TypeKind.Int16, TypeKind.Int8, TypeKind.Isize}
_UNSIGNED = {TypeKind.Uint64, TypeKind.Uint32, TypeKind.Uint16, TypeKind.Uint8, TypeKind.Usize}
_INTEGRAL = _SIGNED | _UNSIGNED | {TypeKind.UntypedInt}
_FUNCS = {TypeKind.Func, TypeKind.FuncWithVarArgs, TypeKind.BoundFunc}

_PRIMITIVE_LAYOUT = {
    TypeKind.Uint64: (8, 8),
    TypeKind.Int64: (8, 8),
    TypeKind.Uint32: (4, 4),
    TypeKind.Int32: (4, 4),
    TypeKind.Uint16: (2, 2),
    TypeKind.Int16: (2, 2),
    TypeKind.Uint8: (1, 1),
    TypeKind.Int8: (1, 1),
    TypeKind.Usize: (POINTER_SIZE, POINTER_SIZE),
    TypeKind.Isize: (POINTER_SIZE, POINTER_SIZE),
    TypeKind.Bool: (1, 1),
    TypeKind.Float32: (4, 4),
    TypeKind.Float64: (8, 8),
    TypeKind.StrView: (POINTER_SIZE * 2, POINTER_SIZE),
    TypeKind.Slice: (POINTER_SIZE * 2, POINTER_SIZE),
    TypeKind.SliceConst: (POINTER_SIZE * 2, POINTER_SIZE),
    TypeKind.Ptr: (POINTER_SIZE, POINTER_SIZE),
    TypeKind.PtrConst: (POINTER_SIZE, POINTER_SIZE),
    TypeKind.RawPtr: (POINTER_SIZE, POINTER_SIZE),
    TypeKind.MultiPtr: (POINTER_SIZE, POINTER_SIZE),
    TypeKind.MultiPtrConst: (POINTER_SIZE, POINTER_SIZE),
}

_WRAPPED = {
    TypeKind.StructField,
    TypeKind.LitField,
    TypeKind.Distinct,
}


def kind_name(kind: TypeKind) -> str:
    """Return the display name of a type kind."""
    return _KIND_NAMES[kind]


def _align_up(offset: int, align: int) -> int:
    # A zero alignment wraps around to zero, as in unsigned arithmetic.
    if align == 0:
        return 0
    return (offset + align - 1) & -align


@dataclass(frozen=True)
class FuncSignature:
    """Parameter and return packs of a function type."""

    params: Type
    ret: Type
    is_var_args: bool
    is_bound: bool

    def call_params(self) -> tuple[Type, ...]:
        """Parameters a caller passes; a bound receiver is left out."""
        if self.is_bound:
            return self.params.inner[1:]
        return self.params.inner

    def ret_types(self) -> tuple[Type, ...]:
        return self.ret.inner

    def is_void(self) -> bool:
        ret = self.ret_types()
        return len(ret) == 1 and ret[0].is_void()


@dataclass(frozen=True)
class FieldLayout:
    """Offset and type of a struct field."""

    offset: int
    type: Type


@dataclass(eq=False)
class Type:
    """A type: a kind with optional inner types, an id and an element count."""

    kind: TypeKind
    inner: tuple[Type, ...] = ()
    id: str = ""
    count: int = 0
    decl: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.inner = tuple(self.inner)

    def is_integral(self) -> bool:
        return self.kind in _INTEGRAL

    def is_u8(self) -> bool:
        return self.kind is TypeKind.Uint8

    def is_float(self) -> bool:
        return self.kind in (TypeKind.Float32, TypeKind.Float64)

    def is_signed(self) -> bool:
        return self.kind in _SIGNED

    def is_unsigned(self) -> bool:
        return self.kind in _UNSIGNED

    def is_always_stack(self) -> bool:
        return self.kind is TypeKind.Struct

    def is_size(self) -> bool:
        return self.kind in (TypeKind.Usize, TypeKind.Isize)

    def is_err(self) -> bool:
        return self.kind is TypeKind.Err

    def is_untyped_int(self) -> bool:
        return self.kind is TypeKind.UntypedInt

    def contains_untyped(self) -> bool:
        if self.kind in (TypeKind.UntypedInt, TypeKind.Lit):
            return True
        if self.kind is TypeKind.Pack:
            return any(t.contains_untyped() for t in self.inner)
        return False

    def is_type(self) -> bool:
        return self.kind is TypeKind.Type

    def is_void(self) -> bool:
        return self.kind is TypeKind.Void or (
            self.kind is TypeKind.Pack
            and len(self.inner) == 1
            and self.inner[0].is_void()
        )

    def is_func(self) -> bool:
        return self.kind in _FUNCS

    def is_bool(self) -> bool:
        return self.kind is TypeKind.Bool

    def is_pack(self) -> bool:
        return self.kind is TypeKind.Pack

    def is_ptr(self) -> bool:
        return self.kind in (TypeKind.Ptr, TypeKind.PtrConst)

    def is_ptr_mut(self) -> bool:
        return self.kind is TypeKind.Ptr

    def is_ptr_const(self) -> bool:
        return self.kind is TypeKind.PtrConst

    def is_rawptr(self) -> bool:
        return self.kind is TypeKind.RawPtr

    def is_mptr(self) -> bool:
        return self.kind in (TypeKind.MultiPtr, TypeKind.MultiPtrConst)

    def is_mptr_mut(self) -> bool:
        return self.kind is TypeKind.MultiPtr

    def is_mptr_const(self) -> bool:
        return self.kind is TypeKind.MultiPtrConst

    def is_const_ref(self) -> bool:
        return self.is_ptr_const() or self.is_mptr_const() or self.is_slice_const()

    def is_distinct(self) -> bool:
        return self.kind is TypeKind.Distinct

    def is_strview(self) -> bool:
        return self.kind is TypeKind.StrView

    def is_array(self) -> bool:
        return self.kind is TypeKind.Array

    def is_slice(self) -> bool:
        return self.kind in (TypeKind.Slice, TypeKind.SliceConst)

    def is_slice_mut(self) -> bool:
        return self.kind is TypeKind.Slice

    def is_slice_const(self) -> bool:
        return self.kind is TypeKind.SliceConst

    def is_struct(self) -> bool:
        return self.kind is TypeKind.Struct

    def is_struct_field(self) -> bool:
        return self.kind is TypeKind.StructField

    def is_lit(self) -> bool:
        return self.kind is TypeKind.Lit

    def is_lit_field(self) -> bool:
        return self.kind is TypeKind.LitField

    def as_func(self) -> FuncSignature:
        """View a function type as its signature."""
        if not self.is_func():
            raise ValueError(f"not a function type: {self}")
        self._check_func_shape()
        return FuncSignature(
            params=self.inner[0],
            ret=self.inner[1],
            is_var_args=self.kind is TypeKind.FuncWithVarArgs,
            is_bound=self.kind is TypeKind.BoundFunc,
        )

    def struct_fields(self) -> dict[str, FieldLayout]:
        """Map each field name of a struct to its offset and type."""
        if not self.is_struct():
            raise ValueError(f"not a struct type: {self}")
        fields: dict[str, FieldLayout] = {}
        offset = 0
        for item in self.inner:
            offset = _align_up(offset, item.alignment())
            fields[item.id] = FieldLayout(offset=offset, type=item.inner[0])
            offset += item.size()
        return fields

    def undistinct(self) -> Type:
        t = self
        while t.is_distinct():
            t = t.inner[0]
        return t

    def unpacked(self) -> Type:
        t = self
        while t.is_pack() and len(t.inner) == 1:
            t = t.inner[0]
        return t

    def alignment(self) -> int:
        if self.kind in _PRIMITIVE_LAYOUT:
            return _PRIMITIVE_LAYOUT[self.kind][1]
        if self.kind is TypeKind.Array or self.kind in _WRAPPED:
            return self.inner[0].alignment()
        if self.kind is TypeKind.Struct:
            return max((1, *(t.alignment() for t in self.inner)))
        return 0

    def size(self) -> int:
        if self.kind in _PRIMITIVE_LAYOUT:
            return _PRIMITIVE_LAYOUT[self.kind][0]
        if self.kind is TypeKind.Array:
            return self.inner[0].size() * self.count
        if self.kind in _WRAPPED:
            return self.inner[0].size()
        if self.kind is TypeKind.Struct:
            total = 0
            for item in self.inner:
                total = _align_up(total, item.alignment())
                total += item.size()
            return total
        return 0

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": kind_name(self.kind),
            "inner": [t.to_json() if t is not None else None for t in self.inner],
        }
        if self.is_distinct():
            data["id"] = self.id
        return data

    def _check_func_shape(self) -> None:
        if (
            len(self.inner) != 2
            or not self.inner[0].is_pack()
            or not self.inner[1].is_pack()
        ):
            raise ValueError("function type must hold a parameter and a return pack")

    def __str__(self) -> str:
        kind = self.kind
        if kind in _SIMPLE_NAMES:
            return _SIMPLE_NAMES[kind]

        def joined(items: tuple[Type, ...]) -> str:
            return ", ".join(str(t) for t in items)

        if kind is TypeKind.Ptr:
            return f"*{self.inner[0]}"
        if kind is TypeKind.PtrConst:
            return f"*const {self.inner[0]}"
        if kind is TypeKind.MultiPtr:
            return f"[*]{self.inner[0]}"
        if kind is TypeKind.MultiPtrConst:
            return f"[*]const {self.inner[0]}"
        if kind is TypeKind.Slice:
            return f"[]{self.inner[0]}"
        if kind is TypeKind.SliceConst:
            return f"[]const {self.inner[0]}"
        if kind is TypeKind.Array:
            return f"[{self.count}]{self.inner[0]}"
        if kind is TypeKind.Struct:
            return f"struct {{{joined(self.inner)}}}"
        if kind is TypeKind.StructField:
            return f"{self.id}: {self.inner[0]}"
        if kind is TypeKind.Lit:
            return f".{{{joined(self.inner)}}}"
        if kind is TypeKind.LitField:
            return f".{self.id}={self.inner[0]}"
        if kind in _FUNCS:
            self._check_func_shape()
            params = joined(self.inner[0].inner)
            rets = self.inner[1].inner
            prefix = {
                TypeKind.Func: f"func({params})",
                TypeKind.FuncWithVarArgs: f"func({params}, ...)",
                TypeKind.BoundFunc: f"func<bound>({params})",
            }[kind]
            if len(rets) == 1:
                return f"{prefix} {rets[0]}"
            return f"{prefix} ({joined(rets)})"
        if kind is TypeKind.Pack:
            return f"({joined(self.inner)})"
        if kind is TypeKind.Distinct:
            return f"#{self.id}({joined(self.inner)})"
        return "<invalid kind>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Type):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.id == other.id
            and self.inner == other.inner
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.id, self.inner))