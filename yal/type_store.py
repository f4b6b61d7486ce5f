"""Owner of all types created during compilation, with coercion and casting."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from yal.types import Type, TypeKind


class TypeStore:
    """Creates types, holds the builtin ones and resolves type methods.

    Iteration yields every type created, newest first.
    """

    def __init__(self) -> None:
        self._types: list[Type] = []
        self._namespaced: dict[Type, dict[str, Any]] = {}

        self.error = self.new_type(TypeKind.Err)
        self.type = self.new_type(TypeKind.Type)
        self.void = self.new_type(TypeKind.Void)
        self.untyped_int = self.new_type(TypeKind.UntypedInt)
        self.u64 = self.new_type(TypeKind.Uint64)
        self.i64 = self.new_type(TypeKind.Int64)
        self.u32 = self.new_type(TypeKind.Uint32)
        self.i32 = self.new_type(TypeKind.Int32)
        self.u16 = self.new_type(TypeKind.Uint16)
        self.i16 = self.new_type(TypeKind.Int16)
        self.u8 = self.new_type(TypeKind.Uint8)
        self.i8 = self.new_type(TypeKind.Int8)
        self.usize = self.new_type(TypeKind.Usize)
        self.isize = self.new_type(TypeKind.Isize)
        self.bool = self.new_type(TypeKind.Bool)
        self.f32 = self.new_type(TypeKind.Float32)
        self.f64 = self.new_type(TypeKind.Float64)
        self.strview = self.new_type(TypeKind.StrView)
        self.nil = self.new_type(TypeKind.Nil)
        self.rawptr = self.new_type(TypeKind.RawPtr)
        self.default_int = self.i32

    # ------------------------------------------------------------------
    # construction

    def new_type(
        self,
        kind: TypeKind,
        inner: Iterable[Type | None] = (),
        name: str = "",
        count: int = 0,
    ) -> Type:
        """Create and register a new type."""
        ty = Type(kind=kind, inner=tuple(inner), id=name, count=count)
        self._types.append(ty)
        return ty

    def new_ptr(self, inner: Type, is_const: bool) -> Type:
        return self.new_type(TypeKind.PtrConst if is_const else TypeKind.Ptr, (inner,))

    def new_mptr(self, inner: Type, is_const: bool) -> Type:
        kind = TypeKind.MultiPtrConst if is_const else TypeKind.MultiPtr
        return self.new_type(kind, (inner,))

    def new_slice(self, inner: Type, is_const: bool) -> Type:
        kind = TypeKind.SliceConst if is_const else TypeKind.Slice
        return self.new_type(kind, (inner,))

    def new_pack(self, inner: Iterable[Type]) -> Type:
        """Create a pack, splicing in the items of any nested pack."""
        expanded: list[Type] = []
        for item in inner:
            if item.is_pack():
                expanded.extend(item.inner)
            else:
                expanded.append(item)
        return self.new_type(TypeKind.Pack, expanded)

    def new_array_type(self, inner: Type, count: int) -> Type:
        return self.new_type(TypeKind.Array, (inner,), "", count)

    def new_struct(self, fields: Iterable[Type]) -> Type:
        return self.new_type(TypeKind.Struct, fields)

    def new_struct_field(self, name: str, ty: Type) -> Type:
        return self.new_type(TypeKind.StructField, (ty,), name)

    def new_lit(self, fields: Iterable[Type]) -> Type:
        return self.new_type(TypeKind.Lit, fields)

    def new_lit_field(self, name: str, ty: Type) -> Type:
        return self.new_type(TypeKind.LitField, (ty,), name)

    def new_func(self, params: Type, ret: Type, has_var_args: bool) -> Type:
        kind = TypeKind.FuncWithVarArgs if has_var_args else TypeKind.Func
        return self.new_type(kind, (params, ret))

    def new_distinct_of(self, name: str, inner: Type | None) -> Type:
        return self.new_type(TypeKind.Distinct, (inner,), name)

    def default_for(self, ty: Type) -> Type:
        """Replace an untyped integer with the default integer type."""
        if ty.is_integral() and ty.is_untyped_int():
            return self.default_int
        return ty

    # ------------------------------------------------------------------
    # methods attached to types

    def add_function_to_type(self, ty: Type, name: str, decl: Any) -> None:
        self._namespaced.setdefault(ty, {})[name] = decl

    def get_function_from_type(self, ty: Type, name: str) -> Any:
        """Return the declaration of a method on a type, or None."""
        return self._namespaced.get(ty, {}).get(name)

    def new_bound_from(self, ty: Type) -> Type:
        """Create the bound-method type for a plain function type."""
        sig = ty.as_func()
        if ty.kind is TypeKind.FuncWithVarArgs:
            raise ValueError("cannot bind a function with C varargs")
        return self.new_type(TypeKind.BoundFunc, (sig.params, sig.ret))

    def namespaced_functions(self) -> Mapping[Type, Mapping[str, Any]]:
        return self._namespaced

    # ------------------------------------------------------------------
    # conversions

    def coerce(self, dst: Type, src: Type) -> Type | None:
        """Return the type ``src`` becomes when coerced to ``dst``, or None."""
        if dst is None or src is None:
            raise ValueError("coerce needs two types")

        if dst.is_err():
            return dst

        if dst.is_pack() and not src.is_pack() and len(dst.inner) == 1:
            dst = dst.inner[0]
        if src.is_pack() and not dst.is_pack() and len(src.inner) == 1:
            src = src.inner[0]

        if dst.is_integral():
            return self._coerce_integral(dst, src)

        if dst.is_bool():
            return dst if src.is_bool() else None

        if dst.kind is TypeKind.StrView:
            return dst if src.kind is TypeKind.StrView else None

        if dst.kind is TypeKind.MultiPtr:
            return dst if src.kind is TypeKind.MultiPtr else None

        if dst.kind is TypeKind.MultiPtrConst:
            if src.kind in (TypeKind.MultiPtr, TypeKind.MultiPtrConst):
                return dst
            return None

        if dst.kind is TypeKind.Pack:
            if src.kind is not TypeKind.Pack:
                return None
            results = []
            for s, d in zip(src.inner, dst.inner):
                r = self.coerce(d, s)
                if r is None:
                    return None
                results.append(r)
            return self.new_pack(results)

        if dst.is_distinct() and src.is_lit():
            return self._coerce_lit_to_distinct(dst, src)

        return None

    def _coerce_integral(self, dst: Type, src: Type) -> Type | None:
        if not src.is_integral():
            return None
        if src.is_untyped_int():
            return dst
        if dst.is_untyped_int():
            return src

        if dst.is_signed() and src.is_signed():
            return None if dst.size() < src.size() else dst
        if dst.is_signed() and src.is_unsigned():
            return None if dst.size() <= src.size() else dst
        if dst.is_unsigned() and src.is_signed():
            return None
        if dst.is_unsigned() and src.is_unsigned():
            return None if dst.size() < src.size() else dst

        raise RuntimeError(f"unhandled integer coercion from {src} to {dst}")

    def _coerce_lit_to_distinct(self, dst: Type, src: Type) -> Type | None:
        original_dst = dst
        expected = dst.undistinct().struct_fields()

        results = []
        for item in src.inner:
            if not item.is_lit_field():
                # positional initializers are not supported
                return None
            layout = expected.get(item.id)
            if layout is None:
                return None
            ty = self.coerce(layout.type, item.inner[0])
            if ty is None:
                return None
            results.append(self.new_struct_field(item.id, ty))

        if len(results) != len(expected):
            return None

        result = self.new_struct(results)
        wrapper = original_dst
        while wrapper.is_distinct():
            result = self.new_distinct_of(wrapper.id, result)
            wrapper = wrapper.inner[0]
        return result

    def cast(self, dst: Type, src: Type) -> Type | None:
        """Return the result type of an explicit cast, or None if invalid."""
        if dst is None or src is None:
            raise ValueError("cast needs two types")

        if dst.is_err():
            return dst
        if dst == src:
            return dst
        if dst.is_integral() and src.is_integral():
            return dst
        if src.is_distinct():
            return self.cast(dst, src.inner[0])
        if dst.is_distinct():
            return self.new_distinct_of(dst.id, self.cast(dst.inner[0], src))
        return None

    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Type]:
        return reversed(self._types)

    def to_json(self) -> dict[str, Any]:
        return {"types": [t.to_json() for t in self]}