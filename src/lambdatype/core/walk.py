"""Generic traversals over types and terms.

A walker has one hook per tree shape. Leaf hooks return the node unchanged
and composite hooks rebuild the node from walked children, so a subclass
overrides only the shapes it cares about and every other subtree is still
visited. Unchanged subtrees are returned as-is rather than copied.

Type binders (``Universal``, ``Existential``, ``Abstraction``,
``Recursive``) raise ``cutoff`` by one while their body is walked.
"""

from __future__ import annotations

import sys

from lambdatype.core.ast import (
    Abs,
    App,
    Arm,
    BoolLit,
    Case,
    Fix,
    Fold,
    If,
    Inject,
    Let,
    NatLit,
    Pack,
    Prim,
    Project,
    Term,
    Tuple,
    TyAbs,
    TyApp,
    Unfold,
    UnitLit,
    Unpack,
    Var,
)
from lambdatype.core.errors import RecursionLimitExceeded
from lambdatype.core.types import (
    Abstraction,
    Alias,
    Application,
    Arrow,
    Bool,
    Existential,
    Field,
    Nat,
    Product,
    Recursive,
    Type,
    Unit,
    Universal,
    Variable,
    Variant,
)

# Two interpreter frames per nesting level, with headroom for the caller
DEFAULT_MAX_DEPTH = sys.getrecursionlimit() // 3


class TypeWalker:
    """Rebuilding traversal over :class:`Type` trees."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.cutoff = 0
        self.max_depth = max_depth
        self._depth = 0

    def walk(self, ty: Type) -> Type:
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise RecursionLimitExceeded(self.max_depth)
            match ty:
                case Unit():
                    return self.walk_unit(ty)
                case Nat():
                    return self.walk_nat(ty)
                case Bool():
                    return self.walk_bool(ty)
                case Alias():
                    return self.walk_alias(ty)
                case Variable():
                    return self.walk_variable(ty)
                case Variant():
                    return self.walk_variant(ty)
                case Product():
                    return self.walk_product(ty)
                case Arrow():
                    return self.walk_arrow(ty)
                case Universal():
                    return self.walk_universal(ty)
                case Existential():
                    return self.walk_existential(ty)
                case Abstraction():
                    return self.walk_abstraction(ty)
                case Application():
                    return self.walk_application(ty)
                case Recursive():
                    return self.walk_recursive(ty)
                case _:
                    raise ValueError(f"Unknown type: {ty!r}")
        finally:
            self._depth -= 1

    def walk_binder_body(self, body: Type) -> Type:
        self.cutoff += 1
        try:
            return self.walk(body)
        finally:
            self.cutoff -= 1

    def walk_unit(self, ty: Unit) -> Type:
        return ty

    def walk_nat(self, ty: Nat) -> Type:
        return ty

    def walk_bool(self, ty: Bool) -> Type:
        return ty

    def walk_alias(self, ty: Alias) -> Type:
        return ty

    def walk_variable(self, ty: Variable) -> Type:
        return ty

    def walk_variant(self, ty: Variant) -> Type:
        fields = tuple(Field(f.label, self.walk(f.ty)) for f in ty.fields)
        if all(new.ty is old.ty for new, old in zip(fields, ty.fields)):
            return ty
        return Variant(fields)

    def walk_product(self, ty: Product) -> Type:
        types = tuple(self.walk(t) for t in ty.types)
        if all(new is old for new, old in zip(types, ty.types)):
            return ty
        return Product(types)

    def walk_arrow(self, ty: Arrow) -> Type:
        arg = self.walk(ty.arg)
        ret = self.walk(ty.ret)
        if arg is ty.arg and ret is ty.ret:
            return ty
        return Arrow(arg, ret)

    def walk_universal(self, ty: Universal) -> Type:
        body = self.walk_binder_body(ty.body)
        return ty if body is ty.body else Universal(body)

    def walk_existential(self, ty: Existential) -> Type:
        body = self.walk_binder_body(ty.body)
        return ty if body is ty.body else Existential(body)

    def walk_abstraction(self, ty: Abstraction) -> Type:
        body = self.walk_binder_body(ty.body)
        return ty if body is ty.body else Abstraction(ty.kind, body)

    def walk_application(self, ty: Application) -> Type:
        func = self.walk(ty.func)
        arg = self.walk(ty.arg)
        if func is ty.func and arg is ty.arg:
            return ty
        return Application(func, arg)

    def walk_recursive(self, ty: Recursive) -> Type:
        body = self.walk_binder_body(ty.body)
        return ty if body is ty.body else Recursive(body)


class TermWalker:
    """Rebuilding traversal over :class:`Term` trees.

    Every type annotation inside a term goes through :meth:`walk_type`.
    ``type_cutoff`` counts the type binders (``TyAbs`` and ``Unpack``)
    enclosing the current node.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.type_cutoff = 0
        self.max_depth = max_depth
        self._depth = 0

    def walk(self, term: Term) -> Term:
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                raise RecursionLimitExceeded(self.max_depth, term.span)
            match term:
                case UnitLit() | BoolLit() | NatLit() | Prim():
                    return self.walk_literal(term)
                case Var():
                    return self.walk_var(term)
                case Abs():
                    return self.walk_abs(term)
                case App():
                    return self.walk_app(term)
                case Fix():
                    return self.walk_fix(term)
                case If():
                    return self.walk_if(term)
                case Inject():
                    return self.walk_inject(term)
                case Project():
                    return self.walk_project(term)
                case Tuple():
                    return self.walk_tuple(term)
                case Let():
                    return self.walk_let(term)
                case TyAbs():
                    return self.walk_tyabs(term)
                case TyApp():
                    return self.walk_tyapp(term)
                case Fold():
                    return self.walk_fold(term)
                case Unfold():
                    return self.walk_unfold(term)
                case Pack():
                    return self.walk_pack(term)
                case Unpack():
                    return self.walk_unpack(term)
                case Case():
                    return self.walk_case(term)
                case _:
                    raise ValueError(f"Unknown term: {term!r}")
        finally:
            self._depth -= 1

    def walk_type(self, ty: Type) -> Type:
        return ty

    def _under_type_binder(self, body: Term) -> Term:
        self.type_cutoff += 1
        try:
            return self.walk(body)
        finally:
            self.type_cutoff -= 1

    def walk_literal(self, term: Term) -> Term:
        return term

    def walk_var(self, term: Var) -> Term:
        return term

    def walk_abs(self, term: Abs) -> Term:
        return Abs(self.walk_type(term.param_type), self.walk(term.body), span=term.span)

    def walk_app(self, term: App) -> Term:
        return App(self.walk(term.func), self.walk(term.arg), span=term.span)

    def walk_fix(self, term: Fix) -> Term:
        return Fix(self.walk(term.inner), span=term.span)

    def walk_if(self, term: If) -> Term:
        return If(
            self.walk(term.guard),
            self.walk(term.then),
            self.walk(term.otherwise),
            span=term.span,
        )

    def walk_inject(self, term: Inject) -> Term:
        return Inject(
            term.label,
            self.walk(term.payload),
            self.walk_type(term.variant_type),
            span=term.span,
        )

    def walk_project(self, term: Project) -> Term:
        return Project(self.walk(term.term), term.index, span=term.span)

    def walk_tuple(self, term: Tuple) -> Term:
        return Tuple(tuple(self.walk(t) for t in term.terms), span=term.span)

    def walk_let(self, term: Let) -> Term:
        return Let(self.walk(term.bound), self.walk(term.body), span=term.span)

    def walk_tyabs(self, term: TyAbs) -> Term:
        return TyAbs(self._under_type_binder(term.body), span=term.span)

    def walk_tyapp(self, term: TyApp) -> Term:
        return TyApp(self.walk(term.term), self.walk_type(term.type_arg), span=term.span)

    def walk_fold(self, term: Fold) -> Term:
        return Fold(self.walk_type(term.rec_type), self.walk(term.term), span=term.span)

    def walk_unfold(self, term: Unfold) -> Term:
        return Unfold(self.walk_type(term.rec_type), self.walk(term.term), span=term.span)

    def walk_pack(self, term: Pack) -> Term:
        return Pack(
            self.walk_type(term.witness),
            self.walk(term.term),
            self.walk_type(term.existential_type),
            span=term.span,
        )

    def walk_unpack(self, term: Unpack) -> Term:
        package = self.walk(term.package)
        return Unpack(package, self._under_type_binder(term.body), span=term.span)

    def walk_case(self, term: Case) -> Term:
        scrutinee = self.walk(term.scrutinee)
        arms = tuple(Arm(arm.pattern, self.walk(arm.body), span=arm.span) for arm in term.arms)
        return Case(scrutinee, arms, span=term.span)
