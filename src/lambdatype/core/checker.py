"""Type checker for the typed lambda calculi.

Every binder in a term carries its type, so checking is a single bottom-up
pass: each rule computes the type of a term from the types of its subterms
and raises on the first mismatch.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextlib import ExitStack

from loguru import logger

from lambdatype.config import CheckerSettings, load_settings
from lambdatype.core.ast import (
    Abs,
    AliasDeclaration,
    App,
    BoolLit,
    Case,
    Declaration,
    Fix,
    Fold,
    If,
    Inject,
    Let,
    NatLit,
    Pack,
    Prim,
    Primitive,
    Project,
    Term,
    TermDeclaration,
    Tuple,
    TyAbs,
    TyApp,
    Unfold,
    UnitLit,
    Unpack,
    Var,
)
from lambdatype.core.context import Context
from lambdatype.core.errors import (
    EscapingTypeVariable,
    Guard,
    IncompatibleArms,
    InvalidProjection,
    NotArrow,
    NotExistential,
    NotProduct,
    NotRec,
    NotUniversal,
    NotVariant,
    ParameterMismatch,
    RecursionLimitExceeded,
    TypeError,
    UnboundVariable,
)
from lambdatype.core.patterns import PatternChecker
from lambdatype.core.shift import free_in, shift, subst_top
from lambdatype.core.types import (
    Arrow,
    Bool,
    Existential,
    Nat,
    Product,
    Recursive,
    Type,
    Unit,
    Universal,
    Variant,
)

PRIMITIVE_TYPES: dict[Primitive, Type] = {
    Primitive.IS_ZERO: Arrow(Nat(), Bool()),
    Primitive.SUCC: Arrow(Nat(), Nat()),
    Primitive.PRED: Arrow(Nat(), Nat()),
}


class TypeChecker:
    """Type checker with an alias table shared across calls."""

    def __init__(
        self,
        aliases: Mapping[str, Type] | None = None,
        settings: CheckerSettings | None = None,
    ):
        """Initialize with an alias table.

        Args:
            aliases: Maps alias names to the types they stand for.
                Example: {"NatList": rec <nil: Unit | cons: (Nat, TyVar(0))>}
            settings: Recursion bound and tracing; read from the
                environment when omitted.
        """
        self.aliases: dict[str, Type] = dict(aliases) if aliases is not None else {}
        self.settings = settings if settings is not None else load_settings()
        self._depth = 0

    def new_context(self) -> Context:
        """Create an empty context over this checker's aliases."""
        return Context(self.aliases, max_depth=self.settings.max_depth)

    def type_of(self, term: Term, ctx: Context | None = None) -> Type:
        """Compute the type of ``term``.

        Args:
            term: Term to check
            ctx: Context the term is checked in; a fresh empty one when omitted

        Returns:
            The type of the term, with aliases resolved

        Raises:
            TypeError: The first type error found in the term
        """
        if ctx is None:
            ctx = self.new_context()
        try:
            return self._infer_top(ctx, term)
        except TypeError as e:
            logger.debug("checker.error kind={} span={} message={}", e.kind.value, e.span, e.message)
            raise

    def _infer_top(self, ctx: Context, term: Term) -> Type:
        try:
            return self.infer(ctx, term)
        except RecursionError as e:
            # The interpreter stack ran out before max_depth was reached
            raise RecursionLimitExceeded(self.settings.max_depth, term.span) from e

    def infer(self, ctx: Context, term: Term) -> Type:
        """Synthesize the type of ``term`` in ``ctx``."""
        self._depth += 1
        try:
            if self._depth > self.settings.max_depth:
                raise RecursionLimitExceeded(self.settings.max_depth, term.span)
            ty = self._infer(ctx, term)
        finally:
            self._depth -= 1
        if self.settings.trace:
            logger.debug("checker.rule term={} type={}", type(term).__name__, ty)
        return ty

    def _infer(self, ctx: Context, term: Term) -> Type:
        match term:
            case UnitLit():
                return Unit()

            case BoolLit(_):
                return Bool()

            case NatLit(_):
                return Nat()

            case Var(index):
                ty = ctx.find(index)
                if ty is None:
                    raise UnboundVariable(index, term.span)
                return ty

            case Abs(param_type, body):
                param_type = ctx.resolve(param_type)
                with ctx.bind(param_type):
                    body_type = self.infer(ctx, body)
                # Term binders do not change type indices, so the body type
                # needs no shift on the way out.
                return Arrow(param_type, body_type)

            case App(func, arg):
                func_type = self.infer(ctx, func)
                arg_type = self.infer(ctx, arg)
                match func_type:
                    case Arrow(dom, cod):
                        if dom != arg_type:
                            raise ParameterMismatch(dom, arg_type, arg.span, term.span)
                        return cod
                    case _:
                        raise NotArrow(func_type, term.span)

            case Fix(inner):
                inner_type = self.infer(ctx, inner)
                match inner_type:
                    case Arrow(dom, cod):
                        if dom != cod:
                            raise ParameterMismatch(dom, cod, inner.span, term.span)
                        return dom
                    case _:
                        raise NotArrow(inner_type, term.span)

            case Prim(op):
                return PRIMITIVE_TYPES[op]

            case If(guard, then, otherwise):
                guard_type = self.infer(ctx, guard)
                if guard_type != Bool():
                    raise Guard(guard_type, guard.span if guard.span is not None else term.span)
                then_type = self.infer(ctx, then)
                else_type = self.infer(ctx, otherwise)
                if then_type != else_type:
                    raise IncompatibleArms(then_type, else_type, term.span)
                return then_type

            case Inject(label, payload, variant_type):
                variant_type = ctx.resolve(variant_type)
                match variant_type:
                    case Variant():
                        field_type = variant_type.field(label)
                        if field_type is None:
                            raise NotVariant(variant_type, label, term.span)
                        payload_type = self.infer(ctx, payload)
                        if payload_type != field_type:
                            raise ParameterMismatch(field_type, payload_type, payload.span, term.span)
                        return variant_type
                    case _:
                        raise NotVariant(variant_type, span=term.span)

            case Project(inner, index):
                inner_type = self.infer(ctx, inner)
                match inner_type:
                    case Product(types):
                        if not 0 <= index < len(types):
                            raise InvalidProjection(index, len(types), term.span)
                        return types[index]
                    case _:
                        raise NotProduct(inner_type, term.span)

            case Tuple(terms):
                return Product(tuple(self.infer(ctx, t) for t in terms))

            case Let(bound, body):
                # Monomorphic: the bound type is not generalized
                bound_type = self.infer(ctx, bound)
                with ctx.bind(bound_type):
                    return self.infer(ctx, body)

            case TyAbs(body):
                with ctx.type_scope():
                    body_type = self.infer(ctx, body)
                return Universal(body_type)

            case TyApp(inner, type_arg):
                type_arg = ctx.resolve(type_arg)
                inner_type = self.infer(ctx, inner)
                match inner_type:
                    case Universal(body):
                        return self._instantiate(ctx, type_arg, body)
                    case _:
                        raise NotUniversal(inner_type, term.span)

            case Fold(rec_type, inner):
                rec_type = ctx.resolve(rec_type)
                match rec_type:
                    case Recursive(body):
                        unrolled = self._instantiate(ctx, rec_type, body)
                        inner_type = self.infer(ctx, inner)
                        if inner_type != unrolled:
                            raise ParameterMismatch(unrolled, inner_type, inner.span, term.span)
                        return rec_type
                    case _:
                        raise NotRec(rec_type, term.span)

            case Unfold(rec_type, inner):
                rec_type = ctx.resolve(rec_type)
                match rec_type:
                    case Recursive(body):
                        inner_type = self.infer(ctx, inner)
                        if inner_type != rec_type:
                            raise ParameterMismatch(rec_type, inner_type, inner.span, term.span)
                        return self._instantiate(ctx, rec_type, body)
                    case _:
                        raise NotRec(rec_type, term.span)

            case Pack(witness, inner, existential_type):
                witness = ctx.resolve(witness)
                existential_type = ctx.resolve(existential_type)
                match existential_type:
                    case Existential(body):
                        expected = self._instantiate(ctx, witness, body)
                        inner_type = self.infer(ctx, inner)
                        if inner_type != expected:
                            raise ParameterMismatch(expected, inner_type, inner.span, term.span)
                        return existential_type
                    case _:
                        raise NotExistential(existential_type, term.span)

            case Unpack(package, body):
                package_type = self.infer(ctx, package)
                match package_type:
                    case Existential(hidden):
                        with ctx.type_scope(), ctx.bind(hidden):
                            body_type = self.infer(ctx, body)
                        if free_in(0, body_type, self.settings.max_depth):
                            raise EscapingTypeVariable(body_type, term.span)
                        return shift(-1, body_type, self.settings.max_depth)
                    case _:
                        raise NotExistential(package_type, term.span)

            case Case(scrutinee, arms):
                return self._infer_case(ctx, term, scrutinee, arms)

            case _:
                raise ValueError(f"Unknown term: {term!r}")

    def _instantiate(self, ctx: Context, replacement: Type, body: Type) -> Type:
        # Substitution can expose new type-operator redexes
        return ctx.resolve(subst_top(replacement, body, self.settings.max_depth))

    def _infer_case(self, ctx: Context, term: Case, scrutinee: Term, arms: Sequence) -> Type:
        scrutinee_type = self.infer(ctx, scrutinee)
        if not isinstance(scrutinee_type, Variant):
            raise NotVariant(scrutinee_type, span=scrutinee.span if scrutinee.span is not None else term.span)

        bindings = PatternChecker(scrutinee_type, term.span).check(arms)

        arm_types = []
        for arm, bound in zip(arms, bindings):
            with ctx.bind(*bound):
                arm_type = self.infer(ctx, arm.body)
            if arm_types and arm_type != arm_types[0]:
                raise IncompatibleArms(arm_types[0], arm_type, arm.span if arm.span is not None else term.span)
            arm_types.append(arm_type)
        # PatternChecker rejects an empty arm list
        return arm_types[0]

    def check_program(self, decls: Sequence[Declaration]) -> dict[str, Type]:
        """Type check a sequence of declarations.

        Aliases become visible to every later declaration. Each term
        declaration is bound in the context for the ones after it, so
        the most recent declaration is index 0.

        Returns mapping from term names to their types.
        """
        ctx = self.new_context()
        result: dict[str, Type] = {}

        with ExitStack() as scopes:
            for decl in decls:
                match decl:
                    case AliasDeclaration(name, ty):
                        ctx.alias(name, ty)
                        self.aliases[name] = ty
                    case TermDeclaration(name, body):
                        ty = self.type_of(body, ctx)
                        logger.debug("checker.declaration name={} type={}", name, ty)
                        result[name] = ty
                        scopes.enter_context(ctx.bind(ty))
        return result
