"""Core term language.

Terms are immutable and use de Bruijn indices for term variables. Every
node carries an optional source span which is ignored by equality, so two
terms parsed from different places still compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from lambdatype.core.types import Type
from lambdatype.utils.location import Span


class Term:
    """Base class for terms."""

    span: Span | None


def _span_field():
    return field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class UnitLit(Term):
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return "unit"


@dataclass(frozen=True)
class BoolLit(Term):
    value: bool
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class NatLit(Term):
    value: int
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Var(Term):
    """Variable reference using de Bruijn index.

    Index 0 refers to the nearest binder, 1 to the next, etc.
    Example: λx.λy.x  =>  Abs(_, Abs(_, Var(1)))
    """

    index: int
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"#{self.index}"


@dataclass(frozen=True)
class Abs(Term):
    """Lambda abstraction: λ(x:σ).t"""

    param_type: Type
    body: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"λ_:{self.param_type}. {self.body}"


@dataclass(frozen=True)
class App(Term):
    """Function application: f arg."""

    func: Term
    arg: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"({self.func} {self.arg})"


@dataclass(frozen=True)
class Fix(Term):
    """General recursion: fix t, where t : τ → τ."""

    inner: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"fix {self.inner}"


class Primitive(Enum):
    IS_ZERO = "iszero"
    SUCC = "succ"
    PRED = "pred"


@dataclass(frozen=True)
class Prim(Term):
    """Reference to a built-in operator, applied with App."""

    op: Primitive
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return self.op.value


@dataclass(frozen=True)
class If(Term):
    guard: Term
    then: Term
    otherwise: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"if {self.guard} then {self.then} else {self.otherwise}"


@dataclass(frozen=True)
class Inject(Term):
    """Variant injection: <label = payload> as variant_type."""

    label: str
    payload: Term
    variant_type: Type
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"<{self.label} = {self.payload}> as {self.variant_type}"


@dataclass(frozen=True)
class Project(Term):
    """Tuple projection: t.i (zero-based)."""

    term: Term
    index: int
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"{self.term}.{self.index}"


@dataclass(frozen=True)
class Tuple(Term):
    terms: tuple[Term, ...]
    span: Span | None = _span_field()

    def __post_init__(self) -> None:
        object.__setattr__(self, "terms", tuple(self.terms))

    def __str__(self) -> str:
        return "(" + ", ".join(str(t) for t in self.terms) + ")"


@dataclass(frozen=True)
class Let(Term):
    """Let binding: let x = bound in body (x is index 0 in body)."""

    bound: Term
    body: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"let _ = {self.bound} in {self.body}"


@dataclass(frozen=True)
class TyAbs(Term):
    """Type abstraction: ΛX.t"""

    body: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"ΛX. {self.body}"


@dataclass(frozen=True)
class TyApp(Term):
    """Type application: t [τ]."""

    term: Term
    type_arg: Type
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"{self.term} [{self.type_arg}]"


@dataclass(frozen=True)
class Fold(Term):
    """fold [μX.τ] t"""

    rec_type: Type
    term: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"fold [{self.rec_type}] {self.term}"


@dataclass(frozen=True)
class Unfold(Term):
    """unfold [μX.τ] t"""

    rec_type: Type
    term: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"unfold [{self.rec_type}] {self.term}"


@dataclass(frozen=True)
class Pack(Term):
    """Existential introduction: {*witness, term} as existential_type."""

    witness: Type
    term: Term
    existential_type: Type
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"{{*{self.witness}, {self.term}}} as {self.existential_type}"


@dataclass(frozen=True)
class Unpack(Term):
    """Existential elimination: let {X, x} = package in body.

    Inside ``body`` the hidden type is type index 0 and the unpacked value
    is term index 0.
    """

    package: Term
    body: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"let {{X, _}} = {self.package} in {self.body}"


# =============================================================================
# Patterns
# =============================================================================


class Pattern:
    """Base class for case patterns."""


@dataclass(frozen=True)
class Wildcard(Pattern):
    """Matches anything, binds nothing."""

    def __str__(self) -> str:
        return "_"


@dataclass(frozen=True)
class Binder(Pattern):
    """Matches anything, binds the matched value."""

    def __str__(self) -> str:
        return "x"


@dataclass(frozen=True)
class ProductPattern(Pattern):
    """Destructures a tuple payload component-wise."""

    patterns: tuple[Pattern, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "patterns", tuple(self.patterns))

    def __str__(self) -> str:
        return "(" + ", ".join(str(p) for p in self.patterns) + ")"


@dataclass(frozen=True)
class Constructor(Pattern):
    """Matches one variant label, then its payload against ``payload``."""

    label: str
    payload: Pattern = Wildcard()

    def __str__(self) -> str:
        return f"{self.label} {self.payload}"


@dataclass(frozen=True)
class Arm:
    """Case arm: pattern -> body.

    Binders are numbered left to right, so the rightmost binder is index 0
    in ``body``.
    """

    pattern: Pattern
    body: Term
    span: Span | None = _span_field()

    def __str__(self) -> str:
        return f"{self.pattern} => {self.body}"


@dataclass(frozen=True)
class Case(Term):
    """Pattern matching over a variant: case scrutinee of arms."""

    scrutinee: Term
    arms: tuple[Arm, ...]
    span: Span | None = _span_field()

    def __post_init__(self) -> None:
        object.__setattr__(self, "arms", tuple(self.arms))

    def __str__(self) -> str:
        arms_str = " | ".join(str(arm) for arm in self.arms)
        return f"case {self.scrutinee} of {arms_str}"


# =============================================================================
# Declarations
# =============================================================================


@dataclass(frozen=True)
class AliasDeclaration:
    """type Name = τ"""

    name: str
    ty: Type


@dataclass(frozen=True)
class TermDeclaration:
    """name = t"""

    name: str
    body: Term


Declaration = AliasDeclaration | TermDeclaration
