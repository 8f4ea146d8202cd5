"""Type representations for the typed lambda calculi.

Type variables are De Bruijn indices: ``Variable(0)`` refers to the nearest
enclosing type binder (``Universal``, ``Existential``, ``Abstraction`` or
``Recursive``). Equality is structural, so two quantified types are equal
exactly when their bodies use the same bound-variable numbering.
"""

from __future__ import annotations

from dataclasses import dataclass


class Kind:
    """Base class for kinds."""


@dataclass(frozen=True)
class Star(Kind):
    """Kind of proper types: *."""

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class KindArrow(Kind):
    """Kind of type operators: κ₁ ⇒ κ₂."""

    arg: Kind
    ret: Kind

    def __str__(self) -> str:
        match self.arg:
            case KindArrow():
                return f"({self.arg}) => {self.ret}"
            case _:
                return f"{self.arg} => {self.ret}"


class Type:
    """Base class for types."""


@dataclass(frozen=True)
class Unit(Type):
    def __str__(self) -> str:
        return "Unit"


@dataclass(frozen=True)
class Nat(Type):
    def __str__(self) -> str:
        return "Nat"


@dataclass(frozen=True)
class Bool(Type):
    def __str__(self) -> str:
        return "Bool"


@dataclass(frozen=True)
class Alias(Type):
    """Named reference into the alias table.

    Aliases are transparent: the checker resolves them before any
    comparison, so ``Alias`` nodes only survive when the name is unknown.
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Variable(Type):
    """Type variable by de Bruijn index."""

    index: int

    def __str__(self) -> str:
        return f"TyVar({self.index})"


@dataclass(frozen=True)
class Field:
    """One labelled alternative of a variant type."""

    label: str
    ty: Type

    def __str__(self) -> str:
        return f"{self.label}: {self.ty}"


@dataclass(frozen=True)
class Variant(Type):
    """Sum type: <l₁: τ₁ | ... | lₙ: τₙ>.

    Labels are unique; field order is the declaration order.
    """

    fields: tuple[Field, ...]

    def __post_init__(self) -> None:
        # Accept any iterable of fields but store a tuple
        object.__setattr__(self, "fields", tuple(self.fields))
        seen: set[str] = set()
        for f in self.fields:
            if f.label in seen:
                raise ValueError(f"Duplicate variant label: {f.label}")
            seen.add(f.label)

    @property
    def labels(self) -> list[str]:
        return [f.label for f in self.fields]

    def field(self, label: str) -> Type | None:
        """Payload type declared for ``label``, or None if undeclared."""
        for f in self.fields:
            if f.label == label:
                return f.ty
        return None

    def __str__(self) -> str:
        return "<" + " | ".join(str(f) for f in self.fields) + ">"


@dataclass(frozen=True)
class Product(Type):
    """Tuple type: (τ₁, ..., τₙ)."""

    types: tuple[Type, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", tuple(self.types))

    def __str__(self) -> str:
        return "(" + ", ".join(str(t) for t in self.types) + ")"


@dataclass(frozen=True)
class Arrow(Type):
    """Function type: σ → τ."""

    arg: Type
    ret: Type

    def __str__(self) -> str:
        return f"({self.arg} -> {self.ret})"


@dataclass(frozen=True)
class Universal(Type):
    """Polymorphic type: ∀X.τ, X is index 0 in the body."""

    body: Type

    def __str__(self) -> str:
        return f"forall X.{self.body}"


@dataclass(frozen=True)
class Existential(Type):
    """Abstract package type: ∃X.τ, X is index 0 in the body."""

    body: Type

    def __str__(self) -> str:
        return f"exists X.{self.body}"


@dataclass(frozen=True)
class Abstraction(Type):
    """Type operator: λX::κ.τ."""

    kind: Kind
    body: Type

    def __str__(self) -> str:
        return f"lambda X::{self.kind}.{self.body}"


@dataclass(frozen=True)
class Application(Type):
    """Type operator application: τ₁ τ₂."""

    func: Type
    arg: Type

    def __str__(self) -> str:
        return f"({self.func} {self.arg})"


@dataclass(frozen=True)
class Recursive(Type):
    """Iso-recursive type: μX.τ, X is index 0 in the body."""

    body: Type

    def __str__(self) -> str:
        return f"rec {self.body}"


def variant(**fields: Type) -> Variant:
    """Build a variant type from keyword arguments, in argument order."""
    return Variant(tuple(Field(label, ty) for label, ty in fields.items()))
