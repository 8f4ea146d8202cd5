"""Core language: types, terms, contexts, and the type checker."""

from lambdatype.core.ast import (
    Abs,
    AliasDeclaration,
    App,
    Arm,
    Binder,
    BoolLit,
    Case,
    Constructor,
    Declaration,
    Fix,
    Fold,
    If,
    Inject,
    Let,
    NatLit,
    Pack,
    Pattern,
    Prim,
    Primitive,
    ProductPattern,
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
    Wildcard,
)
from lambdatype.core.checker import TypeChecker
from lambdatype.core.context import Aliaser, Context
from lambdatype.core.errors import (
    ContextUnderflow,
    ErrorKind,
    EscapingTypeVariable,
    Guard,
    IncompatibleArms,
    InvalidPattern,
    InvalidProjection,
    NotArrow,
    NotExhaustive,
    NotExistential,
    NotProduct,
    NotRec,
    NotUniversal,
    NotVariant,
    ParameterMismatch,
    RecursionLimitExceeded,
    TypeError,
    UnboundVariable,
    UnreachablePattern,
)
from lambdatype.core.patterns import PatternChecker
from lambdatype.core.shift import Shift, Subst, free_in, normalize, shift, subst_top
from lambdatype.core.types import (
    Abstraction,
    Alias,
    Application,
    Arrow,
    Bool,
    Existential,
    Field,
    Kind,
    KindArrow,
    Nat,
    Product,
    Recursive,
    Star,
    Type,
    Unit,
    Universal,
    Variable,
    Variant,
    variant,
)
from lambdatype.core.walk import TermWalker, TypeWalker

__all__ = [
    # Terms
    "Term",
    "UnitLit",
    "BoolLit",
    "NatLit",
    "Var",
    "Abs",
    "App",
    "Fix",
    "Prim",
    "Primitive",
    "If",
    "Inject",
    "Project",
    "Tuple",
    "Let",
    "TyAbs",
    "TyApp",
    "Fold",
    "Unfold",
    "Pack",
    "Unpack",
    "Case",
    "Arm",
    "Pattern",
    "Wildcard",
    "Binder",
    "Constructor",
    "ProductPattern",
    "Declaration",
    "AliasDeclaration",
    "TermDeclaration",
    # Types
    "Type",
    "Unit",
    "Nat",
    "Bool",
    "Alias",
    "Variable",
    "Field",
    "Variant",
    "Product",
    "Arrow",
    "Universal",
    "Existential",
    "Abstraction",
    "Application",
    "Recursive",
    "Kind",
    "Star",
    "KindArrow",
    "variant",
    # Traversals
    "TypeWalker",
    "TermWalker",
    "Shift",
    "Subst",
    "shift",
    "subst_top",
    "free_in",
    "normalize",
    # Context
    "Context",
    "Aliaser",
    # Errors
    "ErrorKind",
    "TypeError",
    "UnboundVariable",
    "NotArrow",
    "NotUniversal",
    "NotVariant",
    "NotProduct",
    "NotRec",
    "NotExistential",
    "ParameterMismatch",
    "InvalidProjection",
    "IncompatibleArms",
    "InvalidPattern",
    "NotExhaustive",
    "UnreachablePattern",
    "Guard",
    "EscapingTypeVariable",
    "RecursionLimitExceeded",
    "ContextUnderflow",
    # Type Checker
    "PatternChecker",
    "TypeChecker",
]
