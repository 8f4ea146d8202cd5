"""Error types for the type checker.

Every user-facing failure is a subclass of :class:`TypeError` carrying an
:class:`ErrorKind` and the span of the term that produced it. Checking stops
at the first error.
"""

from enum import Enum

from lambdatype.core.types import Type
from lambdatype.utils.location import Span


class ErrorKind(Enum):
    UNBOUND_VARIABLE = "unbound-variable"
    NOT_ARROW = "not-arrow"
    NOT_UNIVERSAL = "not-universal"
    NOT_VARIANT = "not-variant"
    NOT_PRODUCT = "not-product"
    NOT_REC = "not-rec"
    NOT_EXISTENTIAL = "not-existential"
    PARAMETER_MISMATCH = "parameter-mismatch"
    INVALID_PROJECTION = "invalid-projection"
    INCOMPATIBLE_ARMS = "incompatible-arms"
    INVALID_PATTERN = "invalid-pattern"
    NOT_EXHAUSTIVE = "not-exhaustive"
    UNREACHABLE_PATTERN = "unreachable-pattern"
    GUARD = "guard"
    ESCAPING_TYPE_VARIABLE = "escaping-type-variable"
    RECURSION_LIMIT = "recursion-limit"


class TypeError(Exception):
    """Base class for type errors."""

    kind: ErrorKind
    span: Span | None

    def __init__(self, message: str, span: Span | None = None):
        super().__init__(message)
        self.message = message
        self.span = span

    def __str__(self) -> str:
        if self.span is not None:
            return f"{self.span}: {self.message}"
        return self.message


class UnboundVariable(TypeError):
    """Variable index not bound in the typing context."""

    kind = ErrorKind.UNBOUND_VARIABLE

    def __init__(self, index: int, span: Span | None = None):
        self.index = index
        super().__init__(f"Unbound variable with de Bruijn index {index}", span)


class NotArrow(TypeError):
    kind = ErrorKind.NOT_ARROW

    def __init__(self, actual: Type, span: Span | None = None):
        self.actual = actual
        super().__init__(f"Expected a function type, but got {actual}", span)


class NotUniversal(TypeError):
    kind = ErrorKind.NOT_UNIVERSAL

    def __init__(self, actual: Type, span: Span | None = None):
        self.actual = actual
        super().__init__(f"Expected a universal type, but got {actual}", span)


class NotVariant(TypeError):
    """Type is not a variant, or the variant lacks the requested label."""

    kind = ErrorKind.NOT_VARIANT

    def __init__(self, actual: Type, label: str | None = None, span: Span | None = None):
        self.actual = actual
        self.label = label
        if label is None:
            message = f"Expected a variant type, but got {actual}"
        else:
            message = f"Variant type {actual} has no label {label}"
        super().__init__(message, span)


class NotProduct(TypeError):
    kind = ErrorKind.NOT_PRODUCT

    def __init__(self, actual: Type, span: Span | None = None):
        self.actual = actual
        super().__init__(f"Expected a product type, but got {actual}", span)


class NotRec(TypeError):
    kind = ErrorKind.NOT_REC

    def __init__(self, actual: Type, span: Span | None = None):
        self.actual = actual
        super().__init__(f"Expected a recursive type, but got {actual}", span)


class NotExistential(TypeError):
    kind = ErrorKind.NOT_EXISTENTIAL

    def __init__(self, actual: Type, span: Span | None = None):
        self.actual = actual
        super().__init__(f"Expected an existential type, but got {actual}", span)


class ParameterMismatch(TypeError):
    """Expected type does not match actual type.

    ``argument_span`` points at the subterm whose type was wrong, while
    ``span`` points at the enclosing term.
    """

    kind = ErrorKind.PARAMETER_MISMATCH

    def __init__(
        self,
        expected: Type,
        actual: Type,
        argument_span: Span | None = None,
        span: Span | None = None,
    ):
        self.expected = expected
        self.actual = actual
        self.argument_span = argument_span
        super().__init__(f"Expected type {expected}, but got {actual}", span)


class InvalidProjection(TypeError):
    kind = ErrorKind.INVALID_PROJECTION

    def __init__(self, index: int, arity: int, span: Span | None = None):
        self.index = index
        self.arity = arity
        super().__init__(f"Projection index {index} out of range for product of arity {arity}", span)


class IncompatibleArms(TypeError):
    kind = ErrorKind.INCOMPATIBLE_ARMS

    def __init__(self, first: Type, other: Type, span: Span | None = None):
        self.first = first
        self.other = other
        super().__init__(f"Arms have incompatible types {first} and {other}", span)


class InvalidPattern(TypeError):
    kind = ErrorKind.INVALID_PATTERN

    def __init__(self, reason: str, span: Span | None = None):
        self.reason = reason
        super().__init__(f"Invalid pattern: {reason}", span)


class NotExhaustive(TypeError):
    kind = ErrorKind.NOT_EXHAUSTIVE

    def __init__(self, missing: list[str], span: Span | None = None):
        self.missing = missing
        labels = ", ".join(missing) if missing else "(no arms)"
        super().__init__(f"Non-exhaustive case, missing: {labels}", span)


class UnreachablePattern(TypeError):
    kind = ErrorKind.UNREACHABLE_PATTERN

    def __init__(self, label: str | None = None, span: Span | None = None):
        self.label = label
        what = f"pattern {label}" if label is not None else "catch-all pattern"
        super().__init__(f"Unreachable {what}", span)


class Guard(TypeError):
    """Condition of an if-expression is not Bool."""

    kind = ErrorKind.GUARD

    def __init__(self, actual: Type, span: Span | None = None):
        self.actual = actual
        super().__init__(f"Condition must be Bool, but got {actual}", span)


class EscapingTypeVariable(TypeError):
    """The abstract type of an unpacked existential leaks into the result."""

    kind = ErrorKind.ESCAPING_TYPE_VARIABLE

    def __init__(self, actual: Type, span: Span | None = None):
        self.actual = actual
        super().__init__(f"Abstract type escapes its scope in {actual}", span)


class RecursionLimitExceeded(TypeError):
    """Structural recursion went deeper than the configured bound."""

    kind = ErrorKind.RECURSION_LIMIT

    def __init__(self, limit: int, span: Span | None = None):
        self.limit = limit
        super().__init__(f"Nesting depth exceeds limit of {limit}", span)


class ContextUnderflow(RuntimeError):
    """Unbalanced push/pop on a typing context.

    This is an implementation bug, not a property of the checked program,
    so it is not a :class:`TypeError`.
    """
