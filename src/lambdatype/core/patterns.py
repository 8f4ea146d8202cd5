"""Exhaustiveness and validity checks for case arms over variant types."""

from __future__ import annotations

from collections.abc import Sequence

from lambdatype.core.ast import Arm, Binder, Constructor, Pattern, ProductPattern, Wildcard
from lambdatype.core.errors import InvalidPattern, NotExhaustive, UnreachablePattern
from lambdatype.core.types import Product, Type, Variant
from lambdatype.utils.location import Span


class PatternChecker:
    """Validate the arms of a case expression against a variant type.

    Arms are processed in order. Each arm is checked for an undeclared
    label first, then for reachability; coverage is checked once all arms
    have been seen. A catch-all arm (``Wildcard`` or ``Binder``) covers the
    remaining labels and must come last.
    """

    def __init__(self, variant: Variant, span: Span | None = None):
        self.variant = variant
        self.span = span

    def check(self, arms: Sequence[Arm]) -> list[list[Type]]:
        """Return, for each arm, the types of the variables it binds."""
        if not arms:
            raise NotExhaustive(self.variant.labels, self.span)

        covered: set[str] = set()
        caught_all = False
        bindings: list[list[Type]] = []

        for arm in arms:
            span = arm.span if arm.span is not None else self.span
            match arm.pattern:
                case Constructor(label, payload):
                    field_ty = self.variant.field(label)
                    if field_ty is None:
                        raise InvalidPattern(f"label {label} is not declared in {self.variant}", span)
                    if caught_all or label in covered:
                        raise UnreachablePattern(label, span)
                    covered.add(label)
                    bindings.append(self._bind_payload(payload, field_ty, span))
                case Wildcard() | Binder():
                    if caught_all or len(covered) == len(self.variant.fields):
                        raise UnreachablePattern(None, span)
                    caught_all = True
                    bindings.append([self.variant] if isinstance(arm.pattern, Binder) else [])
                case _:
                    raise InvalidPattern(f"{arm.pattern} cannot match a variant", span)

        if not caught_all:
            missing = [label for label in self.variant.labels if label not in covered]
            if missing:
                raise NotExhaustive(missing, self.span)
        return bindings

    def _bind_payload(self, pattern: Pattern, ty: Type, span: Span | None) -> list[Type]:
        match pattern:
            case Wildcard():
                return []
            case Binder():
                return [ty]
            case ProductPattern(patterns):
                match ty:
                    case Product(types) if len(types) == len(patterns):
                        bound: list[Type] = []
                        for sub, sub_ty in zip(patterns, types):
                            bound.extend(self._bind_payload(sub, sub_ty, span))
                        return bound
                    case _:
                        raise InvalidPattern(f"{pattern} does not match payload type {ty}", span)
            case _:
                # Coverage is tracked per label only
                raise InvalidPattern(f"refutable payload pattern {pattern}", span)
