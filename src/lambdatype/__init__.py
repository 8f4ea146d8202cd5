"""Type checker for typed lambda calculi with de Bruijn indices."""

from lambdatype.core import Context, TypeChecker

__all__ = ["Context", "TypeChecker"]
