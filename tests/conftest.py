"""Test configuration and shared fixtures."""

import pytest

from lambdatype.config import CheckerSettings
from lambdatype.core.checker import TypeChecker
from lambdatype.core.types import Nat, Product, Recursive, Unit, Variable, variant


@pytest.fixture
def settings() -> CheckerSettings:
    """Settings independent of the environment."""
    return CheckerSettings(max_depth=150, trace=False)


@pytest.fixture
def checker(settings: CheckerSettings) -> TypeChecker:
    return TypeChecker(settings=settings)


@pytest.fixture
def nat_list() -> Recursive:
    """rec <nil: Unit | cons: (Nat, TyVar(0))>"""
    return Recursive(variant(nil=Unit(), cons=Product((Nat(), Variable(0)))))
