"""Index shifting and capture-avoiding substitution on types.

``subst_top`` is the only way a bound type variable is instantiated. It
runs three steps in a fixed order:

1. shift the replacement up by one, so it is valid under the binder,
2. substitute it for index 0 in the body,
3. shift the result down by one, closing the hole left by the binder.
"""

from __future__ import annotations

from lambdatype.core.types import Abstraction, Application, Type, Variable
from lambdatype.core.walk import DEFAULT_MAX_DEPTH, TypeWalker


class Shift(TypeWalker):
    """Add ``amount`` to every free type variable index."""

    def __init__(self, amount: int, max_depth: int = DEFAULT_MAX_DEPTH):
        super().__init__(max_depth)
        self.amount = amount

    def walk_variable(self, ty: Variable) -> Type:
        if ty.index < self.cutoff or self.amount == 0:
            return ty
        index = ty.index + self.amount
        if index < 0:
            raise ValueError(f"Shifting {ty} by {self.amount} yields a negative index")
        return Variable(index)


class Subst(TypeWalker):
    """Replace the variable bound at the walk's starting point.

    Under ``n`` binders that variable is index ``n``; the replacement is
    shifted by ``n`` at that point so its own free variables keep pointing
    outside the binders it is moved under.
    """

    def __init__(self, replacement: Type, max_depth: int = DEFAULT_MAX_DEPTH):
        super().__init__(max_depth)
        self.replacement = replacement

    def walk_variable(self, ty: Variable) -> Type:
        if ty.index == self.cutoff:
            return shift(self.cutoff, self.replacement, self.max_depth)
        return ty


class _Occurs(TypeWalker):
    def __init__(self, index: int, max_depth: int = DEFAULT_MAX_DEPTH):
        super().__init__(max_depth)
        self.index = index
        self.found = False

    def walk_variable(self, ty: Variable) -> Type:
        if ty.index == self.index + self.cutoff:
            self.found = True
        return ty


class Normalizer(TypeWalker):
    """Reduce applications of type operators.

    ``(λX::κ.τ) σ`` becomes ``τ[X := σ]``; the result is walked again since
    the substitution may expose new redexes.
    """

    def walk_application(self, ty: Application) -> Type:
        func = self.walk(ty.func)
        arg = self.walk(ty.arg)
        match func:
            case Abstraction(_, body):
                return self.walk(subst_top(arg, body, self.max_depth))
        if func is ty.func and arg is ty.arg:
            return ty
        return Application(func, arg)


def shift(amount: int, ty: Type, max_depth: int = DEFAULT_MAX_DEPTH) -> Type:
    """Shift the free type variables of ``ty`` by ``amount``."""
    return Shift(amount, max_depth).walk(ty)


def subst_top(replacement: Type, body: Type, max_depth: int = DEFAULT_MAX_DEPTH) -> Type:
    """Instantiate the binder whose body is ``body`` with ``replacement``."""
    lifted = shift(1, replacement, max_depth)
    substituted = Subst(lifted, max_depth).walk(body)
    return shift(-1, substituted, max_depth)


def free_in(index: int, ty: Type, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """Whether type variable ``index`` occurs free in ``ty``."""
    occurs = _Occurs(index, max_depth)
    occurs.walk(ty)
    return occurs.found


def normalize(ty: Type, max_depth: int = DEFAULT_MAX_DEPTH) -> Type:
    """Beta-reduce every type-operator application in ``ty``."""
    return Normalizer(max_depth).walk(ty)
