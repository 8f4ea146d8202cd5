"""Typing contexts.

A :class:`Context` keeps term variables and type variables in separate
de Bruijn spaces. Term binders live on a stack of types; type binders only
bump a depth counter. Each stacked type remembers the type depth it was
pushed at, and :meth:`Context.find` shifts it by the number of type scopes
opened since, so the result is always expressed at the current depth.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType

from loguru import logger

from lambdatype.core.ast import Term
from lambdatype.core.errors import ContextUnderflow
from lambdatype.core.shift import normalize, shift
from lambdatype.core.types import Alias, Type
from lambdatype.core.walk import DEFAULT_MAX_DEPTH, TermWalker, TypeWalker


class Aliaser(TypeWalker):
    """Replace every known ``Alias`` node by its definition.

    The definition is walked in turn, so aliases defined in terms of other
    aliases resolve fully. Unknown names are left in place.
    """

    def __init__(self, aliases: Mapping[str, Type], max_depth: int = DEFAULT_MAX_DEPTH):
        super().__init__(max_depth)
        self.aliases = aliases

    def walk_alias(self, ty: Alias) -> Type:
        aliased = self.aliases.get(ty.name)
        if aliased is None:
            return ty
        return self.walk(aliased)


class _TermAliaser(TermWalker):
    def __init__(self, aliaser: Aliaser, max_depth: int):
        super().__init__(max_depth)
        self.aliaser = aliaser

    def walk_type(self, ty: Type) -> Type:
        return self.aliaser.walk(ty)


class Context:
    """Typing context Γ.

    - term stack: types of open term binders (top = index 0)
    - type depth: number of open type binders
    - aliases: flat alias table, name -> type
    """

    def __init__(
        self,
        aliases: Mapping[str, Type] | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._stack: list[tuple[Type, int]] = []
        self._type_depth = 0
        self._aliases: dict[str, Type] = dict(aliases) if aliases is not None else {}
        self.max_depth = max_depth

    @staticmethod
    def empty() -> "Context":
        """Create an empty context."""
        return Context()

    # -- term variables -----------------------------------------------------

    def push(self, ty: Type) -> None:
        """Bind a new term variable; it becomes index 0.

        The type is stored with aliases expanded.
        """
        self._stack.append((self.resolve(ty), self._type_depth))

    def pop(self) -> None:
        """Unbind the most recent term variable."""
        if not self._stack:
            raise ContextUnderflow("Context.pop() with empty type stack")
        self._stack.pop()

    @contextmanager
    def bind(self, *types: Type) -> Iterator["Context"]:
        """Push ``types`` in order for the duration of a ``with`` block.

        The last type is index 0 inside the block. All of them are popped on
        exit, including when the block raises.
        """
        for ty in types:
            self.push(ty)
        try:
            yield self
        finally:
            for _ in types:
                self.pop()

    def find(self, index: int) -> Type | None:
        """Look up the type of a term variable by de Bruijn index.

        Returns None when ``index`` is not bound.
        """
        if index < 0 or index >= len(self._stack):
            return None
        ty, pushed_at = self._stack[-1 - index]
        opened = self._type_depth - pushed_at
        if opened == 0:
            return ty
        return shift(opened, ty, self.max_depth)

    # -- type variables -----------------------------------------------------

    @property
    def type_depth(self) -> int:
        return self._type_depth

    def open_type_scope(self) -> None:
        self._type_depth += 1

    def close_type_scope(self) -> None:
        if self._type_depth == 0:
            raise ContextUnderflow("Context.close_type_scope() with no open type scope")
        if self._stack and self._stack[-1][1] >= self._type_depth:
            raise ContextUnderflow("Closing a type scope with term binders still open inside it")
        self._type_depth -= 1

    @contextmanager
    def type_scope(self) -> Iterator["Context"]:
        """Open one type-variable scope for the duration of a ``with`` block."""
        self.open_type_scope()
        try:
            yield self
        finally:
            self.close_type_scope()

    # -- aliases ------------------------------------------------------------

    def alias(self, name: str, ty: Type) -> None:
        """Register or replace a type alias."""
        logger.debug("context.alias name={} type={}", name, ty)
        self._aliases[name] = ty

    @property
    def aliases(self) -> Mapping[str, Type]:
        return MappingProxyType(self._aliases)

    def aliaser(self) -> Aliaser:
        return Aliaser(self._aliases, self.max_depth)

    def resolve(self, ty: Type) -> Type:
        """Expand aliases and reduce type-operator applications in ``ty``."""
        return normalize(self.aliaser().walk(ty), self.max_depth)

    def de_alias(self, term: Term) -> Term:
        """Rewrite every type annotation inside ``term`` with aliases expanded."""
        return _TermAliaser(self.aliaser(), self.max_depth).walk(term)

    def __len__(self) -> int:
        """Return the number of term variables in context."""
        return len(self._stack)

    def __str__(self) -> str:
        terms = ", ".join(f"x{i}:{self.find(i)}" for i in range(len(self._stack)))
        return f"Context(terms=[{terms}], type_depth={self._type_depth})"
