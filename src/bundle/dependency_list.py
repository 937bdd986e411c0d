"""Ordered, duplicate-free collection of dependencies on one target bundle."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .dependency import Dependency


class DependencyList:
    """Immutable list of :class:`Dependency` keeping first-seen order.

    All empty lists are the shared :attr:`EMPTY` instance when built through
    :meth:`create` or :meth:`filter`.
    """

    __slots__ = ("_dependencies",)

    EMPTY: "DependencyList"

    def __init__(self, dependencies: Tuple[Dependency, ...] = ()):
        self._dependencies = dependencies

    @classmethod
    def create(cls, dependencies: Iterable[Dependency]) -> "DependencyList":
        if dependencies is None:
            raise TypeError("dependencies must not be None")
        unique = tuple(dict.fromkeys(dependencies))
        if not unique:
            return cls.EMPTY
        return cls(unique)

    @property
    def dependencies(self) -> Tuple[Dependency, ...]:
        return self._dependencies

    def is_empty(self) -> bool:
        return not self._dependencies

    def has_optional(self) -> bool:
        return any(dep.is_optional() for dep in self._dependencies)

    def all_present_kinds(self) -> Tuple[str, ...]:
        """Sorted union of the kinds of every dependency."""
        kinds = set()
        for dep in self._dependencies:
            kinds.update(dep.kinds)
        return tuple(sorted(kinds))

    def filter(self, transformation: Callable[[Dependency], Optional[Dependency]]) -> "DependencyList":
        """Apply ``transformation`` to every dependency.

        A ``None`` result drops the dependency. Returns ``self`` when no
        dependency was changed or dropped.
        """
        if self.is_empty():
            return self
        if transformation is None:
            raise TypeError("transformation must not be None")
        result: List[Dependency] = []
        changed = False
        for dep in self._dependencies:
            replacement = transformation(dep)
            if replacement != dep:
                changed = True
            if replacement is not None:
                result.append(replacement)
        if not changed:
            return self
        return DependencyList.create(result)

    def without_optionals(self) -> "DependencyList":
        return self.filter(lambda dep: None if dep.is_optional() else dep)

    def __iter__(self) -> Iterator[Dependency]:
        return iter(self._dependencies)

    def __len__(self) -> int:
        return len(self._dependencies)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, DependencyList):
            return NotImplemented
        return set(self._dependencies) == set(other._dependencies)

    def __hash__(self) -> int:
        return hash(frozenset(self._dependencies))

    def __repr__(self) -> str:
        return f"DependencyList({list(self._dependencies)!r})"


DependencyList.EMPTY = DependencyList()
