"""Dependency declarations of a bundle: target identifier -> dependency list."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional

from .dependency_list import DependencyList
from .errors import StructuralError
from .identifier import Identifier


class DependencyInformation:
    """Immutable, ordered mapping of target bundles to their dependency lists.

    Targets never carry meta-qualifiers and empty lists are never stored.
    """

    __slots__ = ("_dependencies",)

    EMPTY: "DependencyInformation"

    def __init__(self, dependencies: Optional[Dict[Identifier, DependencyList]] = None):
        self._dependencies: Dict[Identifier, DependencyList] = dependencies or {}

    @classmethod
    def create(cls, dependencies: Mapping[Identifier, DependencyList]) -> "DependencyInformation":
        """Build from a mapping, dropping targets whose list is empty.

        Raises:
            StructuralError: If a target identifier has meta-qualifiers.
        """
        if dependencies is None:
            raise TypeError("dependencies must not be None")
        result: Dict[Identifier, DependencyList] = {}
        for bundle_id, dependency_list in dependencies.items():
            if bundle_id.meta_qualifiers:
                raise StructuralError(
                    f"Dependency bundle identifier cannot have meta qualifiers: {bundle_id}"
                )
            if not dependency_list.is_empty():
                result[bundle_id] = dependency_list
        if not result:
            return cls.EMPTY
        return cls(result)

    @property
    def dependencies(self) -> Mapping[Identifier, DependencyList]:
        return MappingProxyType(self._dependencies)

    def get_dependency_list(self, bundle_id: Optional[Identifier]) -> Optional[DependencyList]:
        if bundle_id is None:
            return None
        return self._dependencies.get(bundle_id)

    def is_empty(self) -> bool:
        return not self._dependencies

    def has_optional(self) -> bool:
        return any(dlist.has_optional() for dlist in self._dependencies.values())

    def filter(
        self,
        transformation: Callable[[Identifier, DependencyList], Optional[DependencyList]],
    ) -> "DependencyInformation":
        """Apply ``transformation`` to every (target, list) entry.

        A ``None`` or empty result drops the entry. Returns ``self`` when no
        entry was changed or dropped.
        """
        if transformation is None:
            raise TypeError("transformation must not be None")
        if self.is_empty():
            return self
        result: Dict[Identifier, DependencyList] = {}
        changed = False
        for bundle_id, dependency_list in self._dependencies.items():
            replacement = transformation(bundle_id, dependency_list)
            if replacement != dependency_list:
                changed = True
            if replacement is not None and not replacement.is_empty():
                result[bundle_id] = replacement
        if not changed:
            return self
        if not result:
            return DependencyInformation.EMPTY
        return DependencyInformation(result)

    def without_optionals(self) -> "DependencyInformation":
        return self.filter(lambda _bundle_id, dlist: dlist.without_optionals())

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._dependencies)

    def __len__(self) -> int:
        return len(self._dependencies)

    def __contains__(self, bundle_id: object) -> bool:
        return bundle_id in self._dependencies

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, DependencyInformation):
            return NotImplemented
        return self._dependencies == other._dependencies

    def __hash__(self) -> int:
        return hash(frozenset(self._dependencies.items()))

    def __repr__(self) -> str:
        return f"DependencyInformation({self._dependencies!r})"


DependencyInformation.EMPTY = DependencyInformation()
