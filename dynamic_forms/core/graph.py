from typing import Collection, Dict, List, Optional

from ..types.exceptions import ConflictError, InvariantViolation
from .dependency import Dependency


class DependencyGraph:
    """Child -> dependency and parent -> children indices kept as exact inverses.

    ``insert_edge`` and ``remove_edge`` are the only mutators; both indices
    are updated together so they cannot diverge.
    """

    def __init__(self):
        self._by_child: Dict[str, Dependency] = {}
        self._by_parent: Dict[str, List[str]] = {}

    def insert_edge(self, dependency: Dependency) -> Optional[Dependency]:
        """Register a dependency and return the one it replaced, if any.

        A child can only have one parent. Re-binding a child to the same
        parent replaces the old trigger value, binding it to a different
        parent raises ConflictError.
        """
        existing = self._by_child.get(dependency.child_id)
        if existing is not None and existing.parent_id != dependency.parent_id:
            raise ConflictError(
                f"Field '{dependency.child_id}' already depends on field '{existing.parent_id}'"
            )

        self._by_child[dependency.child_id] = dependency
        if existing is None:
            self._by_parent.setdefault(dependency.parent_id, []).append(dependency.child_id)
        return existing

    def remove_edge(self, child_id: str) -> Optional[Dependency]:
        """Drop the dependency of ``child_id``; returns it, or None if there was none"""
        dependency = self._by_child.pop(child_id, None)
        if dependency is None:
            return None

        siblings = self._by_parent[dependency.parent_id]
        siblings.remove(child_id)
        if not siblings:
            del self._by_parent[dependency.parent_id]
        return dependency

    def dependency_of(self, child_id: str) -> Optional[Dependency]:
        return self._by_child.get(child_id)

    def children_of(self, parent_id: str) -> List[str]:
        return list(self._by_parent.get(parent_id, []))

    def is_child(self, field_id: str) -> bool:
        return field_id in self._by_child

    def is_parent(self, field_id: str) -> bool:
        return field_id in self._by_parent

    def dependencies(self) -> List[Dependency]:
        return list(self._by_child.values())

    def parents(self) -> Dict[str, List[str]]:
        """Snapshot of the parent -> children index"""
        return {parent: list(children) for parent, children in self._by_parent.items()}

    def check_consistency(self, field_ids: Collection[str]) -> None:
        """Raise InvariantViolation unless both indices agree and only name known fields"""
        for child_id, dependency in self._by_child.items():
            if dependency.child_id != child_id:
                raise InvariantViolation(
                    f"Dependency '{dependency.id}' is indexed under child '{child_id}'"
                )
            if child_id not in self._by_parent.get(dependency.parent_id, []):
                raise InvariantViolation(
                    f"Child '{child_id}' missing from children of parent '{dependency.parent_id}'"
                )
            for endpoint in (child_id, dependency.parent_id):
                if endpoint not in field_ids:
                    raise InvariantViolation(
                        f"Dependency '{dependency.id}' references missing field '{endpoint}'"
                    )

        for parent_id, children in self._by_parent.items():
            if not children:
                raise InvariantViolation(f"Parent '{parent_id}' has an empty child list")
            if len(set(children)) != len(children):
                raise InvariantViolation(f"Parent '{parent_id}' lists a child twice")
            for child_id in children:
                dependency = self._by_child.get(child_id)
                if dependency is None or dependency.parent_id != parent_id:
                    raise InvariantViolation(
                        f"Parent '{parent_id}' lists '{child_id}' which does not depend on it"
                    )

    def __len__(self) -> int:
        return len(self._by_child)
