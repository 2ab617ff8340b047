import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from ..fields.base import Field
from ..types.config import SectionConfig
from ..types.enums import FieldType
from ..types.exceptions import (
    DuplicateFieldError,
    InvariantViolation,
    NotFoundError,
    TypeMismatchError,
)
from .dependency import Dependency
from .graph import DependencyGraph

logger = logging.getLogger(__name__)


def insert_at(order: List[str], item: str, index: int) -> None:
    """Insert into ``order`` so a negative index counts from the end of the result.

    ``-1`` places the item last, indices past either end are clamped.
    """
    if index < 0:
        index = max(0, len(order) + 1 + index)
    order.insert(index, item)


class Section:
    """An ordered group of fields sharing one visibility dependency graph.

    The section owns the ``visible`` flag of every field it holds. A field
    without a dependency is always visible, a field with one is visible only
    while its parent holds the trigger value. Every operation either
    succeeds with the graph consistent or raises before mutating anything.

    A section is not thread-safe; callers sharing one across threads must
    serialize access to it.
    """

    def __init__(self, id: str, config: Optional[SectionConfig] = None):
        self.id = id
        self.config = config or SectionConfig()
        self._fields: Dict[str, Field] = {}
        self._field_order: List[str] = []
        self._graph = DependencyGraph()

    @property
    def fields(self) -> Mapping[str, Field]:
        return MappingProxyType(self._fields)

    @property
    def field_order(self) -> List[str]:
        return list(self._field_order)

    @property
    def children(self) -> Dict[str, Dependency]:
        """Child field id -> the dependency gating it"""
        return {dep.child_id: dep for dep in self._graph.dependencies()}

    @property
    def parents(self) -> Dict[str, List[str]]:
        """Parent field id -> ids of the fields it gates"""
        return self._graph.parents()

    @property
    def dependencies(self) -> List[Dependency]:
        return self._graph.dependencies()

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._fields

    def has_field(self, field_id: str) -> bool:
        return field_id in self._fields

    def get_field(self, field_id: str) -> Field:
        field = self._fields.get(field_id)
        if field is None:
            raise NotFoundError(f"Field '{field_id}' not found in section '{self.id}'")
        return field

    def get_ordered_fields(self) -> List[Field]:
        """Fields in display order"""
        return [self._fields[field_id] for field_id in self._field_order]

    def visible_fields(self) -> List[Field]:
        return [field for field in self.get_ordered_fields() if field.visible]

    def is_valid(self) -> bool:
        """A section is valid when every field is, hidden fields included"""
        return all(field.is_valid() for field in self._fields.values())

    def validation_errors(self) -> Dict[str, List[str]]:
        """Error messages for each invalid field, in display order"""
        errors = {}
        for field in self.get_ordered_fields():
            field_errors = field.validation_errors()
            if field_errors:
                errors[field.id] = field_errors
        return errors

    # Field operations

    def create_field(self, field: Field) -> None:
        if field.id in self._fields:
            raise DuplicateFieldError(f"Field '{field.id}' already exists in section '{self.id}'")
        if not isinstance(field.field_type, FieldType):
            raise TypeMismatchError(f"Field '{field.id}' has unknown field type {field.field_type!r}")

        self._fields[field.id] = field
        self._field_order.append(field.id)
        field._visible = True
        logger.debug("Created field %s (%s) in section %s", field.id, field.field_type.value, self.id)
        self._after_mutation()

    def update_field(self, field: Field) -> None:
        """Replace a stored field, then re-evaluate everything its value gates.

        The field type can't change; delete and recreate the field instead.
        """
        old_field = self._fields.get(field.id)
        if old_field is None:
            raise NotFoundError(f"Field '{field.id}' not found in section '{self.id}'")
        if old_field.field_type != field.field_type:
            raise TypeMismatchError(
                f"Field '{field.id}' is a {old_field.field_type.value} field and can't become "
                f"{field.field_type.value}. Delete it and create a new field instead."
            )

        self._fields[field.id] = field
        field._visible = old_field.visible

        for child_id in self._graph.children_of(field.id):
            self._refresh_visibility(child_id)
        self._refresh_visibility(field.id)

        logger.debug("Updated field %s in section %s", field.id, self.id)
        self._after_mutation()

    def create_or_update_field(self, field: Field) -> None:
        """Upsert used for PUT-style requests"""
        if field.id in self._fields:
            self.update_field(field)
        else:
            self.create_field(field)

    def delete_field(self, field_id: str) -> None:
        """Remove a field and every dependency it takes part in. Missing ids are ignored."""
        if self._fields.pop(field_id, None) is None:
            return

        self._field_order.remove(field_id)
        removed = self._cascade(field_id)
        logger.debug(
            "Deleted field %s from section %s (%d dependencies removed)",
            field_id, self.id, len(removed),
        )
        self._after_mutation()

    def move_field(self, field_id: str, index: int) -> None:
        """Move a field to ``index`` in display order; ``-1`` moves it to the end"""
        if field_id not in self._fields:
            raise NotFoundError(f"Field '{field_id}' not found in section '{self.id}'")

        self._field_order.remove(field_id)
        insert_at(self._field_order, field_id, index)
        logger.debug("Moved field %s to position %d in section %s", field_id, index, self.id)
        self._after_mutation()

    def duplicate_field(self, field_id: str) -> Field:
        """Copy a field under a fresh id and place it right after the original.

        The copy takes no part in the dependency graph.
        """
        field = self.get_field(field_id)
        new_id = self.config.id_factory()
        if new_id in self._fields:
            raise DuplicateFieldError(f"Field '{new_id}' already exists in section '{self.id}'")

        clone = field.duplicate(new_id)
        self._fields[new_id] = clone
        self._field_order.insert(self._field_order.index(field_id) + 1, new_id)
        logger.debug("Duplicated field %s as %s in section %s", field_id, new_id, self.id)
        self._after_mutation()
        return clone

    # Dependency operations

    def create_dependency(self, dependency: Dependency) -> None:
        """Gate the child's visibility on the parent's value.

        Re-binding a child to the parent it already has replaces the trigger
        value; binding it to a different parent raises ConflictError.
        """
        for field_id in (dependency.child_id, dependency.parent_id):
            if field_id not in self._fields:
                raise NotFoundError(
                    f"Can't create dependency '{dependency.id}': "
                    f"field '{field_id}' not found in section '{self.id}'"
                )

        replaced = self._graph.insert_edge(dependency)
        self._refresh_visibility(dependency.child_id)

        if replaced is not None:
            logger.debug(
                "Replaced dependency %s with %s on field %s",
                replaced.id, dependency.id, dependency.child_id,
            )
        else:
            logger.debug(
                "Created dependency %s: %s depends on %s",
                dependency.id, dependency.child_id, dependency.parent_id,
            )
        self._after_mutation()

    def delete_dependency(self, dependency: Optional[Dependency]) -> None:
        """Remove a dependency and make its child visible again.

        Passing None, or a dependency that is no longer registered, does nothing.
        """
        if dependency is None:
            return

        if self._remove_dependency(dependency):
            self._after_mutation()

    def list_dependencies(self, field_id: str) -> List[Dependency]:
        """Dependencies a field takes part in, as child first, then as parent"""
        result = []
        own = self._graph.dependency_of(field_id)
        if own is not None:
            result.append(own)
        for child_id in self._graph.children_of(field_id):
            dependency = self._graph.dependency_of(child_id)
            if dependency is not None and dependency is not own:
                result.append(dependency)
        return result

    def cascade_delete_dependencies(self, field_id: str) -> List[Dependency]:
        """Delete every dependency ``list_dependencies`` reports and return them.

        This mutates the section; children that lose their gate become visible.
        """
        dependencies = self._cascade(field_id)
        if dependencies:
            self._after_mutation()
        return dependencies

    def _cascade(self, field_id: str) -> List[Dependency]:
        dependencies = self.list_dependencies(field_id)
        for dependency in dependencies:
            self._remove_dependency(dependency)
        return dependencies

    def _remove_dependency(self, dependency: Dependency) -> bool:
        current = self._graph.dependency_of(dependency.child_id)
        if current is None or current.parent_id != dependency.parent_id:
            return False

        self._graph.remove_edge(dependency.child_id)
        child = self._fields.get(dependency.child_id)
        if child is not None:
            self._set_visible(child, True)

        logger.debug(
            "Deleted dependency %s between %s and %s",
            current.id, dependency.child_id, dependency.parent_id,
        )
        return True

    # Consistency

    def check_invariants(self) -> None:
        """Raise InvariantViolation if order, registries or visibility disagree"""
        if len(self._field_order) != len(self._fields) or set(self._field_order) != set(self._fields):
            raise InvariantViolation(
                f"Field order of section '{self.id}' is not a permutation of its fields"
            )

        self._graph.check_consistency(self._fields.keys())

        for field_id, field in self._fields.items():
            if field.visible != self._expected_visibility(field_id):
                raise InvariantViolation(f"Field '{field_id}' has stale visibility")

    def _after_mutation(self) -> None:
        if self.config.check_invariants:
            self.check_invariants()

    def _expected_visibility(self, field_id: str) -> bool:
        dependency = self._graph.dependency_of(field_id)
        if dependency is None:
            return True

        parent = self._fields.get(dependency.parent_id)
        if parent is None:
            raise InvariantViolation(
                f"Field '{field_id}' depends on missing parent '{dependency.parent_id}'"
            )
        return dependency.equals_parent_value(parent.value)

    def _refresh_visibility(self, field_id: str) -> None:
        field = self._fields.get(field_id)
        if field is None:
            raise InvariantViolation(f"Expected field '{field_id}' in section '{self.id}'")
        self._set_visible(field, self._expected_visibility(field_id))

    def _set_visible(self, field: Field, visible: bool) -> None:
        if field.visible != visible:
            logger.debug("Field %s is now %s", field.id, "visible" if visible else "hidden")
        field._visible = visible
