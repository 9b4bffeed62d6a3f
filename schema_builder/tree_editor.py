"""
Path-addressed editing operations for the schema field tree.
"""

import logging
from typing import Any, Iterable, List, Optional, Set

from .exceptions import StructuralAccessError
from .field_model import (
    FieldPath,
    FieldType,
    ROOT_PATH,
    SchemaField,
    generate_field_id,
    get_children,
    get_field,
    iter_fields,
    new_field,
    path_to_key,
)

logger = logging.getLogger(__name__)

EDITABLE_ATTRIBUTES = ('name', 'type', 'required')
MAX_ID_ATTEMPTS = 100


class TreeEditor:
    """
    Insert, remove and update fields at any depth of a schema forest.

    The forest list is owned by the caller (normally Streamlit session state)
    and is mutated in place. Every successful mutation bumps ``version``.
    """

    def __init__(self, forest: Optional[List[SchemaField]] = None, version: int = 0,
                 issued_ids: Optional[Iterable[str]] = None):
        self.forest: List[SchemaField] = forest if forest is not None else []
        self.version = version
        self._issued_ids: Set[str] = set(issued_ids or [])
        self._issued_ids.update(field.id for _, field in iter_fields(self.forest))

    @property
    def is_empty(self) -> bool:
        """True when the schema has no top-level fields."""
        return not self.forest

    @property
    def issued_ids(self) -> Set[str]:
        return set(self._issued_ids)

    def field_count(self) -> int:
        """Number of fields at every depth, dormant children included."""
        return sum(1 for _ in iter_fields(self.forest))

    def _allocate_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            field_id = generate_field_id()
            if field_id not in self._issued_ids:
                self._issued_ids.add(field_id)
                return field_id
        raise RuntimeError(f"Could not allocate a unique field id after {MAX_ID_ATTEMPTS} attempts")

    def _bump(self) -> None:
        self.version += 1

    def add_field(self, parent_path: FieldPath = ROOT_PATH) -> FieldPath:
        """
        Append a default field under parent_path (or at the root).

        Args:
            parent_path: Path of the owning field, ``()`` for the root list

        Returns:
            Path of the newly created field

        Raises:
            StructuralAccessError: If parent_path does not exist
        """
        parent_path = tuple(parent_path)
        if parent_path:
            parent = get_field(self.forest, parent_path)
            if parent.nested is None:
                parent.nested = []
            siblings = parent.nested
        else:
            siblings = self.forest

        field = new_field(self._allocate_id())
        siblings.append(field)
        self._bump()

        path = parent_path + (len(siblings) - 1,)
        logger.debug(f"Added field {field.id} at {path_to_key(path)} (version {self.version})")
        return path

    def remove_field(self, path: FieldPath) -> SchemaField:
        """
        Remove the field at path together with its whole subtree.

        Returns:
            The removed field

        Raises:
            StructuralAccessError: If path is the root or does not exist
        """
        path = tuple(path)
        if not path:
            raise StructuralAccessError(path, "the root list cannot be removed")

        # resolve first so a bad path leaves the forest untouched
        get_field(self.forest, path)
        siblings = get_children(self.forest, path[:-1])
        removed = siblings.pop(path[-1])
        self._bump()

        logger.debug(f"Removed field {removed.id} at {path_to_key(path)} (version {self.version})")
        if self.is_empty:
            logger.info("Schema has no fields left")
        return removed

    def set_attribute(self, path: FieldPath, attribute: str, value: Any) -> bool:
        """
        Update name, type or required on the field at path.

        Changing the type away from ``nested`` keeps existing children; they
        are simply not projected until the type is switched back.

        Returns:
            True if the stored value changed

        Raises:
            StructuralAccessError: If path does not exist or attribute is not editable
        """
        path = tuple(path)
        if attribute not in EDITABLE_ATTRIBUTES:
            raise StructuralAccessError(path, f"attribute '{attribute}' is not editable")

        field = get_field(self.forest, path)

        if attribute == 'name':
            new_value = "" if value is None else str(value)
        elif attribute == 'required':
            new_value = bool(value)
        else:
            if isinstance(value, FieldType):
                value = value.value
            new_value = value or None

        if attribute == 'type' and new_value == FieldType.NESTED.value and field.nested is None:
            field.nested = []

        if getattr(field, attribute) == new_value:
            return False

        setattr(field, attribute, new_value)
        self._bump()
        logger.debug(f"Set {attribute}={new_value!r} on {path_to_key(path)} (version {self.version})")
        return True

    def clear_all(self) -> int:
        """
        Remove every field.

        Returns:
            Number of top-level fields removed
        """
        removed = len(self.forest)
        self.forest.clear()
        self._bump()
        logger.info(f"Cleared {removed} top-level field(s)")
        return removed
