"""
Field tree model for the schema builder.

A schema is an ordered forest of SchemaField nodes. Nodes are addressed by a
FieldPath: a tuple of indices descending from the root list through each
field's ``nested`` list. The empty path ``()`` addresses the root list itself.
"""

import random
import string
import logging
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import StructuralAccessError

logger = logging.getLogger(__name__)

FieldPath = Tuple[int, ...]

ROOT_PATH: FieldPath = ()
ID_LENGTH = 9
_ID_ALPHABET = string.ascii_lowercase + string.digits


class FieldType(str, Enum):
    """Types a schema field can take."""
    STRING = "string"
    NUMBER = "number"
    NESTED = "nested"


FIELD_TYPES = [t.value for t in FieldType]


class SchemaField(BaseModel):
    """One field of the schema, optionally owning child fields."""

    model_config = ConfigDict(extra='ignore')

    id: str
    name: str = ""
    # None means the user has not picked a type yet
    type: Optional[str] = FieldType.STRING.value
    required: bool = False
    nested: List["SchemaField"] = Field(default_factory=list)

    @property
    def is_nested(self) -> bool:
        return self.type == FieldType.NESTED.value


SchemaField.model_rebuild()


def generate_field_id() -> str:
    """Generate a short random base-36 identifier for a new field."""
    return ''.join(random.choices(_ID_ALPHABET, k=ID_LENGTH))


def new_field(field_id: Optional[str] = None) -> SchemaField:
    """Create a field with default values."""
    return SchemaField(id=field_id or generate_field_id())


def path_to_key(path: FieldPath) -> str:
    """
    Render a path as a dotted key, e.g. ``(0, 2)`` -> ``"fields.0.nested.2"``.

    Used in log messages.
    """
    if not path:
        return "fields"
    parts = [f"fields.{path[0]}"]
    parts.extend(f"nested.{index}" for index in path[1:])
    return ".".join(parts)


def find_path(forest: List[SchemaField], field_id: str) -> FieldPath:
    """
    Return the current path of the field with the given id.

    Raises:
        StructuralAccessError: If no field in the forest has that id
    """
    for path, field in iter_fields(forest):
        if field.id == field_id:
            return path
    raise StructuralAccessError(ROOT_PATH, f"no field with id '{field_id}'")


def _check_index(children: List[SchemaField], index: Any, path: FieldPath) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise StructuralAccessError(path, f"index {index!r} is not an integer")
    if index < 0 or index >= len(children):
        raise StructuralAccessError(
            path, f"index {index} out of range for {len(children)} field(s)"
        )


def get_field(forest: List[SchemaField], path: FieldPath) -> SchemaField:
    """
    Return the field addressed by path.

    Raises:
        StructuralAccessError: If the path is empty or any index is out of range
    """
    if not path:
        raise StructuralAccessError(path, "the root path does not address a field")

    children = forest
    current: Optional[SchemaField] = None
    for depth, index in enumerate(path):
        _check_index(children, index, tuple(path[:depth + 1]))
        current = children[index]
        children = current.nested
    return current


def get_children(forest: List[SchemaField], path: FieldPath) -> List[SchemaField]:
    """Return the list of fields under path (the root list for ``()``)."""
    if not path:
        return forest
    return get_field(forest, path).nested


def iter_fields(forest: List[SchemaField],
                parent: FieldPath = ROOT_PATH) -> Iterator[Tuple[FieldPath, SchemaField]]:
    """
    Walk the forest depth-first, yielding ``(path, field)`` pairs.

    Children of fields whose type is no longer ``nested`` are still visited.
    """
    for index, field in enumerate(forest):
        path = parent + (index,)
        yield path, field
        if field.nested:
            yield from iter_fields(field.nested, path)


def forest_to_dict(forest: List[SchemaField]) -> Dict[str, Any]:
    """Plain-data snapshot of the forest."""
    return {'fields': [field.model_dump() for field in forest]}


def forest_from_dict(data: Dict[str, Any]) -> List[SchemaField]:
    """Build a forest from plain data as produced by forest_to_dict."""
    return [SchemaField.model_validate(item) for item in data.get('fields', [])]
