"""
Live JSON preview generation for the schema builder.

The projection turns a snapshot of the field forest into a JSON value using
fixed placeholder values. It runs on every edit and tolerates incomplete
fields: anything without a name is skipped and anything without a type gets
an empty string.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .exceptions import ProjectionFailure
from .field_model import FieldType, SchemaField

logger = logging.getLogger(__name__)

STRING_PLACEHOLDER = "STRING"
# Emitted as a string, not a number, to match the preview users already rely on
NUMBER_PLACEHOLDER = "number"
UNSET_PLACEHOLDER = ""
DEFAULT_INDENT = 2
PROJECTION_ERROR_TEXT = '{ "error": "Invalid JSON structure" }'


@dataclass
class ProjectionResult:
    """
    Outcome of projecting a forest to JSON text.

    Attributes:
        value: The generated JSON value, None if serialization failed
        text: Serialized JSON, or the error placeholder text
        ok: Whether serialization succeeded
        error: The failure, if any
    """
    value: Optional[Dict[str, Any]]
    text: str
    ok: bool = True
    error: Optional[ProjectionFailure] = None


def generate_json(fields: List[SchemaField],
                  string_placeholder: str = STRING_PLACEHOLDER,
                  number_placeholder: str = NUMBER_PLACEHOLDER) -> Dict[str, Any]:
    """
    Build the JSON value for a list of sibling fields.

    Args:
        fields: Sibling fields in display order
        string_placeholder: Value emitted for string fields
        number_placeholder: Value emitted for number fields

    Returns:
        Dictionary keyed by field name
    """
    result: Dict[str, Any] = {}
    if not fields:
        return result

    for field in fields:
        if not field.name:
            continue

        if field.type == FieldType.NESTED.value:
            if field.nested:
                value: Any = generate_json(field.nested, string_placeholder, number_placeholder)
            else:
                value = {}
        elif field.type == FieldType.STRING.value:
            value = string_placeholder
        elif field.type == FieldType.NUMBER.value:
            value = number_placeholder
        else:
            value = UNSET_PLACEHOLDER

        # later duplicates win and take the later position
        result.pop(field.name, None)
        result[field.name] = value

    return result


def render_projection(fields: List[SchemaField], indent: int = DEFAULT_INDENT,
                      string_placeholder: str = STRING_PLACEHOLDER,
                      number_placeholder: str = NUMBER_PLACEHOLDER) -> ProjectionResult:
    """
    Project the forest and serialize it for the preview panel.

    Never raises: a serialization failure is reported through the result
    and the forest is left untouched.
    """
    try:
        value = generate_json(fields or [], string_placeholder, number_placeholder)
        text = json.dumps(value, indent=indent, ensure_ascii=False)
        return ProjectionResult(value=value, text=text)
    except Exception as e:
        failure = ProjectionFailure(e)
        logger.error(f"Failed to generate JSON preview: {e}", exc_info=True)
        return ProjectionResult(value=None, text=PROJECTION_ERROR_TEXT, ok=False, error=failure)
