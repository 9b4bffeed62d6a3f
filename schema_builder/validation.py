"""
Per-field validation for the schema builder.

Each field is checked on its own (name present, type selected). Violations
are attached to the field's path and only aggregated to decide whether the
schema may be submitted. Validation never blocks the JSON preview.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from .field_model import FieldPath, SchemaField, iter_fields, path_to_key
from .projection import ProjectionResult

logger = logging.getLogger(__name__)

NAME_REQUIRED_MESSAGE = "Field name is required"
TYPE_REQUIRED_MESSAGE = "Type is required"

_MESSAGES = {
    'name': NAME_REQUIRED_MESSAGE,
    'type': TYPE_REQUIRED_MESSAGE,
}


class FieldRules(BaseModel):
    """Rules every field must satisfy before the schema can be submitted."""
    name: str = Field(min_length=1)
    type: Literal['string', 'number', 'nested']


@dataclass
class ValidationViolation:
    """A single rule violation on one field."""
    path: FieldPath
    attribute: str
    message: str

    @property
    def key(self) -> str:
        return path_to_key(self.path)


@dataclass
class ValidationReport:
    """Violations for a whole forest, keyed by field path."""
    violations: Dict[FieldPath, List[ValidationViolation]] = field(default_factory=dict)
    field_count: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def error_count(self) -> int:
        return sum(len(items) for items in self.violations.values())

    def errors_for(self, path: FieldPath) -> List[ValidationViolation]:
        """Violations attached to exactly this path."""
        return self.violations.get(tuple(path), [])

    def message_for(self, path: FieldPath, attribute: str) -> Optional[str]:
        """First message for the given attribute of the field at path."""
        for violation in self.errors_for(path):
            if violation.attribute == attribute:
                return violation.message
        return None

    def all_messages(self) -> List[str]:
        """Readable messages, one per violation, in forest order."""
        return [
            f"{violation.key}: {violation.message}"
            for items in self.violations.values()
            for violation in items
        ]


def validate_field(schema_field: SchemaField, path: FieldPath = ()) -> List[ValidationViolation]:
    """
    Validate a single field, ignoring its children.

    Args:
        schema_field: Field to validate
        path: Path of the field, attached to every violation

    Returns:
        List of violations, empty if the field is valid
    """
    try:
        FieldRules(name=schema_field.name, type=schema_field.type)
        return []
    except ValidationError as e:
        violations = []
        seen = set()
        for error in e.errors():
            loc = error.get('loc', ())
            attribute = str(loc[0]) if loc else 'field'
            if attribute in seen:
                continue
            seen.add(attribute)
            message = _MESSAGES.get(attribute, error.get('msg', 'Invalid value'))
            violations.append(ValidationViolation(tuple(path), attribute, message))
        return violations


def validate_forest(forest: List[SchemaField]) -> ValidationReport:
    """
    Validate every field at every depth.

    Collapsed fields and children of fields that are no longer nested are
    checked too.
    """
    report = ValidationReport()
    for path, schema_field in iter_fields(forest):
        report.field_count += 1
        violations = validate_field(schema_field, path)
        if violations:
            report.violations[path] = violations

    if report.violations:
        logger.debug(f"Validation found {report.error_count} issue(s) across {len(report.violations)} field(s)")
    return report


def can_submit(forest: List[SchemaField], report: ValidationReport,
               projection: ProjectionResult) -> bool:
    """True when there are fields, no violations, and the preview was generated."""
    return bool(forest) and report.is_valid and projection.ok


def get_submission_blockers(forest: List[SchemaField], report: ValidationReport,
                            projection: ProjectionResult) -> List[str]:
    """Reasons why the schema cannot be submitted right now."""
    reasons = []
    if not forest:
        reasons.append("No fields defined")
    if not report.is_valid:
        reasons.append(f"{report.error_count} validation error(s)")
    if not projection.ok:
        reasons.append("JSON preview could not be generated")
    return reasons
