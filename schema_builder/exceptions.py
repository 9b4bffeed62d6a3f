"""
Custom exception classes for the schema builder.

This module provides specialized exception classes for the failures the
editor can run into, carrying context and recovery suggestions so the
error handler can present them consistently.
"""

import logging
from typing import Optional, Dict, Any, List, Sequence

logger = logging.getLogger(__name__)


class SchemaBuilderError(Exception):
    """
    Base exception for schema builder errors.

    Attributes:
        message: Error message
        context: Additional context information
        recovery_suggestions: List of suggested recovery actions
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 recovery_suggestions: Optional[List[str]] = None):
        self.message = message
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def get_full_details(self) -> Dict[str, Any]:
        """Get complete error details including context and suggestions."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'context': self.context,
            'recovery_suggestions': self.recovery_suggestions
        }


class StructuralAccessError(SchemaBuilderError):
    """
    Exception raised when a path addresses a node that does not exist.

    This is an integration error between the view and the tree editor,
    never a user-recoverable condition.
    """

    def __init__(self, path: Sequence[Any], reason: str):
        self.path = tuple(path)
        self.reason = reason

        message = f"Invalid field path {list(self.path)}: {reason}"
        context = {
            'path': list(self.path),
            'reason': reason
        }
        recovery_suggestions = [
            "Refresh the page to rebuild the editor from the current schema",
            "Report this issue if it keeps happening"
        ]

        super().__init__(message, context, recovery_suggestions)


class ProjectionFailure(SchemaBuilderError):
    """
    Exception raised when the JSON preview could not be serialized.

    The schema itself is left untouched.
    """

    def __init__(self, original_error: Exception):
        self.original_error = original_error

        message = f"Invalid JSON structure: {original_error}"
        context = {
            'original_error_type': type(original_error).__name__,
            'original_error_message': str(original_error)
        }
        recovery_suggestions = [
            "Edit or remove the field that was changed last",
            "Your schema fields are unchanged and can still be edited"
        ]

        super().__init__(message, context, recovery_suggestions)


class ExternalCollaboratorFailure(SchemaBuilderError):
    """
    Exception raised when an outside service (clipboard, submission target)
    reports a failure. The schema is never affected.
    """

    def __init__(self, collaborator: str, original_error: Exception,
                 message: Optional[str] = None):
        self.collaborator = collaborator
        self.original_error = original_error

        if message is None:
            message = f"{collaborator} failed: {original_error}"

        context = {
            'collaborator': collaborator,
            'original_error_type': type(original_error).__name__,
            'original_error_message': str(original_error)
        }
        recovery_suggestions = [
            "Try the action again",
            "Check browser permissions if copying to the clipboard"
        ]

        super().__init__(message, context, recovery_suggestions)


class SubmissionRejected(SchemaBuilderError):
    """
    Exception raised when a submission is attempted while the schema
    cannot be submitted.
    """

    def __init__(self, reasons: List[str]):
        self.reasons = list(reasons)

        message = "Schema cannot be submitted: " + "; ".join(self.reasons)
        context = {'reasons': self.reasons}
        recovery_suggestions = [
            "Fill in every field name",
            "Select a type for every field",
            "Add at least one field"
        ]

        super().__init__(message, context, recovery_suggestions)


def log_error_with_context(error: SchemaBuilderError, operation: str) -> None:
    """
    Log error with full context information.

    Args:
        error: SchemaBuilderError instance
        operation: Description of the operation that failed
    """
    logger.error(f"Schema builder error during {operation}")
    logger.error(f"Error type: {type(error).__name__}")
    logger.error(f"Error message: {error.message}")

    if error.context:
        logger.error("Error context:")
        for key, value in error.context.items():
            logger.error(f"  {key}: {value}")

    if error.recovery_suggestions:
        logger.info("Recovery suggestions:")
        for i, suggestion in enumerate(error.recovery_suggestions, 1):
            logger.info(f"  {i}. {suggestion}")
