"""
Error handling utilities for the schema builder.
Turns failures into log records and user-friendly messages so that no
single edit can crash the page.
"""

import streamlit as st
import logging
import traceback
from typing import Any, Callable, Optional

from .exceptions import (
    ExternalCollaboratorFailure,
    ProjectionFailure,
    SchemaBuilderError,
    StructuralAccessError,
    SubmissionRejected,
    log_error_with_context,
)

logger = logging.getLogger(__name__)


class ErrorType:
    """Error type constants."""
    STRUCTURAL = "structural"
    VALIDATION = "validation"
    PROJECTION = "projection"
    EXTERNAL = "external"
    SYSTEM = "system"


class ErrorHandler:
    """Error handling for the schema builder."""

    @staticmethod
    def classify(error: Exception) -> str:
        """Map an exception to an ErrorType."""
        if isinstance(error, StructuralAccessError):
            return ErrorType.STRUCTURAL
        if isinstance(error, SubmissionRejected):
            return ErrorType.VALIDATION
        if isinstance(error, ProjectionFailure):
            return ErrorType.PROJECTION
        if isinstance(error, ExternalCollaboratorFailure):
            return ErrorType.EXTERNAL
        return ErrorType.SYSTEM

    @staticmethod
    def handle_error(
        error: Exception,
        context: str,
        error_type: Optional[str] = None,
        user_message: Optional[str] = None,
        show_details: bool = False
    ) -> None:
        """
        Handle errors with user-friendly messages.

        Args:
            error: The exception that occurred
            context: Context where the error occurred
            error_type: Type of error (from ErrorType constants), inferred if omitted
            user_message: Custom user-friendly message
            show_details: Whether to show technical details
        """
        if error_type is None:
            error_type = ErrorHandler.classify(error)

        if isinstance(error, SchemaBuilderError):
            log_error_with_context(error, context)
        else:
            logger.error(f"Error in {context}: {str(error)}", exc_info=True)

        if not user_message:
            user_message = ErrorHandler._get_user_friendly_message(error, error_type)

        ErrorHandler._display_error(user_message, error, context, show_details)

    @staticmethod
    def _get_user_friendly_message(error: Exception, error_type: str) -> str:
        """Generate user-friendly error messages based on error type."""
        error_messages = {
            ErrorType.STRUCTURAL: "🧭 The editor lost track of a field. Please refresh the page.",
            ErrorType.VALIDATION: "✅ Please fix validation errors before submitting.",
            ErrorType.PROJECTION: "🔧 The JSON preview could not be generated. Your fields are unchanged.",
            ErrorType.EXTERNAL: "🌐 An outside service did not respond as expected. Please try again.",
            ErrorType.SYSTEM: "💻 An unexpected error occurred. Please try again.",
        }

        if isinstance(error, ExternalCollaboratorFailure) and error.collaborator == "clipboard":
            return "📋 Failed to copy JSON"

        return error_messages.get(error_type, error_messages[ErrorType.SYSTEM])

    @staticmethod
    def _display_error(
        user_message: str,
        error: Exception,
        context: str,
        show_details: bool = False
    ) -> None:
        """Display error message to user with recovery suggestions."""
        st.error(user_message)

        suggestions = getattr(error, 'recovery_suggestions', None)
        if suggestions:
            for suggestion in suggestions:
                st.caption(f"• {suggestion}")

        if show_details:
            with st.expander("🔍 Technical Details"):
                st.write(f"**Error Type:** {type(error).__name__}")
                st.write(f"**Context:** {context}")
                st.write(f"**Error Message:** {str(error)}")
                if isinstance(error, SchemaBuilderError):
                    st.write(f"**Details:** {error.get_full_details()['context']}")
                st.code(traceback.format_exc())

    @staticmethod
    def with_error_handling(
        func: Callable,
        context: str,
        error_type: Optional[str] = None,
        user_message: Optional[str] = None,
        show_details: bool = False,
        default_return: Any = None
    ) -> Any:
        """
        Wrap an operation with error handling.

        Args:
            func: Function to execute
            context: Context description
            error_type: Type of error expected
            user_message: Custom user message
            show_details: Show technical details
            default_return: Value to return on error

        Returns:
            Function result or default_return on error
        """
        try:
            return func()
        except Exception as e:
            ErrorHandler.handle_error(e, context, error_type, user_message, show_details)
            return default_return

