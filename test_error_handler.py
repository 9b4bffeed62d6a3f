"""
Unit tests for error_handler module.
"""

from unittest.mock import patch, MagicMock

import pytest

import schema_builder.error_handler as error_handler
from schema_builder.error_handler import (
    ErrorHandler,
    ErrorType,
)
from schema_builder.exceptions import (
    ExternalCollaboratorFailure,
    ProjectionFailure,
    StructuralAccessError,
    SubmissionRejected,
)
from test_fixtures import mock_st


@pytest.fixture
def st(monkeypatch):
    stub = mock_st()
    monkeypatch.setattr(error_handler, "st", stub)
    return stub


class TestClassify:
    """Test class for error classification."""

    @pytest.mark.parametrize("error, expected", [
        (StructuralAccessError((0, 3), "index out of range"), ErrorType.STRUCTURAL),
        (SubmissionRejected(["No fields defined"]), ErrorType.VALIDATION),
        (ProjectionFailure(TypeError("bad")), ErrorType.PROJECTION),
        (ExternalCollaboratorFailure("clipboard", OSError("denied")), ErrorType.EXTERNAL),
        (ValueError("anything else"), ErrorType.SYSTEM),
    ])
    def test_classify(self, error, expected):
        assert ErrorHandler.classify(error) == expected


class TestUserFriendlyMessages:
    """Test class for user-facing messages."""

    def test_clipboard_failure_message(self):
        error = ExternalCollaboratorFailure("clipboard", OSError("denied"))

        message = ErrorHandler._get_user_friendly_message(error, ErrorType.EXTERNAL)

        assert message == "📋 Failed to copy JSON"

    def test_projection_message_reassures_user(self):
        message = ErrorHandler._get_user_friendly_message(ProjectionFailure(TypeError("x")),
                                                          ErrorType.PROJECTION)

        assert "unchanged" in message

    def test_unknown_type_falls_back_to_system(self):
        message = ErrorHandler._get_user_friendly_message(ValueError("x"), "nonexistent")

        assert "unexpected error" in message.lower()


class TestHandleError:
    """Test class for handle_error."""

    def test_schema_builder_error_logged_with_context(self, st):
        error = StructuralAccessError((1,), "index out of range")

        with patch('schema_builder.error_handler.log_error_with_context') as mock_log:
            ErrorHandler.handle_error(error, "removing field")

        mock_log.assert_called_once_with(error, "removing field")
        st.error.assert_called_once()
        # recovery suggestions are listed under the message
        assert st.caption.call_count == len(error.recovery_suggestions)

    def test_plain_error_logged(self, st):
        with patch.object(error_handler.logger, 'error') as mock_log:
            ErrorHandler.handle_error(KeyError("k"), "rendering")

        mock_log.assert_called_once()
        assert "rendering" in mock_log.call_args[0][0]
        st.error.assert_called_once_with("💻 An unexpected error occurred. Please try again.")

    def test_custom_user_message(self, st):
        ErrorHandler.handle_error(ValueError("x"), "ctx", ErrorType.SYSTEM, user_message="Custom")

        st.error.assert_called_once_with("Custom")

    def test_show_details(self, st):
        ErrorHandler.handle_error(ValueError("boom"), "ctx", show_details=True)

        st.expander.assert_called_once()
        assert st.write.call_count == 3
        st.code.assert_called_once()

    def test_show_details_includes_context(self, st):
        error = StructuralAccessError((0, 4), "index out of range")

        ErrorHandler.handle_error(error, "ctx", show_details=True)

        details = st.write.call_args_list[-1][0][0]
        assert details.startswith("**Details:**")
        assert "index out of range" in details

    def test_projection_error_message(self, st):
        ErrorHandler.handle_error(ValueError("x"), "ctx", ErrorType.PROJECTION)

        assert "JSON preview" in st.error.call_args[0][0]


class TestWithErrorHandling:
    """Test class for with_error_handling."""

    def test_returns_result(self, st):
        assert ErrorHandler.with_error_handling(lambda: 42, "ctx") == 42
        st.error.assert_not_called()

    def test_returns_default_on_error(self, st):
        def failing():
            raise StructuralAccessError((9,), "index out of range")

        result = ErrorHandler.with_error_handling(failing, "ctx", error_type=ErrorType.STRUCTURAL,
                                                  default_return="fallback")

        assert result == "fallback"
        st.error.assert_called_once()

    def test_base_exceptions_propagate(self, st):
        func = MagicMock(side_effect=KeyboardInterrupt)

        with pytest.raises(KeyboardInterrupt):
            ErrorHandler.with_error_handling(func, "ctx")


class TestExceptions:
    """Test class for the exception hierarchy."""

    def test_structural_error_details(self):
        error = StructuralAccessError((0, 2), "index out of range")

        details = error.get_full_details()

        assert details['error_type'] == "StructuralAccessError"
        assert details['context'] == {'path': [0, 2], 'reason': "index out of range"}
        assert details['recovery_suggestions']
        assert str(error) == "Invalid field path [0, 2]: index out of range"

    def test_submission_rejected_message(self):
        error = SubmissionRejected(["No fields defined", "1 validation error(s)"])

        assert str(error) == "Schema cannot be submitted: No fields defined; 1 validation error(s)"

    def test_external_failure_default_message(self):
        error = ExternalCollaboratorFailure("submission", ConnectionError("offline"))

        assert str(error) == "submission failed: offline"
        assert error.context['original_error_type'] == "ConnectionError"

    def test_log_error_with_context(self, caplog):
        from schema_builder.exceptions import log_error_with_context

        with caplog.at_level("INFO", logger="schema_builder.exceptions"):
            log_error_with_context(ProjectionFailure(TypeError("bad value")), "rendering preview")

        assert "during rendering preview" in caplog.text
        assert "original_error_type: TypeError" in caplog.text
