"""
Unit tests for ui_feedback module.
"""

import pytest

import schema_builder.ui_feedback as ui_feedback
from schema_builder.ui_feedback import Notify, UserFeedback
from test_fixtures import mock_st


@pytest.fixture
def st(monkeypatch):
    stub = mock_st()
    monkeypatch.setattr(ui_feedback, "st", stub)
    return stub


class TestNotify:
    """Test class for toast notifications."""

    @pytest.mark.parametrize("method, icon", [
        (Notify.success, '✅'),
        (Notify.error, '❌'),
    ])
    def test_toast_icons(self, st, method, icon):
        method("Hello")

        st.toast.assert_called_once_with("Hello", icon=icon)

    def test_falls_back_when_toast_fails(self, st):
        st.toast.side_effect = RuntimeError("no toast")

        Notify.error("Failed to copy JSON")

        st.error.assert_called_once_with("❌ Failed to copy JSON")

    def test_success_fallback_when_toast_fails(self, st):
        st.toast.side_effect = RuntimeError("no toast")

        Notify.success("All fields cleared!")

        st.success.assert_called_once_with("✅ All fields cleared!")


class TestUserFeedback:
    """Test class for inline feedback."""

    def test_field_error(self, st):
        UserFeedback.field_error("Field name is required")

        st.caption.assert_called_once_with(":red[Field name is required]")

    def test_confirmation_waiting(self, st):
        assert UserFeedback.confirmation_dialog("Clear", "Sure?", key="clear_all") is None
        st.warning.assert_called_once()

    def test_confirmation_confirmed(self, monkeypatch):
        stub = mock_st(clicked=["clear_all_confirm"])
        monkeypatch.setattr(ui_feedback, "st", stub)

        assert UserFeedback.confirmation_dialog("Clear", "Sure?", key="clear_all") is True

    def test_confirmation_cancelled(self, monkeypatch):
        stub = mock_st(clicked=["clear_all_cancel"])
        monkeypatch.setattr(ui_feedback, "st", stub)

        assert UserFeedback.confirmation_dialog("Clear", "Sure?", key="clear_all") is False

    def test_validation_results(self, st):
        UserFeedback.show_validation_results(["fields.0: Field name is required"])

        st.error.assert_called_once()
        st.caption.assert_called_once_with("• fields.0: Field name is required")

    def test_validation_passed(self, st):
        UserFeedback.show_validation_results([])

        st.success.assert_called_once()
