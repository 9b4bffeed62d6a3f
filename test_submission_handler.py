"""
Unit tests for submission_handler module.
"""

import logging
from unittest.mock import MagicMock

import pytest

import schema_builder.session_manager as session_manager
import schema_builder.ui_feedback as ui_feedback
from schema_builder.exceptions import ExternalCollaboratorFailure, SubmissionRejected
from schema_builder.field_model import forest_to_dict
from schema_builder.projection import PROJECTION_ERROR_TEXT, ProjectionResult, render_projection
from schema_builder.session_manager import EDITOR_KEY, SessionManager
from schema_builder.submission_handler import (
    SubmissionHandler,
    log_submission,
)
from schema_builder.tree_editor import TreeEditor
from schema_builder.validation import validate_forest
from test_fixtures import make_field, mock_st, sample_forest


class TestSubmit:
    """Test class for SubmissionHandler.submit."""

    def test_submit_valid_schema(self):
        forest = sample_forest()
        projection = render_projection(forest)
        target = MagicMock()

        payload = SubmissionHandler.submit(forest, projection, target=target)

        target.assert_called_once_with(payload)
        assert payload['schema'] == forest_to_dict(forest)
        assert payload['generated'] == {
            "user": {"email": "STRING", "address": {"zip": "number"}},
            "age": "number",
        }

    def test_submit_uses_given_report(self):
        forest = [make_field("a", "", "string")]
        report = validate_forest([make_field("b", "ok", "string")])

        payload = SubmissionHandler.submit(forest, render_projection(forest), report=report,
                                           target=MagicMock())

        assert payload['schema']['fields'][0]['id'] == "a"

    def test_invalid_schema_rejected(self):
        forest = [make_field("a", "", None)]
        target = MagicMock()

        with pytest.raises(SubmissionRejected) as exc_info:
            SubmissionHandler.submit(forest, render_projection(forest), target=target)

        assert exc_info.value.reasons == ["2 validation error(s)"]
        target.assert_not_called()

    def test_empty_schema_rejected(self):
        with pytest.raises(SubmissionRejected) as exc_info:
            SubmissionHandler.submit([], render_projection([]), target=MagicMock())

        assert "No fields defined" in exc_info.value.reasons

    def test_failed_projection_rejected(self):
        forest = sample_forest()
        failed = ProjectionResult(value=None, text=PROJECTION_ERROR_TEXT, ok=False)

        with pytest.raises(SubmissionRejected):
            SubmissionHandler.submit(forest, failed, target=MagicMock())

    def test_target_failure_wrapped(self):
        forest = sample_forest()
        before = forest_to_dict(forest)

        with pytest.raises(ExternalCollaboratorFailure) as exc_info:
            SubmissionHandler.submit(forest, render_projection(forest),
                                     target=MagicMock(side_effect=ConnectionError("offline")))

        assert exc_info.value.collaborator == "submission"
        assert forest_to_dict(forest) == before

    def test_default_target_logs_schema(self, caplog):
        forest = sample_forest()

        with caplog.at_level(logging.INFO, logger="schema_builder.submission_handler"):
            SubmissionHandler.submit(forest, render_projection(forest))

        assert "Schema Data:" in caplog.text
        assert "Generated JSON:" in caplog.text

    def test_log_submission_keeps_unicode(self, caplog):
        with caplog.at_level(logging.INFO, logger="schema_builder.submission_handler"):
            log_submission({'schema': {'fields': []}, 'generated': {"prénom": "STRING"}})

        assert "prénom" in caplog.text


class TestStreamlitSubmission:
    """Test class for the Streamlit submission flow."""

    @pytest.fixture
    def st(self, monkeypatch):
        stub = mock_st()
        monkeypatch.setattr(session_manager, "st", stub)
        monkeypatch.setattr(ui_feedback, "st", stub)
        return stub

    def _prepare(self, st, forest):
        st.session_state[EDITOR_KEY] = TreeEditor(forest)
        SessionManager.initialize()
        SessionManager.set_last_projection(render_projection(forest))

    def test_successful_submission(self, st):
        self._prepare(st, sample_forest())
        target = MagicMock()

        assert SubmissionHandler.handle_streamlit_submission(target) is True

        target.assert_called_once()
        st.toast.assert_called_once_with("Schema submitted successfully!", icon='✅')

    def test_validation_errors_shown(self, st):
        self._prepare(st, [make_field("a", "", "string")])
        target = MagicMock()

        assert SubmissionHandler.handle_streamlit_submission(target) is False

        target.assert_not_called()
        st.toast.assert_called_once_with("Please fix validation errors before submitting", icon='❌')

    def test_target_failure_shown(self, st):
        self._prepare(st, sample_forest())

        assert SubmissionHandler.handle_streamlit_submission(MagicMock(side_effect=RuntimeError("down"))) is False

        st.toast.assert_called_once_with("Failed to submit schema", icon='❌')

    def test_missing_projection(self, st):
        SessionManager.initialize()

        assert SubmissionHandler.handle_streamlit_submission(MagicMock()) is False

        st.toast.assert_called_once_with("Failed to submit schema", icon='❌')
