"""
Schema Editor View for the JSON Schema Builder.
Provides a visual interface for building a nested field tree with a live
JSON preview next to it.
"""

import streamlit as st
import logging
from typing import List, Optional

from .clipboard import copy_to_clipboard
from .config_loader import get_config_value
from .error_handler import ErrorHandler, ErrorType
from .exceptions import ExternalCollaboratorFailure
from .field_model import FIELD_TYPES, FieldPath, ROOT_PATH, SchemaField, find_path
from .projection import (
    DEFAULT_INDENT,
    NUMBER_PLACEHOLDER,
    STRING_PLACEHOLDER,
    ProjectionResult,
    render_projection,
)
from .session_manager import SessionManager
from .submission_handler import SubmissionHandler
from .ui_feedback import Notify, UserFeedback
from .validation import ValidationReport, can_submit, validate_forest

logger = logging.getLogger(__name__)

TYPE_OPTIONS = [""] + FIELD_TYPES
TYPE_PLACEHOLDER_LABEL = "Field Type"


class SchemaEditor:
    """Main controller class for the Schema Builder page."""

    @staticmethod
    def render() -> None:
        """Main entry point for rendering the Schema Builder."""
        try:
            SessionManager.initialize(get_config_value('ui', 'initial_fields', 1))
            SessionManager.prune_collapsed()

            forest = SessionManager.get_forest()
            projection = SchemaEditor._project(forest)
            SessionManager.set_last_projection(projection)
            report = validate_forest(forest)

            SchemaEditor._render_header()

            left, right = st.columns(2)
            with left:
                SchemaEditor._render_builder_panel(forest, report, projection)
            with right:
                SchemaEditor._render_preview_panel(projection)

        except Exception as e:
            ErrorHandler.handle_error(e, "rendering schema builder", ErrorType.SYSTEM)

    @staticmethod
    def _project(forest: List[SchemaField]) -> ProjectionResult:
        """Run the projection with configured formatting."""
        return render_projection(
            forest,
            indent=get_config_value('projection', 'indent', DEFAULT_INDENT),
            string_placeholder=get_config_value('projection', 'string_placeholder', STRING_PLACEHOLDER),
            number_placeholder=get_config_value('projection', 'number_placeholder', NUMBER_PLACEHOLDER),
        )

    @staticmethod
    def _render_header() -> None:
        st.title(get_config_value('ui', 'page_title', 'JSON Schema Builder'))
        subtitle = get_config_value('ui', 'subtitle', '')
        if subtitle:
            st.caption(subtitle)

    @staticmethod
    def _render_builder_panel(forest: List[SchemaField], report: ValidationReport,
                              projection: ProjectionResult) -> None:
        """Render the field tree, the add/clear controls and the submit button."""
        col1, col2 = st.columns([3, 1])
        with col1:
            st.subheader("🏗️ Schema Builder")
        with col2:
            if forest:
                st.button("🗑️ Clear All", key="clear_all_btn",
                          on_click=SessionManager.set_clear_pending, args=(True,))

        if SessionManager.is_clear_pending():
            SchemaEditor._render_clear_confirmation()

        if not forest:
            st.info("No fields defined yet. Click 'Add Item' to get started.")

        show_remove = len(forest) > 1
        for index, field in enumerate(forest):
            with st.container(border=True):
                SchemaEditor._render_field_row((index,), field, report, show_remove=show_remove)

        st.button("➕ Add Item", key="add_root_field", type="primary",
                  on_click=SchemaEditor._add_field, args=(None,))

        if forest:
            st.divider()
            submit_enabled = can_submit(forest, report, projection)
            if not report.is_valid:
                with st.expander(f"⚠️ {report.error_count} validation issue(s) must be fixed before submitting"):
                    UserFeedback.show_validation_results(report.all_messages())
            if st.button("Submit Schema", key="submit_schema", type="primary",
                         disabled=not submit_enabled):
                SubmissionHandler.handle_streamlit_submission()

    @staticmethod
    def _render_clear_confirmation() -> None:
        confirmed = UserFeedback.confirmation_dialog(
            "Clear All Fields",
            "Are you sure you want to clear all fields?",
            key="clear_all",
        )
        if confirmed is None:
            return

        SessionManager.set_clear_pending(False)
        if confirmed:
            SessionManager.get_editor().clear_all()
            Notify.success("All fields cleared!")
        st.rerun()

    @staticmethod
    def _render_field_row(path: FieldPath, field: SchemaField, report: ValidationReport,
                          show_remove: bool = True) -> None:
        """Render the inputs of one field, then its children if it is nested."""
        field_id = field.id
        collapsed = SessionManager.is_collapsed(field_id)

        toggle_col, name_col, type_col, required_col, remove_col = st.columns([0.5, 4, 2.5, 1.5, 0.6])

        with toggle_col:
            if field.is_nested:
                st.button("▸" if collapsed else "▾", key=f"collapse_{field_id}",
                          help="Expand nested fields" if collapsed else "Collapse nested fields",
                          on_click=SessionManager.toggle_collapsed, args=(field_id,))

        with name_col:
            st.text_input(
                "Field name",
                value=field.name,
                key=f"name_{field_id}",
                placeholder="Field name",
                label_visibility="collapsed",
                on_change=SchemaEditor._on_attribute_change,
                args=(field_id, 'name', f"name_{field_id}"),
            )
            name_error = report.message_for(path, 'name')
            if name_error:
                UserFeedback.field_error(name_error)

        with type_col:
            current_type = field.type if field.type in TYPE_OPTIONS else ""
            st.selectbox(
                "Field type",
                options=TYPE_OPTIONS,
                index=TYPE_OPTIONS.index(current_type),
                key=f"type_{field_id}",
                label_visibility="collapsed",
                format_func=lambda option: option or TYPE_PLACEHOLDER_LABEL,
                on_change=SchemaEditor._on_attribute_change,
                args=(field_id, 'type', f"type_{field_id}"),
            )
            type_error = report.message_for(path, 'type')
            if type_error:
                UserFeedback.field_error(type_error)

        with required_col:
            st.checkbox(
                "Required",
                value=field.required,
                key=f"required_{field_id}",
                on_change=SchemaEditor._on_attribute_change,
                args=(field_id, 'required', f"required_{field_id}"),
            )

        with remove_col:
            if show_remove:
                st.button("✖", key=f"remove_{field_id}", help="Remove this field",
                          on_click=SchemaEditor._remove_field, args=(field_id,))

        if field.is_nested and not collapsed:
            SchemaEditor._render_nested_fields(path, field, report)

    @staticmethod
    def _render_nested_fields(path: FieldPath, field: SchemaField, report: ValidationReport) -> None:
        with st.container(border=True):
            st.button("➕ Add Item", key=f"add_{field.id}",
                      on_click=SchemaEditor._add_field, args=(field.id,))
            for index, child in enumerate(field.nested):
                with st.container(border=True):
                    SchemaEditor._render_field_row(path + (index,), child, report)

    @staticmethod
    def _render_preview_panel(projection: ProjectionResult) -> None:
        """Render the JSON preview and the copy button."""
        col1, col2 = st.columns([3, 1])
        with col1:
            st.subheader("🧾 JSON Preview")
        with col2:
            if st.button("📋 Copy", key="copy_json", disabled=not projection.ok):
                SchemaEditor._copy_projection(projection)

        st.code(projection.text, language="json")

        if not projection.ok:
            st.error("❌ The JSON preview could not be generated. Your fields are unchanged.")

        st.caption("🔄 Updates instantly as you type · 📋 Copy the generated JSON · 🔗 Unlimited nesting")

    @staticmethod
    def _copy_projection(projection: ProjectionResult) -> None:
        try:
            copy_to_clipboard(projection.text)
            Notify.success("JSON copied to clipboard!")
        except ExternalCollaboratorFailure:
            Notify.error("Failed to copy JSON")

    # Widget callbacks. Streamlit may run several of them in one pass, so they
    # carry field ids and look up the current path when they run.

    @staticmethod
    def _add_field(parent_id: Optional[str]) -> None:
        def add():
            editor = SessionManager.get_editor()
            parent_path = find_path(editor.forest, parent_id) if parent_id else ROOT_PATH
            return editor.add_field(parent_path)

        ErrorHandler.with_error_handling(add, "adding field", ErrorType.STRUCTURAL)

    @staticmethod
    def _remove_field(field_id: str) -> None:
        def remove():
            editor = SessionManager.get_editor()
            return editor.remove_field(find_path(editor.forest, field_id))

        ErrorHandler.with_error_handling(remove, "removing field", ErrorType.STRUCTURAL)

    @staticmethod
    def _on_attribute_change(field_id: str, attribute: str, widget_key: str) -> None:
        value = st.session_state.get(widget_key)

        def update():
            editor = SessionManager.get_editor()
            return editor.set_attribute(find_path(editor.forest, field_id), attribute, value)

        ErrorHandler.with_error_handling(update, f"updating field {attribute}", ErrorType.STRUCTURAL)
