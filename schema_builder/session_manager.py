"""
Session state management for the schema builder.
Holds the field tree editor, presentation-only collapse flags and the
outcome of the last preview run across Streamlit reruns.
"""

import streamlit as st
from typing import Dict, Any, List, Optional, Set
from datetime import datetime
import logging

from .field_model import SchemaField, iter_fields
from .projection import ProjectionResult
from .tree_editor import TreeEditor

logger = logging.getLogger(__name__)

EDITOR_KEY = 'schema_editor'
COLLAPSED_KEY = 'collapsed_field_ids'
LAST_PROJECTION_KEY = 'last_projection'
CLEAR_PENDING_KEY = 'clear_all_pending'
DEFAULT_INITIAL_FIELDS = 1


class SessionManager:
    """Manages Streamlit session state for the schema builder."""

    @staticmethod
    def initialize(initial_fields: int = DEFAULT_INITIAL_FIELDS):
        """
        Initialize all session state variables with default values.

        Safe to call on every rerun: existing keys are not overwritten.
        """
        if EDITOR_KEY not in st.session_state:
            if isinstance(initial_fields, bool) or not isinstance(initial_fields, int) or initial_fields < 0:
                logger.warning(f"Invalid initial field count {initial_fields!r}, using {DEFAULT_INITIAL_FIELDS}")
                initial_fields = DEFAULT_INITIAL_FIELDS

            editor = TreeEditor()
            for _ in range(initial_fields):
                editor.add_field()
            st.session_state[EDITOR_KEY] = editor
            logger.info(f"Created schema editor with {len(editor.forest)} initial field(s)")

        defaults = {
            COLLAPSED_KEY: set(),
            LAST_PROJECTION_KEY: None,
            CLEAR_PENDING_KEY: False,
            'last_activity': datetime.now(),
            'session_id': None,
        }

        for key, default_value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = default_value

        if not st.session_state.session_id:
            st.session_state.session_id = f"session_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
            logger.info(f"Session initialized: {st.session_state.session_id}")

    @staticmethod
    def get_editor() -> TreeEditor:
        """Get the tree editor for this session, creating it if needed."""
        if EDITOR_KEY not in st.session_state:
            SessionManager.initialize()
        return st.session_state[EDITOR_KEY]

    @staticmethod
    def get_forest() -> List[SchemaField]:
        """Get the current top-level fields."""
        return SessionManager.get_editor().forest

    @staticmethod
    def get_collapsed_ids() -> Set[str]:
        """Get ids of fields whose nested editor is collapsed."""
        return st.session_state.get(COLLAPSED_KEY, set())

    @staticmethod
    def is_collapsed(field_id: str) -> bool:
        """Check if a field's nested editor is collapsed."""
        return field_id in SessionManager.get_collapsed_ids()

    @staticmethod
    def toggle_collapsed(field_id: str) -> bool:
        """
        Flip the collapse flag of a field.

        Returns:
            The new collapsed state
        """
        collapsed = set(SessionManager.get_collapsed_ids())
        if field_id in collapsed:
            collapsed.discard(field_id)
            is_collapsed = False
        else:
            collapsed.add(field_id)
            is_collapsed = True
        st.session_state[COLLAPSED_KEY] = collapsed
        SessionManager.update_activity()
        return is_collapsed

    @staticmethod
    def prune_collapsed() -> None:
        """Drop collapse flags of fields that no longer exist."""
        live_ids = {field.id for _, field in iter_fields(SessionManager.get_forest())}
        collapsed = SessionManager.get_collapsed_ids()
        stale = collapsed - live_ids
        if stale:
            st.session_state[COLLAPSED_KEY] = collapsed & live_ids
            logger.debug(f"Pruned {len(stale)} collapse flag(s) for removed fields")

    @staticmethod
    def get_last_projection() -> Optional[ProjectionResult]:
        """Get the most recent preview result."""
        return st.session_state.get(LAST_PROJECTION_KEY)

    @staticmethod
    def set_last_projection(result: ProjectionResult):
        """Store the most recent preview result."""
        st.session_state[LAST_PROJECTION_KEY] = result

    @staticmethod
    def is_clear_pending() -> bool:
        """Check if a Clear All confirmation is being shown."""
        return st.session_state.get(CLEAR_PENDING_KEY, False)

    @staticmethod
    def set_clear_pending(pending: bool):
        """Show or hide the Clear All confirmation."""
        st.session_state[CLEAR_PENDING_KEY] = pending

    @staticmethod
    def update_activity():
        """Update last activity timestamp."""
        st.session_state.last_activity = datetime.now()

    @staticmethod
    def get_last_activity() -> datetime:
        """Get last activity timestamp."""
        return st.session_state.get('last_activity', datetime.now())

    @staticmethod
    def get_session_id() -> str:
        """Get the session ID."""
        return st.session_state.get('session_id', 'unknown')

    @staticmethod
    def reset_session(initial_fields: int = DEFAULT_INITIAL_FIELDS):
        """Reset the entire session state."""
        logger.info(f"Resetting session: {SessionManager.get_session_id()}")

        for key in list(st.session_state.keys()):
            del st.session_state[key]

        SessionManager.initialize(initial_fields)

    @staticmethod
    def get_session_info() -> Dict[str, Any]:
        """Get session information for debugging."""
        editor = SessionManager.get_editor()
        last_projection = SessionManager.get_last_projection()
        return {
            'session_id': SessionManager.get_session_id(),
            'version': editor.version,
            'top_level_fields': len(editor.forest),
            'total_fields': editor.field_count(),
            'collapsed_fields': len(SessionManager.get_collapsed_ids()),
            'last_projection_ok': last_projection.ok if last_projection else None,
            'last_activity': SessionManager.get_last_activity().isoformat(),
        }
