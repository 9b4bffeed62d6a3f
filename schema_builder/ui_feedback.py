"""
UI feedback utilities for the schema builder.
Provides toast notifications, inline messages and confirmation prompts.
"""

import streamlit as st
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)

TOAST_ICONS = {
    'success': '✅',
    'error': '❌'
}


class Notify:
    """
    Toast notification helper.
    Falls back to an inline message if the toast cannot be shown.

    Usage:
    Notify.success("JSON copied to clipboard!")
    Notify.error("Failed to copy JSON")
    """

    @staticmethod
    def _display_notification(message: str, notification_type: str) -> None:
        """Internal method to display notification based on type."""
        icon = TOAST_ICONS[notification_type]
        full_message = f"{icon} {message}"

        try:
            st.toast(message, icon=icon)
        except Exception as e:
            logger.error(f"Error using st.toast: {e}", exc_info=True)
            if notification_type == 'success':
                st.success(full_message)
            else:
                st.error(full_message)

    @staticmethod
    def success(message: str) -> None:
        """Show success notification."""
        Notify._display_notification(message, 'success')

    @staticmethod
    def error(message: str) -> None:
        """Show error notification."""
        Notify._display_notification(message, 'error')


class UserFeedback:
    """Inline feedback utilities."""

    @staticmethod
    def field_error(message: str) -> None:
        """Show a small inline error under an input."""
        st.caption(f":red[{message}]")

    @staticmethod
    def confirmation_dialog(
        title: str,
        message: str,
        key: str,
        confirm_text: str = "Confirm",
        cancel_text: str = "Cancel"
    ) -> Optional[bool]:
        """
        Show an inline confirmation prompt.

        Returns:
            True if confirmed, False if cancelled, None while waiting
        """
        st.warning(f"**{title}**\n\n{message}")

        col1, col2 = st.columns(2)

        with col1:
            confirmed = st.button(confirm_text, type="primary", key=f"{key}_confirm")

        with col2:
            cancelled = st.button(cancel_text, key=f"{key}_cancel")

        if confirmed:
            return True
        elif cancelled:
            return False
        else:
            return None

    @staticmethod
    def show_validation_results(errors: List[str]) -> None:
        """Show a validation summary."""
        if errors:
            st.error(f"❌ **Validation Errors:** {len(errors)}")
            for error in errors:
                st.caption(f"• {error}")
        else:
            st.success("✅ **Validation Passed:** No issues found")
