"""
Main Streamlit application for the JSON Schema Builder.
Build a nested field schema and watch its JSON shape update as you type.
"""

import streamlit as st
import logging

from schema_builder.config_loader import get_config_value, load_config


def get_logging_level(level_str):
    """Map string logging level to logging constant."""
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    return level_map.get(str(level_str).upper(), logging.INFO)


# Configure logging dynamically from config
try:
    log_level_str = get_config_value('logging', 'level', 'INFO')
    log_level = get_logging_level(log_level_str)
    logging.basicConfig(level=log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured to level: {log_level_str}")
except Exception as e:
    # Fallback to INFO if config reading fails
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)
    logger.error(f"Failed to configure logging from config: {e}, using INFO level")

# Load configuration early
try:
    config = load_config()
    page_title = get_config_value('ui', 'page_title', 'JSON Schema Builder')
    app_version = get_config_value('app', 'version', 'Unknown')
    logger.info(f"Starting app version: {app_version}")
except Exception as e:
    logger.error(f"Failed to load configuration: {e}")
    page_title = "JSON Schema Builder"


def validate_configuration():
    """Validate configuration and log a summary of the active settings."""
    from schema_builder.config_loader import validate_config, get_config_summary

    config = load_config()
    if not validate_config(config):
        st.warning("⚠️ **Configuration Issues Detected**")
        st.warning("Some configuration settings are invalid, using defaults where necessary.")

    logger.info(f"Configuration summary: {get_config_summary(config)}")
    return config


def render_debug_sidebar():
    """Show session details and a reset button when debug mode is on."""
    from schema_builder.session_manager import SessionManager

    with st.sidebar:
        st.subheader("🐞 Debug")
        st.json(SessionManager.get_session_info())
        if st.button("Reset Session", key="reset_session"):
            SessionManager.reset_session(get_config_value('ui', 'initial_fields', 1))
            st.rerun()


def main():
    """Main application entry point."""
    from schema_builder.error_handler import ErrorHandler, ErrorType
    from schema_builder.schema_editor_view import SchemaEditor

    st.set_page_config(
        page_title=page_title,
        page_icon="🧩",
        layout="wide"
    )

    try:
        config = validate_configuration()
        SchemaEditor.render()
        if config.get('app', {}).get('debug', False):
            render_debug_sidebar()
    except Exception as e:
        ErrorHandler.handle_error(e, "application startup", ErrorType.SYSTEM)


if __name__ == "__main__":
    main()
