"""
Clipboard support for the JSON preview.

The server cannot reach the user's clipboard directly, so the default writer
injects a tiny script into the page that calls the browser clipboard API.
"""

import json
import logging
from typing import Callable, Optional

import streamlit.components.v1 as components

from .exceptions import ExternalCollaboratorFailure

logger = logging.getLogger(__name__)

ClipboardWriter = Callable[[str], None]

_COPY_SCRIPT = """
<script>
const text = {payload};
navigator.clipboard.writeText(text).catch(function (err) {{
  console.error("Clipboard write failed", err);
}});
</script>
"""


def browser_clipboard_writer(text: str) -> None:
    """Write text to the browser clipboard through an embedded script."""
    components.html(_COPY_SCRIPT.format(payload=json.dumps(text)), height=0)


def copy_to_clipboard(text: str, writer: Optional[ClipboardWriter] = None) -> None:
    """
    Copy text to the clipboard.

    Args:
        text: Text to copy
        writer: Callable that performs the copy, defaults to the browser writer

    Raises:
        ExternalCollaboratorFailure: If the writer fails
    """
    writer = writer or browser_clipboard_writer
    try:
        writer(text)
    except Exception as e:
        logger.warning(f"Clipboard write failed: {e}")
        raise ExternalCollaboratorFailure("clipboard", e, message="Failed to copy JSON") from e
    logger.debug(f"Copied {len(text)} character(s) to clipboard")
