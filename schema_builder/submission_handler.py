"""
Submission handler for the schema builder.
Gates submission on validation and hands the schema to a submission target.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from .exceptions import ExternalCollaboratorFailure, SubmissionRejected
from .field_model import SchemaField, forest_to_dict
from .projection import ProjectionResult
from .session_manager import SessionManager
from .ui_feedback import Notify
from .validation import ValidationReport, get_submission_blockers, validate_forest

logger = logging.getLogger(__name__)

SubmissionTarget = Callable[[Dict[str, Any]], None]


def log_submission(payload: Dict[str, Any]) -> None:
    """Default submission target: record the schema in the application log."""
    logger.info(f"Schema Data: {json.dumps(payload['schema'], ensure_ascii=False)}")
    logger.info(f"Generated JSON: {json.dumps(payload['generated'], ensure_ascii=False)}")


class SubmissionHandler:
    """Handles the submission workflow for a finished schema."""

    @staticmethod
    def build_payload(forest: List[SchemaField], projection: ProjectionResult) -> Dict[str, Any]:
        """Build the payload handed to the submission target."""
        return {
            'schema': forest_to_dict(forest),
            'generated': projection.value,
        }

    @staticmethod
    def submit(
        forest: List[SchemaField],
        projection: ProjectionResult,
        report: Optional[ValidationReport] = None,
        target: Optional[SubmissionTarget] = None
    ) -> Dict[str, Any]:
        """
        Validate and submit the schema.

        Args:
            forest: Current top-level fields
            projection: Result of the latest preview run
            report: Validation report, recomputed if omitted
            target: Callable receiving the payload, defaults to log_submission

        Returns:
            The submitted payload

        Raises:
            SubmissionRejected: If the schema cannot be submitted
            ExternalCollaboratorFailure: If the submission target fails
        """
        if report is None:
            report = validate_forest(forest)

        blockers = get_submission_blockers(forest, report, projection)
        if blockers:
            logger.info(f"Submission rejected: {blockers}")
            raise SubmissionRejected(blockers)

        payload = SubmissionHandler.build_payload(forest, projection)
        target = target or log_submission

        try:
            target(payload)
        except Exception as e:
            logger.error(f"Submission target failed: {e}", exc_info=True)
            raise ExternalCollaboratorFailure("submission", e) from e

        logger.info(f"Schema submitted with {report.field_count} field(s)")
        return payload

    @staticmethod
    def handle_streamlit_submission(target: Optional[SubmissionTarget] = None) -> bool:
        """
        Submit the schema held in session state and notify the user.

        Returns:
            True if the schema was submitted
        """
        forest = SessionManager.get_forest()
        projection = SessionManager.get_last_projection()
        if projection is None:
            Notify.error("Failed to submit schema")
            logger.error("Submission attempted before any preview was generated")
            return False

        try:
            SubmissionHandler.submit(forest, projection, target=target)
        except SubmissionRejected:
            Notify.error("Please fix validation errors before submitting")
            return False
        except ExternalCollaboratorFailure:
            Notify.error("Failed to submit schema")
            return False

        Notify.success("Schema submitted successfully!")
        return True
