"""
Flow compilation service.

Runs structure validation, then the screen rewriter, and wraps the result in
the document the hosting platform's "update flow JSON" operation expects.
Persistence and the platform client stay with the caller.
"""
from typing import Any, List, Optional, Tuple

from flow_compiler.config import settings
from flow_compiler.models.schemas.flow import FlowJSON, FlowRecord, FlowStructureError
from flow_compiler.services.compiler.screen_rewriter import ScreenRewriter, screen_rewriter
from flow_compiler.services.compiler.structure_validator import (
    FlowStructureValidator,
    flow_structure_validator,
)
from flow_compiler.utils.logging import get_logger, log_context

logger = get_logger(__name__)


class FlowCompilationError(Exception):
    """Base exception for flow compilation errors"""
    pass


class FlowValidationError(FlowCompilationError):
    """Raised when a flow fails structure validation"""

    def __init__(self, errors: List[FlowStructureError]):
        self.errors = list(errors)
        super().__init__("; ".join(error.message for error in self.errors))

    def to_dict(self) -> dict:
        return {
            "error": "invalid_flow_structure",
            "message": str(self),
            "errors": [error.to_dict() for error in self.errors]
        }


class FlowService:
    """
    Validate-then-compile facade.

    Compilation is all-or-nothing: a flow that fails validation is never
    rewritten, and rewriting a valid flow cannot fail.
    """

    def __init__(
        self,
        validator: Optional[FlowStructureValidator] = None,
        rewriter: Optional[ScreenRewriter] = None,
    ):
        self.validator = validator or flow_structure_validator
        self.rewriter = rewriter or screen_rewriter

    def validate(self, screens: List[Any]) -> Tuple[bool, List[FlowStructureError]]:
        return self.validator.validate(screens)

    def compile_flow(self, screens: List[Any], version: Optional[str] = None) -> FlowJSON:
        """
        Validate and compile a flow.

        Args:
            screens: Authored screens, in flow order
            version: Flow JSON schema version; defaults to the configured one

        Returns:
            FlowJSON ready to submit

        Raises:
            FlowValidationError: The flow is structurally invalid
        """
        is_valid, errors = self.validator.validate(screens)
        if not is_valid:
            raise FlowValidationError(errors)

        compiled = self.rewriter.compile(screens)

        flow_json = FlowJSON(
            version=version or settings.default_json_version,
            screens=compiled
        )

        logger.info(
            "flow.compile.completed",
            extra={
                "screens": len(compiled),
                "version": flow_json.version
            }
        )

        return flow_json

    def prepare_flow_submission(self, record: FlowRecord) -> FlowJSON:
        """
        Build the "update flow JSON" body for a stored flow.

        The caller submits it and clears ``has_local_changes`` on success.
        """
        with log_context(flow_id=record.meta_flow_id or record.name):
            logger.info(
                "flow.submission.preparing",
                extra={
                    "flow_name": record.name,
                    "screens": len(record.screens),
                    "has_local_changes": record.has_local_changes
                }
            )
            return self.compile_flow(record.screens, version=record.json_version or None)


# Global service instance
flow_service = FlowService()
