"""
Flow Structure Validator - rejects flows the hosting platform would refuse.

Validates, before any rewriting:
- The flow has at least one screen
- Some screen carries a "complete" action
- Only the last screen carries a "complete" action
- (strict mode) No two identifiers collide after sanitization
"""
from typing import Any, Dict, List, Optional, Tuple

from flow_compiler.config import settings
from flow_compiler.models.schemas.flow import FlowErrorKind, FlowStructureError
from flow_compiler.services.compiler.field_collector import (
    get_children,
    has_complete_action,
    iter_components,
)
from flow_compiler.services.compiler.identifiers import sanitize_id
from flow_compiler.utils.logging import get_logger

logger = get_logger(__name__)


class FlowStructureValidator:
    """
    Structural validation of an authored flow.

    Validation passes:
    1. Empty flow
    2. Terminal action presence
    3. Terminal action placement
    4. Identifier collisions (strict mode only)

    The validator keeps no per-call state; one instance can serve
    concurrent callers.
    """

    def __init__(self, strict_identifiers: Optional[bool] = None):
        if strict_identifiers is None:
            strict_identifiers = settings.strict_identifiers
        self.strict_identifiers = strict_identifiers

    def validate(self, screens: List[Any]) -> Tuple[bool, List[FlowStructureError]]:
        """
        Validate flow structure.

        Args:
            screens: Authored screens, in flow order

        Returns:
            Tuple of (is_valid, errors)
        """
        errors: List[FlowStructureError] = []

        if not screens:
            errors.append(FlowStructureError(
                kind=FlowErrorKind.EMPTY_FLOW,
                message="Flow must have at least one screen",
                suggestion="Add a screen with a Footer that completes the flow"
            ))
        else:
            errors.extend(self._validate_terminal_actions(screens))
            if self.strict_identifiers:
                errors.extend(self._validate_identifiers(screens))

        is_valid = not errors

        if is_valid:
            logger.debug(
                "flow.validation.passed",
                extra={"screens": len(screens)}
            )
        else:
            logger.warning(
                "flow.validation.failed",
                extra={
                    "screens": len(screens),
                    "errors": [error.to_dict() for error in errors]
                }
            )

        return is_valid, errors

    def _validate_terminal_actions(self, screens: List[Any]) -> List[FlowStructureError]:
        """Check presence and placement of "complete" actions"""

        terminal_indexes = [
            index for index, screen in enumerate(screens)
            if has_complete_action(get_children(screen))
        ]

        if not terminal_indexes:
            return [FlowStructureError(
                kind=FlowErrorKind.MISSING_TERMINAL_ACTION,
                message="Flow must have a Footer button with 'Complete Flow' action",
                suggestion=(
                    "Add a Footer component to your last screen and set its "
                    "action to 'Complete Flow'"
                )
            )]

        errors = []
        if len(screens) > 1:
            last_index = len(screens) - 1
            for index in terminal_indexes:
                if index == last_index:
                    continue
                errors.append(FlowStructureError(
                    kind=FlowErrorKind.MISPLACED_TERMINAL_ACTION,
                    screen_index=index,
                    message=(
                        f"'Complete Flow' action should only be on the last screen. "
                        f"Screen {index + 1} has a complete action but it's not the last screen"
                    ),
                    suggestion="Use 'Navigate to Screen' action for intermediate screens"
                ))
        return errors

    def _validate_identifiers(self, screens: List[Any]) -> List[FlowStructureError]:
        """
        Report distinct identifiers that sanitize to the same value.

        Screen ids are checked across the whole flow, field names within
        each screen. Repeating the exact same raw value is not a collision.
        """
        errors: List[FlowStructureError] = []
        seen_screen_ids: Dict[str, str] = {}

        for index, screen in enumerate(screens):
            if not isinstance(screen, dict):
                continue

            screen_id = screen.get("id")
            if isinstance(screen_id, str):
                sanitized = sanitize_id(screen_id)
                previous = seen_screen_ids.setdefault(sanitized, screen_id)
                if previous != screen_id:
                    errors.append(FlowStructureError(
                        kind=FlowErrorKind.IDENTIFIER_COLLISION,
                        screen_index=index,
                        message=(
                            f"Screen id '{screen_id}' becomes '{sanitized}', "
                            f"which is already used by screen '{previous}'"
                        ),
                        suggestion="Rename the screen using only letters and underscores"
                    ))

            seen_fields: Dict[str, str] = {}
            for component in iter_components(get_children(screen)):
                name = component.get("name")
                if not isinstance(name, str) or not name:
                    continue
                sanitized = sanitize_id(name)
                previous = seen_fields.setdefault(sanitized, name)
                if previous != name:
                    errors.append(FlowStructureError(
                        kind=FlowErrorKind.IDENTIFIER_COLLISION,
                        screen_index=index,
                        message=(
                            f"Field '{name}' becomes '{sanitized}', "
                            f"which is already used by field '{previous}'"
                        ),
                        suggestion="Rename the field using only letters and underscores"
                    ))

        return errors


# Global validator instance
flow_structure_validator = FlowStructureValidator()
