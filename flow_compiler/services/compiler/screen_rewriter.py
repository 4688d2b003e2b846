"""
Screen rewriter - turns authored screens into platform-ready screens.

Screens are rewritten once, left to right. The fields declared by every
screen already visited are carried forward: each later screen gets a data
model entry for them, and its actions reference them as ``${data.<name>}``.
"""
from copy import deepcopy
from typing import Any, Dict, List, Tuple

from flow_compiler.models.schemas.flow import FieldSpec
from flow_compiler.services.compiler.field_collector import (
    collect_component_fields,
    collect_flow_fields,
    has_complete_action,
)
from flow_compiler.services.compiler.identifiers import sanitize_id
from flow_compiler.services.compiler.payload import rewrite_component
from flow_compiler.utils.logging import get_logger, trace_sync

logger = get_logger(__name__)


def build_data_model(existing: Any, prior_fields: List[str]) -> Dict[str, Any]:
    """
    Data block declaring fields supplied by earlier screens.

    Entries the author already wrote are kept as-is; a declaration is only
    added for names not present yet.
    """
    data_model = deepcopy(existing) if isinstance(existing, dict) else {}
    for name in prior_fields:
        if name not in data_model:
            data_model[name] = FieldSpec().to_json()
    return data_model


class ScreenRewriter:
    """
    Rewrites validated screens for the hosting platform.

    Per screen:
    1. Sanitize the screen id
    2. Inject data model entries for fields of earlier screens
    3. Rewrite components and synthesize action payloads
    4. Mark the screen terminal if it holds a "complete" action

    Input screens are never modified; every returned node is new.
    """

    @trace_sync("flow.rewrite")
    def compile(self, screens: List[Any]) -> List[Any]:
        """
        Compile screens that passed structure validation.

        Args:
            screens: Authored screens, in flow order

        Returns:
            Rewritten screens, same order and length
        """
        flow_fields = collect_flow_fields(screens)
        prior_fields: List[str] = []
        result = []

        for index, screen in enumerate(screens):
            if not isinstance(screen, dict):
                result.append(deepcopy(screen))
                continue

            new_screen, screen_fields = self.rewrite_screen(
                screen, index, flow_fields, prior_fields
            )
            result.append(new_screen)

            # Visible to later screens only
            prior_fields = prior_fields + screen_fields

        logger.debug(
            "flow.compile.screens_rewritten",
            extra={
                "screens": len(result),
                "flow_fields": len(flow_fields),
                "terminal_screens": sum(
                    1 for screen in result
                    if isinstance(screen, dict) and screen.get("terminal") is True
                )
            }
        )

        return result

    def rewrite_screen(
        self,
        screen: Dict[str, Any],
        index: int,
        flow_fields: List[str],
        prior_fields: List[str],
    ) -> Tuple[Dict[str, Any], List[str]]:
        """
        Rewrite a single screen.

        Returns:
            Tuple of (new_screen, this_screen_fields)
        """
        new_screen = {
            key: deepcopy(value)
            for key, value in screen.items()
            if key != "terminal"
        }

        if isinstance(new_screen.get("id"), str):
            new_screen["id"] = sanitize_id(new_screen["id"])

        if index > 0 and prior_fields:
            new_screen["data"] = build_data_model(screen.get("data"), prior_fields)

        screen_fields: List[str] = []
        is_terminal = False

        layout = new_screen.get("layout")
        children = layout.get("children") if isinstance(layout, dict) else None
        if isinstance(children, list):
            screen_fields = collect_component_fields(children)
            screen_field_set = set(screen_fields)
            layout["children"] = [
                rewrite_component(
                    child, screen_fields, flow_fields, prior_fields, screen_field_set
                )
                for child in children
            ]
            is_terminal = has_complete_action(layout["children"])

        if is_terminal:
            new_screen["terminal"] = True

        return new_screen, screen_fields


# Global rewriter instance
screen_rewriter = ScreenRewriter()
