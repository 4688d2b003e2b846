"""
Component rewriting and action payload synthesis.

"complete" and "navigate" actions get their payloads generated from the
fields the flow declares:

- ``${form.<name>}`` for a field entered on the current screen
- ``${data.<name>}`` for a field carried over from an earlier screen

Other actions keep whatever payload the author wrote.
"""
from copy import deepcopy
from typing import Any, Dict, List, Optional, Set

from flow_compiler.models.schemas.component_catalog import (
    ACTION_KEY,
    CONTAINER_KEYS,
    DATA_SOURCE_KEY,
    supports_component_id,
)
from flow_compiler.services.compiler.identifiers import sanitize_id


def form_ref(name: str) -> str:
    return "${form." + name + "}"


def data_ref(name: str) -> str:
    return "${data." + name + "}"


def build_complete_payload(flow_fields: List[str], screen_field_set: Set[str]) -> Dict[str, str]:
    """Payload carrying every field of the flow to the completion handler"""
    return {
        name: form_ref(name) if name in screen_field_set else data_ref(name)
        for name in flow_fields
    }


def build_navigate_payload(prior_fields: List[str], screen_fields: List[str]) -> Dict[str, str]:
    """Payload forwarding earlier fields plus this screen's fields"""
    payload = {name: data_ref(name) for name in prior_fields}
    # Current-screen entries overwrite prior ones of the same name
    for name in screen_fields:
        payload[name] = form_ref(name)
    return payload


def _rewrite_action(
    action: Dict[str, Any],
    screen_fields: List[str],
    screen_field_set: Set[str],
    flow_fields: List[str],
    prior_fields: List[str],
) -> Dict[str, Any]:
    action_name = action.get("name")

    if action_name == "complete":
        action["payload"] = build_complete_payload(flow_fields, screen_field_set)
    elif action_name == "navigate" and screen_fields:
        action["payload"] = build_navigate_payload(prior_fields, screen_fields)

    return action


def _rewrite_data_source(options: List[Any]) -> List[Any]:
    for option in options:
        if isinstance(option, dict) and isinstance(option.get("id"), str):
            option["id"] = sanitize_id(option["id"])
    return options


def rewrite_component(
    component: Any,
    screen_fields: List[str],
    flow_fields: List[str],
    prior_fields: List[str],
    screen_field_set: Optional[Set[str]] = None,
) -> Any:
    """
    Rewrite one component for the hosting platform.

    Args:
        component: Authored component (left untouched)
        screen_fields: Sanitized fields of the screen being rewritten
        flow_fields: Fields of the whole flow, first-occurrence order
        prior_fields: Fields of all earlier screens, in screen order
        screen_field_set: ``set(screen_fields)``, precomputed by callers
            rewriting many components of the same screen

    Returns:
        A new component; non-object input is returned as a copy.
    """
    rewritten = deepcopy(component)
    if not isinstance(rewritten, dict):
        return rewritten

    if screen_field_set is None:
        screen_field_set = set(screen_fields)

    return _rewrite_in_place(rewritten, screen_fields, screen_field_set, flow_fields, prior_fields)


def _rewrite_in_place(
    component: Dict[str, Any],
    screen_fields: List[str],
    screen_field_set: Set[str],
    flow_fields: List[str],
    prior_fields: List[str],
) -> Dict[str, Any]:
    # Only ever called on a private deep copy
    if not supports_component_id(component.get("type")):
        component.pop("id", None)

    if isinstance(component.get("name"), str):
        component["name"] = sanitize_id(component["name"])

    if isinstance(component.get(DATA_SOURCE_KEY), list):
        _rewrite_data_source(component[DATA_SOURCE_KEY])

    if isinstance(component.get(ACTION_KEY), dict):
        _rewrite_action(
            component[ACTION_KEY], screen_fields, screen_field_set, flow_fields, prior_fields
        )

    for key in CONTAINER_KEYS:
        nested = component.get(key)
        if not isinstance(nested, list):
            continue
        for child in nested:
            if isinstance(child, dict):
                _rewrite_in_place(child, screen_fields, screen_field_set, flow_fields, prior_fields)

    return component
