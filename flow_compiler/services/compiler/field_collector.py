"""
Form field collection and component tree helpers.
"""
from typing import Any, Dict, Iterator, List, Optional

from flow_compiler.models.schemas.component_catalog import ACTION_KEY, CONTAINER_KEYS
from flow_compiler.services.compiler.identifiers import sanitize_id


def get_children(screen: Any) -> List[Any]:
    """Top-level components of a screen, or [] when the shape is unexpected"""
    if not isinstance(screen, dict):
        return []
    layout = screen.get("layout")
    if not isinstance(layout, dict):
        return []
    children = layout.get("children")
    if not isinstance(children, list):
        return []
    return children


def iter_components(children: List[Any]) -> Iterator[Dict[str, Any]]:
    """
    Walk a component list depth-first in document order.

    Yields every component object, then the components nested under its
    container keys. Non-object entries are skipped.
    """
    for child in children:
        if not isinstance(child, dict):
            continue
        yield child
        for key in CONTAINER_KEYS:
            nested = child.get(key)
            if isinstance(nested, list):
                yield from iter_components(nested)


def get_field_name(component: Dict[str, Any]) -> Optional[str]:
    """
    Sanitized form field name, or None if the component is not a field.

    Any non-empty string name makes a field, even one that sanitizes to "".
    """
    name = component.get("name")
    if isinstance(name, str) and name:
        return sanitize_id(name)
    return None


def collect_component_fields(children: List[Any]) -> List[str]:
    fields = []
    for component in iter_components(children):
        name = get_field_name(component)
        if name is not None:
            fields.append(name)
    return fields


def collect_fields(screen: Any) -> List[str]:
    """
    Sanitized form field names declared by one screen.

    Encounter order is preserved and duplicates are kept; payload building
    collapses them later.
    """
    return collect_component_fields(get_children(screen))


def collect_flow_fields(screens: List[Any]) -> List[str]:
    """Union of every screen's fields, in first-occurrence order"""
    seen = set()
    fields = []
    for screen in screens:
        for name in collect_fields(screen):
            if name not in seen:
                seen.add(name)
                fields.append(name)
    return fields


def get_action_name(component: Dict[str, Any]) -> str:
    action = component.get(ACTION_KEY)
    if not isinstance(action, dict):
        return ""
    name = action.get("name")
    return name if isinstance(name, str) else ""


def has_complete_action(children: List[Any]) -> bool:
    """True if any component in the tree carries a "complete" action"""
    return any(
        get_action_name(component) == "complete"
        for component in iter_components(children)
    )
