"""Flow component registry.

Single source of truth for how the compiler dispatches on a component's
``type`` tag. Only the component types the hosting platform rejects an ``id``
on are registered; every other tag, including ones the platform adds later,
resolves to the passthrough kind and is forwarded unchanged.
"""

from __future__ import annotations

from copy import deepcopy
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, TypedDict


class ComponentKind(str, Enum):
    """How the compiler treats a component type."""

    ID_LESS = "id_less"
    PASSTHROUGH = "passthrough"


class ComponentDefinition(TypedDict, total=False):
    """Registered component type."""

    name: str
    category: str
    supports_id: bool


COMPONENT_DEFINITIONS: Dict[str, ComponentDefinition] = {
    "TextHeading": {"name": "TextHeading", "category": "display", "supports_id": False},
    "TextSubheading": {"name": "TextSubheading", "category": "display", "supports_id": False},
    "TextBody": {"name": "TextBody", "category": "display", "supports_id": False},
    "TextInput": {"name": "TextInput", "category": "input", "supports_id": False},
    "TextArea": {"name": "TextArea", "category": "input", "supports_id": False},
    "Dropdown": {"name": "Dropdown", "category": "input", "supports_id": False},
    "RadioButtonsGroup": {"name": "RadioButtonsGroup", "category": "input", "supports_id": False},
    "CheckboxGroup": {"name": "CheckboxGroup", "category": "input", "supports_id": False},
    "DatePicker": {"name": "DatePicker", "category": "input", "supports_id": False},
    "Image": {"name": "Image", "category": "display", "supports_id": False},
    "Footer": {"name": "Footer", "category": "action", "supports_id": False},
}

# Keys under which a component may hold nested component lists
CONTAINER_KEYS: Tuple[str, ...] = ("children", "then", "else")

# Platform-defined attribute names
ACTION_KEY = "on-click-action"
DATA_SOURCE_KEY = "data-source"


def get_component_definition(component_type: Any) -> Optional[ComponentDefinition]:
    if not isinstance(component_type, str):
        return None
    return COMPONENT_DEFINITIONS.get(component_type)


def classify_component(component_type: Any) -> ComponentKind:
    definition = get_component_definition(component_type)
    if definition and not definition.get("supports_id", True):
        return ComponentKind.ID_LESS
    return ComponentKind.PASSTHROUGH


def supports_component_id(component_type: Any) -> bool:
    return classify_component(component_type) is ComponentKind.PASSTHROUGH


def get_id_less_components() -> List[str]:
    return sorted(
        name for name in COMPONENT_DEFINITIONS
        if classify_component(name) is ComponentKind.ID_LESS
    )


def export_component_catalog() -> Dict[str, Any]:
    return {
        "components": deepcopy(COMPONENT_DEFINITIONS),
        "id_less_components": get_id_less_components(),
        "container_keys": list(CONTAINER_KEYS),
    }
