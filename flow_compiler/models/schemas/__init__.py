"""
Flow schema system.

Component type registry, flow documents and structural error values.
"""

from .component_catalog import (
    COMPONENT_DEFINITIONS,
    CONTAINER_KEYS,
    ComponentKind,
    classify_component,
    supports_component_id,
    get_component_definition,
    get_id_less_components,
    export_component_catalog,
)

from .flow import (
    FieldSpec,
    FlowJSON,
    FlowRecord,
    FlowErrorKind,
    FlowStructureError,
)

__all__ = [
    # Component catalog
    "COMPONENT_DEFINITIONS",
    "CONTAINER_KEYS",
    "ComponentKind",
    "classify_component",
    "supports_component_id",
    "get_component_definition",
    "get_id_less_components",
    "export_component_catalog",

    # Flow documents
    "FieldSpec",
    "FlowJSON",
    "FlowRecord",
    "FlowErrorKind",
    "FlowStructureError",
]
