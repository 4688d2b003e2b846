"""
Flow compiler passes.

Structure validation runs first and rejects the whole flow; only a valid
flow reaches the screen rewriter.
"""

from flow_compiler.services.compiler.identifiers import (
    sanitize_id,
    is_valid_id,
)

from flow_compiler.services.compiler.field_collector import (
    collect_fields,
    collect_flow_fields,
    has_complete_action,
    iter_components,
)

from flow_compiler.services.compiler.structure_validator import (
    flow_structure_validator,
    FlowStructureValidator,
)

from flow_compiler.services.compiler.payload import (
    rewrite_component,
    build_complete_payload,
    build_navigate_payload,
)

from flow_compiler.services.compiler.screen_rewriter import (
    screen_rewriter,
    ScreenRewriter,
    build_data_model,
)

__all__ = [
    # Identifiers
    'sanitize_id',
    'is_valid_id',

    # Field collection
    'collect_fields',
    'collect_flow_fields',
    'has_complete_action',
    'iter_components',

    # Structure validation
    'flow_structure_validator',
    'FlowStructureValidator',

    # Payload synthesis
    'rewrite_component',
    'build_complete_payload',
    'build_navigate_payload',

    # Screen rewriting
    'screen_rewriter',
    'ScreenRewriter',
    'build_data_model',
]
