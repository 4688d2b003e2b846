"""
Models package.

Exports:
- schemas: Flow documents, component catalog and error values
"""

from .schemas import (
    FieldSpec,
    FlowJSON,
    FlowRecord,
    FlowErrorKind,
    FlowStructureError,
)

__all__ = [
    "FieldSpec",
    "FlowJSON",
    "FlowRecord",
    "FlowErrorKind",
    "FlowStructureError",
]
