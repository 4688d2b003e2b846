"""
Flow document models and structural error values.
"""
from typing import List, Dict, Any, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldSpec(BaseModel):
    """Data model declaration for a field supplied by an earlier screen"""
    model_config = ConfigDict(populate_by_name=True)

    type: str = "string"
    example: str = Field(default="", alias="__example__")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class FlowJSON(BaseModel):
    """Body of the platform's "update flow JSON" operation"""
    version: str = Field(..., min_length=1)
    screens: List[Any] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "version": "6.0",
                "screens": [
                    {
                        "id": "WELCOME",
                        "terminal": True,
                        "layout": {
                            "type": "SingleColumnLayout",
                            "children": [
                                {
                                    "type": "Footer",
                                    "label": "Done",
                                    "on-click-action": {"name": "complete", "payload": {}}
                                }
                            ]
                        }
                    }
                ]
            }
        }
    )


class FlowRecord(BaseModel):
    """Stored flow as the persistence layer hands it over"""
    name: str
    json_version: str = ""
    screens: List[Any] = Field(default_factory=list)
    has_local_changes: bool = False
    meta_flow_id: Optional[str] = None

    @field_validator('json_version')
    @classmethod
    def strip_version(cls, v: str) -> str:
        return v.strip()


class FlowErrorKind(str, Enum):
    """Structural error kinds"""
    EMPTY_FLOW = "empty_flow"
    MISSING_TERMINAL_ACTION = "missing_terminal_action"
    MISPLACED_TERMINAL_ACTION = "misplaced_terminal_action"
    IDENTIFIER_COLLISION = "identifier_collision"


class FlowStructureError:
    """Represents a structural flow error"""

    def __init__(
        self,
        kind: FlowErrorKind,
        message: str,
        screen_index: Optional[int] = None,
        suggestion: str = ""
    ):
        self.kind = kind
        self.message = message
        self.screen_index = screen_index  # 0-based
        self.suggestion = suggestion

    @property
    def screen_number(self) -> Optional[int]:
        """1-based screen position for display"""
        if self.screen_index is None:
            return None
        return self.screen_index + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'screen_index': self.screen_index,
            'screen_number': self.screen_number,
            'message': self.message,
            'suggestion': self.suggestion
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlowStructureError):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"FlowStructureError(kind={self.kind.value!r}, screen_index={self.screen_index!r})"

    def __str__(self) -> str:
        location = f"screen {self.screen_number}" if self.screen_number else "flow"
        s = f"❌ [{self.kind.value.upper()}] {location}: {self.message}"
        if self.suggestion:
            s += f"\n   → {self.suggestion}"
        return s
