"""
Flow compilation endpoints.

POST /api/v1/flows/validate - Structural check only
POST /api/v1/flows/compile  - Validate and compile to platform JSON

Both are stateless: the caller sends the screens and gets the result back.
"""
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any, List

from flow_compiler.models.schemas.flow import FlowJSON
from flow_compiler.services.flow_service import FlowValidationError, flow_service
from flow_compiler.utils.logging import get_logger, log_context

router = APIRouter()
logger = get_logger(__name__)


class FlowScreensRequest(BaseModel):
    """Authored flow screens"""
    screens: List[Any] = Field(default_factory=list)
    version: Optional[str] = Field(default=None, max_length=32)

    @field_validator('version')
    @classmethod
    def validate_version(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank versions as absent"""
        if v is None or not v.strip():
            return None
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "version": "6.0",
                "screens": [
                    {
                        "id": "SCREEN_1",
                        "layout": {
                            "type": "SingleColumnLayout",
                            "children": [
                                {"type": "TextInput", "name": "full_name", "label": "Name"},
                                {
                                    "type": "Footer",
                                    "label": "Submit",
                                    "on-click-action": {"name": "complete"}
                                }
                            ]
                        }
                    }
                ]
            }
        }
    )


class ValidateFlowResponse(BaseModel):
    """Structural validation result"""
    valid: bool
    errors: List[Dict[str, Any]] = Field(default_factory=list)


@router.post(
    "/flows/validate",
    response_model=ValidateFlowResponse,
    tags=["Flows"],
    summary="Validate flow structure",
    description="Checks terminal action presence and placement without rewriting the flow."
)
async def validate_flow(request: FlowScreensRequest) -> ValidateFlowResponse:
    with log_context(operation="flow_validate"):
        is_valid, errors = flow_service.validate(request.screens)

        logger.info(
            "api.flow.validated",
            extra={
                "screens": len(request.screens),
                "valid": is_valid,
                "errors": len(errors)
            }
        )

        return ValidateFlowResponse(
            valid=is_valid,
            errors=[error.to_dict() for error in errors]
        )


@router.post(
    "/flows/compile",
    response_model=FlowJSON,
    tags=["Flows"],
    summary="Compile flow for the hosting platform",
    description="Validates the flow, then returns the JSON body for the platform's update flow JSON call."
)
async def compile_flow(request: FlowScreensRequest) -> FlowJSON:
    with log_context(operation="flow_compile"):
        try:
            return flow_service.compile_flow(request.screens, version=request.version)
        except FlowValidationError as e:
            logger.warning(
                "api.flow.rejected",
                extra={
                    "screens": len(request.screens),
                    "errors": [error.kind.value for error in e.errors]
                }
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=e.to_dict()
            )
