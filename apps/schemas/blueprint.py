from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Any

class BlueprintCreateRequest(BaseModel):
    blueprint_name: str = Field(..., min_length=1, max_length=255)
    stack_name: str = Field(..., min_length=1, max_length=255)
    stack_version: str = Field(..., min_length=1, max_length=255)
    configurations: List[Any] = Field(default_factory=list)

class BlueprintConfigurationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    blueprint_name: str
    type: str
    properties: Dict[str, Any]

class BlueprintResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    blueprint_name: str
    stack_name: str
    stack_version: str
    configurations: List[BlueprintConfigurationResponse] = Field(default_factory=list)
