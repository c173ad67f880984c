from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from core.domain import AnalysisResult


class PhaseSchema(BaseModel):
    name: str
    description: str = ""


class PersonaSchema(BaseModel):
    name: str
    description: str = ""
    goals: List[str] = Field(default_factory=list)
    painPoints: List[str] = Field(default_factory=list)


class FileErrorSchema(BaseModel):
    error: str
    details: str


class AnalysisResponse(BaseModel):
    projectName: str = ""
    description: str = ""
    phases: List[PhaseSchema] = Field(default_factory=list)
    personas: List[PersonaSchema] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)
    errors: Optional[List[FileErrorSchema]] = None  # Only present when a file failed

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls.model_validate(result.to_dict())


class ErrorResponse(BaseModel):
    error: str
    details: str


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: datetime
    uptime: float
    mockMode: bool
    version: str
