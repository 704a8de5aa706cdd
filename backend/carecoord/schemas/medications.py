from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from carecoord.services.severity import Severity


class InteractionRecord(BaseModel):
    """One interaction between two distinct medications. Immutable."""
    model_config = ConfigDict(frozen=True)

    drug1: str = Field(..., description="First participant, as the user named it when known")
    drug2: str = Field(..., description="Second participant, as the user named it when known")
    description: str = Field("", description="Free-text interaction description")
    severity: Severity = Field(..., description="high, medium or low")

    @model_validator(mode="after")
    def _participants_differ(self):
        if self.drug1.casefold() == self.drug2.casefold():
            raise ValueError("an interaction needs two distinct participants")
        return self


class InteractionCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    medication_names: List[str] = Field(default_factory=list, alias="medicationNames")
    rxcuis: List[str] = Field(default_factory=list, description="Known RxCUIs; skips name resolution")
    name_map: Dict[str, str] = Field(
        default_factory=dict,
        alias="nameMap",
        description="RxCUI -> display name, used with rxcuis",
    )


class InteractionCheckResponse(BaseModel):
    success: bool
    interactions: Optional[List[InteractionRecord]] = None
    message: Optional[str] = None


class NameResolutionResponse(BaseModel):
    success: bool
    rxcui: Optional[str] = None
    message: Optional[str] = None


class MedicationInfoResponse(BaseModel):
    success: bool
    info: Optional[List[Dict[str, Any]]] = None
    message: Optional[str] = None


class SideEffects(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = "Unknown"
    category: str = "Unknown"
    common_effects: List[str] = Field(default_factory=list, alias="commonEffects")


class SideEffectsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    side_effects: Optional[SideEffects] = Field(None, alias="sideEffects")
    message: Optional[str] = None
