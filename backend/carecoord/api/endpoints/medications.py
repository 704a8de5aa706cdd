from typing import List

from fastapi import APIRouter, Depends, Query
import structlog

from carecoord.clients.rxnav import RxNavClient
from carecoord.core.exceptions import ValidationException
from carecoord.core.infra import get_rxnav_client
from carecoord.schemas.medications import (
    InteractionCheckRequest,
    InteractionCheckResponse,
    MedicationInfoResponse,
    NameResolutionResponse,
    SideEffectsResponse,
)
from carecoord.services.interaction_aggregator import InteractionAggregator
from carecoord.services.name_resolver import NameResolver
from carecoord.tools.medication_info import MedicationInfoLookup, SideEffectLookup

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/interactions", response_model=InteractionCheckResponse, response_model_exclude_none=True)
async def check_interactions(
    payload: InteractionCheckRequest,
    client: RxNavClient = Depends(get_rxnav_client),
):
    """
    Check interactions between medications.

    Send either medicationNames (resolved to RxCUIs first) or rxcuis with an
    optional nameMap. Upstream failures come back as success=false with a
    message, still HTTP 200.
    """
    if payload.medication_names and payload.rxcuis:
        raise ValidationException("Send either medicationNames or rxcuis, not both")

    aggregator = InteractionAggregator(client)
    if payload.rxcuis:
        result = await aggregator.check_interactions_by_identifiers(payload.rxcuis, payload.name_map)
    else:
        result = await aggregator.check_interactions(payload.medication_names)

    logger.info(
        "interaction_check_completed",
        success=result.get("success"),
        count=len(result.get("interactions") or []),
    )
    return result


@router.get("/suggestions", response_model=List[str])
async def medication_suggestions(
    name: str = Query("", description="Partial medication name"),
    client: RxNavClient = Depends(get_rxnav_client),
):
    """Autocomplete; an empty list on any failure"""
    return await NameResolver(client).suggest_names(name)


@router.get("/rxcui", response_model=NameResolutionResponse, response_model_exclude_none=True)
async def resolve_rxcui(
    name: str = Query(..., min_length=1),
    client: RxNavClient = Depends(get_rxnav_client),
):
    return await NameResolver(client).resolve_identifier(name)


@router.get("/{rxcui}/info", response_model=MedicationInfoResponse, response_model_exclude_none=True)
async def medication_info(rxcui: str, client: RxNavClient = Depends(get_rxnav_client)):
    return await MedicationInfoLookup(client).run(rxcui=rxcui)


@router.get("/{rxcui}/side-effects", response_model=SideEffectsResponse, response_model_exclude_none=True)
async def medication_side_effects(rxcui: str, client: RxNavClient = Depends(get_rxnav_client)):
    return await SideEffectLookup(client).run(rxcui=rxcui)
