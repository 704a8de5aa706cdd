"""
Drug interaction checker

Queries the RxNav interaction list for a batch of RxCUIs and turns the
response into InteractionRecords with a heuristic severity.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
import structlog

from carecoord.clients.rxnav import RxNavClient
from carecoord.core.config import settings
from carecoord.core.exceptions import UpstreamServiceError
from carecoord.schemas.medications import InteractionRecord
from carecoord.services.severity import classify_severity
from carecoord.tools.base import BaseTool

logger = structlog.get_logger()

INTERACTION_ERROR_MESSAGE = "Error checking drug interactions"


class DrugInteractionChecker(BaseTool):
    """
    Interaction lookup for already-resolved RxCUIs.

    Flow:
    1. fewer than two distinct ids -> empty result, no request
    2. one interaction/list request for all ids
    3. pick the preferred source group (DrugBank by default), else the first
    4. map participants back to the caller's names and classify severity
    """

    def __init__(self, client: RxNavClient, preferred_source: Optional[str] = None):
        super().__init__()
        self.client = client
        self.preferred_source = preferred_source or settings.INTERACTION_PREFERRED_SOURCE

    async def _execute(
        self,
        rxcuis: Sequence[str],
        name_map: Optional[Mapping[str, str]] = None,
        names_by_key: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        name_map: rxcui -> display name
        names_by_key: lower-cased display name -> display name, used when the
            service reports a participant under an rxcui we did not send
        """
        unique_rxcuis: List[str] = []
        for rxcui in rxcuis:
            rxcui = str(rxcui).strip()
            if rxcui and rxcui not in unique_rxcuis:
                unique_rxcuis.append(rxcui)

        if len(unique_rxcuis) < 2:
            return {'success': True, 'interactions': []}

        groups = await self.client.get_interaction_groups(unique_rxcuis)
        group = self._select_group(groups)
        if group is None:
            return {'success': True, 'interactions': []}

        name_map = name_map or {}
        names_by_key = names_by_key or {}

        interactions: List[InteractionRecord] = []
        for entry in group.get('fullInteractionType') or []:
            concepts = entry.get('minConcept') or []
            if len(concepts) < 2:
                raise UpstreamServiceError("Interaction entry without two participants")

            drug1 = self._display_name(concepts[0], name_map, names_by_key)
            drug2 = self._display_name(concepts[1], name_map, names_by_key)
            if drug1.casefold() == drug2.casefold():
                logger.warning("drug_checker.same_participant_skipped", drug=drug1)
                continue

            description = self._description(entry)
            interactions.append(InteractionRecord(
                drug1=drug1,
                drug2=drug2,
                description=description,
                severity=classify_severity(description),
            ))

        return {'success': True, 'interactions': interactions}

    def _select_group(self, groups: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not groups:
            return None
        for group in groups:
            if group.get('sourceName') == self.preferred_source:
                return group
        return groups[0]

    @staticmethod
    def _display_name(
        concept: Dict[str, Any],
        name_map: Mapping[str, str],
        names_by_key: Mapping[str, str],
    ) -> str:
        rxcui = str(concept.get('rxcui', ''))
        if rxcui in name_map:
            return name_map[rxcui]

        service_name = concept.get('name') or rxcui
        return names_by_key.get(service_name.lower(), service_name)

    @staticmethod
    def _description(entry: Dict[str, Any]) -> str:
        if entry.get('description'):
            return entry['description']
        # Live RxNav nests the text one level down
        for pair in entry.get('interactionPair') or []:
            if pair.get('description'):
                return pair['description']
        return ''

    def _fallback(self, error: Exception, **kwargs) -> Dict[str, Any]:
        logger.warning(
            "drug_checker.fallback",
            rxcuis=list(kwargs.get('rxcuis') or []),
            error=str(error)
        )
        return {'success': False, 'message': INTERACTION_ERROR_MESSAGE}
