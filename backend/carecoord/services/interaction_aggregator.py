"""
Interaction aggregation

names -> concurrent RxCUI resolution -> one interaction/list request ->
InteractionRecords named the way the caller named the medications.

Every correlation map is built inside the call that uses it, so concurrent
requests share nothing but the HTTP connection pool.
"""

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Sequence
import structlog

from carecoord.clients.rxnav import RxNavClient
from carecoord.services.name_resolver import NameResolver
from carecoord.tools.drug_checker import DrugInteractionChecker

logger = structlog.get_logger(__name__)


class InteractionAggregator:

    def __init__(
        self,
        client: RxNavClient,
        resolver: Optional[NameResolver] = None,
        preferred_source: Optional[str] = None,
    ):
        self.resolver = resolver or NameResolver(client)
        self.checker = DrugInteractionChecker(client, preferred_source=preferred_source)

    async def check_interactions(self, names: Sequence[str]) -> Dict[str, Any]:
        """
        Check a list of user-entered medication names.

        Names that do not resolve are left out. Fewer than two names, or
        fewer than two resolved ids, is an empty success, not an error.
        """
        display_names = [n.strip() for n in names if n and n.strip()]
        if len(display_names) < 2:
            return {'success': True, 'interactions': []}

        resolutions = await asyncio.gather(
            *(self.resolver.resolve_identifier(name) for name in display_names)
        )

        rxcuis: List[str] = []
        name_by_rxcui: Dict[str, str] = {}
        names_by_key: Dict[str, str] = {}
        for name, resolution in zip(display_names, resolutions):
            key = name.lower()
            names_by_key.setdefault(key, name)
            if not resolution.get('success'):
                logger.info("interaction_aggregator.unresolved", name=name, reason=resolution.get('message'))
                continue

            rxcui = resolution['rxcui']
            if rxcui not in name_by_rxcui:
                name_by_rxcui[rxcui] = name
                rxcuis.append(rxcui)

        logger.info(
            "interaction_aggregator.resolved",
            requested=len(display_names),
            resolved=len(rxcuis),
            name_by_rxcui=name_by_rxcui,
        )

        if len(rxcuis) < 2:
            return {'success': True, 'interactions': []}

        return await self.checker.run(rxcuis=rxcuis, name_map=name_by_rxcui, names_by_key=names_by_key)

    async def check_interactions_by_identifiers(
        self,
        identifiers: Sequence[str],
        name_map: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """Same as check_interactions for callers that already hold RxCUIs."""
        name_map = {str(k).strip(): v for k, v in (name_map or {}).items()}
        names_by_key = {name.lower(): name for name in name_map.values()}
        return await self.checker.run(rxcuis=list(identifiers), name_map=name_map, names_by_key=names_by_key)


async def check_interactions(names: Sequence[str]) -> Dict[str, Any]:
    """
    One-off check with a short-lived client

    Example:
        result = await check_interactions(["Warfarin", "Aspirin"])
        if result['success'] and result['interactions']:
            print(result['interactions'][0].severity)
    """
    async with RxNavClient() as client:
        return await InteractionAggregator(client).check_interactions(names)
