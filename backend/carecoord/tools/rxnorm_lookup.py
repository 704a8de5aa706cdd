"""
RxNorm name lookup tools

- RxCuiLookup: exact name -> RxCUI (first match wins)
- NameSuggester: autocomplete via spelling suggestions, then approximate match
"""

from typing import Any, Dict, List, Optional
import structlog

from carecoord.clients.rxnav import RxNavClient
from carecoord.core.config import settings
from carecoord.tools.base import BaseTool

logger = structlog.get_logger()

RXCUI_NOT_FOUND_MESSAGE = "No RxCUI found for the medication"
RXCUI_ERROR_MESSAGE = "Error getting medication information"


class RxCuiLookup(BaseTool):
    """
    Resolve a display name to its RxNorm concept id.

    When RxNorm lists several ids for the name the first one is taken; no
    attempt is made to pick by dose form or brand/generic.
    """

    def __init__(self, client: RxNavClient):
        super().__init__()
        self.client = client

    async def _execute(self, name: str) -> Dict[str, Any]:
        rxnorm_ids = await self.client.get_rxnorm_ids(name)
        if rxnorm_ids:
            if len(rxnorm_ids) > 1:
                logger.debug("rxcui_lookup.multiple_ids", name=name, ids=rxnorm_ids)
            return {'success': True, 'rxcui': str(rxnorm_ids[0])}

        return {'success': False, 'message': RXCUI_NOT_FOUND_MESSAGE}

    def _fallback(self, error: Exception, **kwargs) -> Dict[str, Any]:
        # A failed lookup is reported like a miss; callers never see the error
        return {'success': False, 'message': RXCUI_ERROR_MESSAGE}


class NameSuggester(BaseTool):
    """
    Medication name suggestions for autocomplete.

    Spelling suggestions are tried first; only when they come back empty is
    the approximate-term endpoint asked. Approximate candidates are objects,
    so only their names are kept (deduplicated, service order).
    """

    def __init__(self, client: RxNavClient, max_entries: Optional[int] = None):
        super().__init__()
        self.client = client
        self.max_entries = max_entries or settings.RXNAV_APPROX_MAX_ENTRIES

    async def _execute(self, partial: str) -> Dict[str, Any]:
        spelling = [s for s in await self.client.get_spelling_suggestions(partial) if s]
        if spelling:
            return {'success': True, 'suggestions': spelling, 'source': 'spelling'}

        candidates = await self.client.get_approximate_candidates(partial, max_entries=self.max_entries)
        names: List[str] = []
        for candidate in candidates:
            name = candidate.get('name') if isinstance(candidate, dict) else None
            if name and name not in names:
                names.append(name)

        return {
            'success': True,
            'suggestions': names,
            'source': 'approximate' if names else 'none'
        }

    def _fallback(self, error: Exception, **kwargs) -> Dict[str, Any]:
        logger.warning(
            "name_suggester.fallback",
            partial=kwargs.get('partial'),
            error=str(error)
        )
        return {'success': False, 'suggestions': [], 'source': 'fallback'}
