"""
Medication detail lookups keyed by RxCUI

- MedicationInfoLookup: related concepts (ingredients, brands, dose forms)
- SideEffectLookup: package properties of the first NDC for the concept
"""

from typing import Any, Dict
import structlog

from carecoord.clients.rxnav import RxNavClient
from carecoord.tools.base import BaseTool

logger = structlog.get_logger()


class MedicationInfoLookup(BaseTool):

    def __init__(self, client: RxNavClient):
        super().__init__()
        self.client = client

    async def _execute(self, rxcui: str) -> Dict[str, Any]:
        concept_groups = await self.client.get_all_related(rxcui)
        if concept_groups:
            return {'success': True, 'info': concept_groups}
        return {'success': False, 'message': 'No information found for the medication'}

    def _fallback(self, error: Exception, **kwargs) -> Dict[str, Any]:
        return {'success': False, 'message': 'Error getting medication information'}


class SideEffectLookup(BaseTool):
    """
    RxNav has no side effect data. The NDC properties of the concept's first
    package are returned with an empty commonEffects list so the client can
    render the section until a real source is wired in.
    """

    def __init__(self, client: RxNavClient):
        super().__init__()
        self.client = client

    async def _execute(self, rxcui: str) -> Dict[str, Any]:
        ndcs = await self.client.get_ndcs(rxcui)
        if not ndcs:
            return {'success': False, 'message': 'No NDC codes found for this medication'}

        properties = await self.client.get_ndc_properties(ndcs[0])
        if not properties:
            return {'success': False, 'message': 'No side effect information found'}

        first = properties[0]
        return {
            'success': True,
            'sideEffects': {
                'name': first.get('propertyName') or 'Unknown',
                'category': first.get('propertyCategory') or 'Unknown',
                'commonEffects': [],
            }
        }

    def _fallback(self, error: Exception, **kwargs) -> Dict[str, Any]:
        logger.warning("side_effect_lookup.fallback", rxcui=kwargs.get('rxcui'), error=str(error))
        return {'success': False, 'message': 'Error getting medication side effects'}
