from typing import Any, Dict, List

from carecoord.clients.rxnav import RxNavClient
from carecoord.tools.rxnorm_lookup import RxCuiLookup, NameSuggester


class NameResolver:
    """
    Free-text medication name -> RxCUI, plus autocomplete suggestions.
    Neither operation raises; nothing is cached between calls.
    """

    def __init__(self, client: RxNavClient):
        self.rxcui_lookup = RxCuiLookup(client)
        self.suggester = NameSuggester(client)

    async def resolve_identifier(self, name: str) -> Dict[str, Any]:
        """{'success': True, 'rxcui': ...} or {'success': False, 'message': ...}"""
        return await self.rxcui_lookup.run(name=name)

    async def suggest_names(self, partial: str) -> List[str]:
        if not partial or not partial.strip():
            return []
        result = await self.suggester.run(partial=partial.strip())
        return list(result.get('suggestions') or [])

