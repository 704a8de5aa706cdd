"""
RxNav client (NLM RxNorm + drug interaction REST services)

Single outbound adapter for every RxNav endpoint the medication service uses.
Transport failures, non-2xx answers and undecodable bodies all surface as
UpstreamServiceError so callers only have one failure type to handle.
"""

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx
import structlog

from carecoord.core.config import settings
from carecoord.core.exceptions import UpstreamServiceError

logger = structlog.get_logger(__name__)


class RxNavClient:
    """Thin async wrapper around the RxNav REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.RXNAV_BASE_URL).rstrip("/")
        self.http = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.RXNAV_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "RxNavClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            resp = await self.http.get(url, params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.warning("rxnav.bad_status", url=url, status_code=e.response.status_code)
            raise UpstreamServiceError(
                f"RxNav answered {e.response.status_code}",
                details={"url": url, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.warning("rxnav.request_failed", url=url, error=str(e), error_type=type(e).__name__)
            raise UpstreamServiceError("RxNav request failed", details={"url": url}) from e
        except ValueError as e:
            logger.warning("rxnav.invalid_json", url=url, error=str(e))
            raise UpstreamServiceError("RxNav returned invalid JSON", details={"url": url}) from e

        if not isinstance(data, dict):
            raise UpstreamServiceError("RxNav returned an unexpected payload", details={"url": url})
        return data

    # ------------------------------------------------------------------
    # Name resolution
    # ------------------------------------------------------------------

    async def get_rxnorm_ids(self, name: str) -> List[str]:
        """All RxCUIs registered for an exact name, in service order."""
        data = await self._get_json(f"{self.base_url}/rxcui.json", params={"name": name})
        id_group = data.get("idGroup") or {}
        return list(id_group.get("rxnormId") or [])

    async def get_spelling_suggestions(self, name: str) -> List[str]:
        data = await self._get_json(f"{self.base_url}/spellingsuggestions.json", params={"name": name})
        suggestion_list = (data.get("suggestionGroup") or {}).get("suggestionList") or {}
        return list(suggestion_list.get("suggestion") or [])

    async def get_approximate_candidates(self, term: str, max_entries: Optional[int] = None) -> List[Dict[str, Any]]:
        data = await self._get_json(
            f"{self.base_url}/approximateTerm.json",
            params={"term": term, "maxEntries": max_entries or settings.RXNAV_APPROX_MAX_ENTRIES},
        )
        return list((data.get("approximateGroup") or {}).get("candidate") or [])

    # ------------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------------

    async def get_interaction_groups(self, rxcuis: Sequence[str]) -> List[Dict[str, Any]]:
        """
        fullInteractionTypeGroup for a batch of RxCUIs.

        The ids go out joined by a literal '+' (rxcuis=1+2+3), so the query
        string is built here instead of through httpx params, which would
        escape the separator as %2B.
        """
        joined = "+".join(quote(str(rxcui), safe="") for rxcui in rxcuis)
        data = await self._get_json(f"{self.base_url}/interaction/list.json?rxcuis={joined}")
        groups = data.get("fullInteractionTypeGroup") or []
        if not isinstance(groups, list):
            raise UpstreamServiceError("Malformed interaction response", details={"rxcuis": list(rxcuis)})
        return groups

    # ------------------------------------------------------------------
    # Concept details
    # ------------------------------------------------------------------

    async def get_all_related(self, rxcui: str) -> List[Dict[str, Any]]:
        data = await self._get_json(f"{self.base_url}/rxcui/{quote(rxcui, safe='')}/allrelated.json")
        return list((data.get("allRelatedGroup") or {}).get("conceptGroup") or [])

    async def get_ndcs(self, rxcui: str) -> List[str]:
        data = await self._get_json(f"{self.base_url}/rxcui/{quote(rxcui, safe='')}/ndcs.json")
        ndc_list = (data.get("ndcGroup") or {}).get("ndcList") or {}
        return list(ndc_list.get("ndc") or [])

    async def get_ndc_properties(self, ndc: str) -> List[Dict[str, Any]]:
        data = await self._get_json(f"{self.base_url}/ndcproperties.json", params={"id": ndc})
        return list((data.get("ndcPropertyList") or {}).get("ndcProperty") or [])
