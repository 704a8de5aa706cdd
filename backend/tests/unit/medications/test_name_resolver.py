import pytest

from carecoord.core.exceptions import UpstreamServiceError
from carecoord.services.name_resolver import NameResolver


class _FakeRxNav:
    def __init__(self, ids=None, spelling=None, approximate=None, fail=()):
        self.ids = ids or {}
        self.spelling = spelling or []
        self.approximate = approximate or []
        self.fail = set(fail)
        self.calls = []

    async def get_rxnorm_ids(self, name):
        self.calls.append(("rxcui", name))
        if "rxcui" in self.fail:
            raise UpstreamServiceError("RxNav request failed")
        return self.ids.get(name, [])

    async def get_spelling_suggestions(self, name):
        self.calls.append(("spelling", name))
        if "spelling" in self.fail:
            raise UpstreamServiceError("RxNav request failed")
        return self.spelling

    async def get_approximate_candidates(self, term, max_entries=None):
        self.calls.append(("approximate", term, max_entries))
        if "approximate" in self.fail:
            raise UpstreamServiceError("RxNav request failed")
        return self.approximate


@pytest.mark.asyncio
async def test_resolve_takes_first_identifier():
    client = _FakeRxNav(ids={"Tylenol": ["202433", "1152843"]})

    result = await NameResolver(client).resolve_identifier("Tylenol")

    assert result == {"success": True, "rxcui": "202433"}


@pytest.mark.asyncio
async def test_resolve_miss_is_not_found():
    result = await NameResolver(_FakeRxNav()).resolve_identifier("notadrug")

    assert result["success"] is False
    assert result["message"] == "No RxCUI found for the medication"
    assert "rxcui" not in result


@pytest.mark.asyncio
async def test_resolve_service_error_is_reported_as_failure_not_raised():
    resolver = NameResolver(_FakeRxNav(fail={"rxcui"}))

    result = await resolver.resolve_identifier("warfarin")

    assert result == {"success": False, "message": "Error getting medication information"}
    assert resolver.rxcui_lookup.error_count == 1


@pytest.mark.asyncio
async def test_resolve_does_not_cache():
    client = _FakeRxNav(ids={"aspirin": ["1191"]})
    resolver = NameResolver(client)

    await resolver.resolve_identifier("aspirin")
    await resolver.resolve_identifier("aspirin")

    assert client.calls == [("rxcui", "aspirin"), ("rxcui", "aspirin")]


@pytest.mark.asyncio
async def test_suggestions_prefer_spelling_endpoint():
    client = _FakeRxNav(spelling=["aspirin", "asperin"], approximate=[{"name": "ignored"}])

    suggestions = await NameResolver(client).suggest_names("asprin")

    assert suggestions == ["aspirin", "asperin"]
    assert [c[0] for c in client.calls] == ["spelling"]


@pytest.mark.asyncio
async def test_suggestions_fall_back_to_approximate_names():
    client = _FakeRxNav(approximate=[
        {"rxcui": "1191", "name": "aspirin", "score": "9"},
        {"rxcui": "1191", "name": "aspirin", "score": "8"},
        {"rxcui": "243670", "score": "7"},
        {"rxcui": "215568", "name": "Aspirin Low Strength", "score": "6"},
    ])

    suggestions = await NameResolver(client).suggest_names("asprn")

    assert suggestions == ["aspirin", "Aspirin Low Strength"]
    assert client.calls[-1] == ("approximate", "asprn", 10)


@pytest.mark.asyncio
async def test_suggestions_empty_when_both_endpoints_empty():
    assert await NameResolver(_FakeRxNav()).suggest_names("zzzz") == []


@pytest.mark.asyncio
async def test_suggestions_never_raise_when_both_endpoints_fail():
    client = _FakeRxNav(fail={"spelling", "approximate"})

    assert await NameResolver(client).suggest_names("asp") == []


@pytest.mark.asyncio
async def test_suggestions_for_blank_input_make_no_calls():
    client = _FakeRxNav(spelling=["aspirin"])

    assert await NameResolver(client).suggest_names("   ") == []
    assert client.calls == []
