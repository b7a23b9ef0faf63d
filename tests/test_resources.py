"""
Tests for the resource hub filter and endpoint.
"""

import pytest

from manas_mitra.resources import RESOURCES, Resource, filter_resources


def test_no_filters_returns_everything():
    assert filter_resources() == list(RESOURCES)


def test_call_and_24_7_returns_vandrevala_only():
    result = filter_resources(modality="call", timing="24/7")

    assert [r.name for r in result] == ["Vandrevala Foundation"]


def test_daytime_returns_three():
    names = {r.name for r in filter_resources(timing="daytime")}

    assert names == {"iCALL Helpline (TISS)", "Mitram Foundation", "The Humsafar Trust"}


def test_modality_filter_uses_membership():
    call_only = Resource(
        name="Call line",
        description="",
        modalities=frozenset({"call"}),
        timing="daytime",
        website="https://example.org",
    )

    assert filter_resources(modality="chat", resources=(call_only,)) == []
    assert filter_resources(modality="call", resources=(call_only,)) == [call_only]


def test_unknown_selector_matches_nothing():
    assert filter_resources(timing="weekends") == []


@pytest.mark.asyncio
async def test_list_resources_endpoint(client):
    """GET /resources should return all four organisations."""
    response = await client.get("/resources")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 4
    assert data[0]["modalities"] == ["call", "chat"]


@pytest.mark.asyncio
async def test_list_resources_endpoint_filters(client):
    """GET /resources should apply modality and timing selectors."""
    response = await client.get("/resources", params={"modality": "call", "timing": "24/7"})

    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["Vandrevala Foundation"]


@pytest.mark.asyncio
async def test_list_resources_endpoint_rejects_unknown_selector(client):
    """GET /resources should 422 for unknown selector values."""
    response = await client.get("/resources", params={"modality": "video"})

    assert response.status_code == 422
