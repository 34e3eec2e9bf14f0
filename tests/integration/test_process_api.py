"""End-to-end requests against PostgreSQL with in-memory object storage."""

import json
from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.factories import AreaFactory
from tests.fakes import FakeObjectStorage

pytestmark = pytest.mark.integration


async def test_area_team_process_flow(client: AsyncClient, object_storage: FakeObjectStorage):
    area = (await client.post("/api/v1/areas", json={"name": "Operations"})).json()
    team = (
        await client.post(
            "/api/v1/teams",
            json={"name": "Warehouse", "area_id": area["id"], "member_ids": [str(uuid4())]},
        )
    ).json()["team"]

    response = await client.post(
        "/api/v1/processes",
        data={
            "payload": json.dumps(
                {
                    "name": "Receiving",
                    "type": "operational",
                    "area_id": area["id"],
                    "team_id": team["id"],
                    "notes": '<img src="preview://1">',
                }
            ),
            "inline_image_refs": ["preview://1"],
        },
        files=[
            ("inline_images", ("dock.png", b"\x89PNG\r\n\x1a\n", "image/png")),
            ("documents", ("checklist.pdf", b"%PDF-1.7", "application/pdf")),
        ],
    )

    assert response.status_code == 201
    created = response.json()
    assert created["assets"]["failed"] == []
    assert created["process"]["area_name"] == "Operations"
    assert created["process"]["team_name"] == "Warehouse"
    assert object_storage.base_url in created["process"]["document_by_user"]["html"]

    detail = (await client.get("/api/v1/processes/1")).json()
    assert detail["id"] == created["process"]["id"]
    assert detail["document_by_user"] == created["process"]["document_by_user"]

    documents = (await client.get("/api/v1/processes/1/documents")).json()
    assert sorted(d["kind"] for d in documents) == ["document", "inline_image"]

    area_detail = (await client.get("/api/v1/areas/1")).json()
    assert (area_detail["teams_count"], area_detail["active_processes_count"]) == (1, 1)
    team_detail = (await client.get("/api/v1/teams/1")).json()
    assert (team_detail["members_count"], team_detail["processes_count"]) == (1, 1)


async def test_foreign_area_is_rejected(client: AsyncClient, db_session, other_company):
    foreign = AreaFactory.build(company_id=other_company.id)
    db_session.add(foreign)
    await db_session.commit()

    response = await client.post(
        "/api/v1/processes",
        data={
            "payload": json.dumps(
                {"name": "Receiving", "type": "operational", "area_id": str(foreign.id)}
            )
        },
    )

    assert response.status_code == 422
    assert response.json()["request_id"]
    assert (await client.get("/api/v1/processes")).json() == []


async def test_unknown_route_includes_request_id(client: AsyncClient):
    response = await client.get("/api/v1/nonexistent-endpoint")

    assert response.status_code == 404
    assert isinstance(response.json()["request_id"], str)
