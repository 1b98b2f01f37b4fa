# tests/test_pettypes.py
import pytest
from httpx import AsyncClient, ASGITransport

from petclinic.models import PetType


@pytest.mark.asyncio
async def test_list_and_get_pet_types(mocked_app, clinic_service, owner_admin_headers):
    clinic_service.find_all_pet_types.return_value = [PetType(id=1, name="cat"), PetType(id=2, name="dog")]
    clinic_service.find_pet_type_by_id.return_value = PetType(id=2, name="dog")

    transport = ASGITransport(app=mocked_app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=owner_admin_headers) as ac:
        resp = await ac.get("/api/pettypes")
        assert resp.status_code == 200
        assert [t["name"] for t in resp.json()] == ["cat", "dog"]

        resp = await ac.get("/api/pettypes/2")
        assert resp.status_code == 200
        assert resp.json() == {"id": 2, "name": "dog"}


@pytest.mark.asyncio
async def test_unknown_pet_type(mocked_app, owner_admin_headers):
    transport = ASGITransport(app=mocked_app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=owner_admin_headers) as ac:
        resp = await ac.get("/api/pettypes/42")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Pet type 42 not found"
