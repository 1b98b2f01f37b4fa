"""
pytest configuration: the clinic service is an AsyncMock, security is on
and requests carry an OWNER_ADMIN token by default.
"""
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from petclinic.config import get_settings
from petclinic.main import app
from petclinic.security import OWNER_ADMIN, VET_ADMIN, create_access_token
from petclinic.service import ClinicService, get_clinic_service

NEW_ID = 100


def _save(entity):
    if entity.id is None:
        entity.id = NEW_ID
    return entity


@pytest.fixture(autouse=True)
def security_enabled(monkeypatch):
    """Runs every test with role checks switched on"""
    monkeypatch.setattr(get_settings(), "security_enabled", True)


@pytest.fixture
def clinic_service():
    service = AsyncMock(spec=ClinicService)
    service.find_pet_by_id.return_value = None
    service.find_owner_by_id.return_value = None
    service.find_pet_type_by_id.return_value = None
    service.find_all_pets.return_value = []
    service.find_all_owners.return_value = []
    service.find_owners_by_last_name.return_value = []
    service.find_all_pet_types.return_value = []
    service.save_pet.side_effect = _save
    service.save_owner.side_effect = _save
    return service


@pytest.fixture
def mocked_app(clinic_service):
    app.dependency_overrides[get_clinic_service] = lambda: clinic_service
    yield app
    app.dependency_overrides.clear()


def bearer(*roles):
    return {"Authorization": f"Bearer {create_access_token('admin', roles)}"}


@pytest.fixture
def owner_admin_headers():
    return bearer(OWNER_ADMIN)


@pytest.fixture
def vet_admin_headers():
    return bearer(VET_ADMIN)


@pytest.fixture
def client(mocked_app, owner_admin_headers):
    """Client for the FastAPI app, authenticated as OWNER_ADMIN"""
    return TestClient(mocked_app, headers=owner_admin_headers)


@pytest.fixture
def anonymous_client(mocked_app):
    return TestClient(mocked_app)
