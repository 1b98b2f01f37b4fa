import logging

from fastapi import status
from fastapi.testclient import TestClient


def test_unexpected_error_is_logged_with_traceback(mocked_app, clinic_service, owner_admin_headers, caplog):
    clinic_service.find_pet_by_id.side_effect = RuntimeError("connection reset")
    client = TestClient(mocked_app, headers=owner_admin_headers, raise_server_exceptions=False)
    with caplog.at_level(logging.ERROR, logger="petclinic.advice"):
        response = client.get("/api/pets/1")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.headers["content-type"] == "application/problem+json"
    assert response.json()["detail"] == "Unexpected server error"
    record = next(r for r in caplog.records if r.name == "petclinic.advice")
    assert record.msg == "Unhandled error on %s %s: %s"
    assert record.getMessage() == "Unhandled error on GET /api/pets/1: connection reset"
    assert record.exc_info is not None
