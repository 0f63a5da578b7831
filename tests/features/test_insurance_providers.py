"""
Test Insurance Providers

This module tests the insurance provider API including:
- Public listing of active providers
- Lookup errors
- Gated creation, update and deletion
- Null rejection on update
- Gate before body validation
"""

import pytest
from bson import ObjectId

from careadmin.shared.database import INSURANCE_PROVIDERS
from careadmin.shared.exceptions import UNAUTHORIZED_MESSAGE

BASE = "/api/center/insurance-providers"


def test_list_returns_active_sorted(test_client, fake_db):
    providers = fake_db[INSURANCE_PROVIDERS]
    providers.seed({"name": "Cigna", "sort_order": 2, "is_active": True})
    providers.seed({"name": "Aetna", "sort_order": 1, "is_active": True})
    providers.seed({"name": "Hidden", "sort_order": 0, "is_active": False})

    response = test_client.get(BASE)

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Aetna", "Cigna"]
    assert response.json()[0]["sortOrder"] == 1


def test_get_invalid_id(test_client):
    response = test_client.get(f"{BASE}/not-an-id")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid provider ID"}


def test_get_missing(test_client):
    response = test_client.get(f"{BASE}/{ObjectId()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Provider not found"}


def test_create_with_defaults(auth_client, fake_db):
    response = auth_client.post(BASE, json={"name": "Aetna", "logoUrl": "/uploads/insurance-logos/a.png"})

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Aetna"
    assert body["logoUrl"] == "/uploads/insurance-logos/a.png"
    assert body["sortOrder"] == 0
    assert body["isActive"] is True
    stored = fake_db[INSURANCE_PROVIDERS].docs[0]
    assert stored["logo_url"] == "/uploads/insurance-logos/a.png"
    assert str(stored["_id"]) == body["id"]


def test_create_requires_name(auth_client):
    response = auth_client.post(BASE, json={"description": "no name"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


def test_partial_update(auth_client, fake_db):
    provider_id = fake_db[INSURANCE_PROVIDERS].seed({
        "name": "Aetna", "description": "PPO", "sort_order": 0, "is_active": True,
    })

    response = auth_client.patch(f"{BASE}/{provider_id}", json={"isActive": False})

    assert response.status_code == 200
    assert response.json()["isActive"] is False
    assert response.json()["description"] == "PPO"


def test_update_missing(auth_client):
    response = auth_client.patch(f"{BASE}/{ObjectId()}", json={"name": "X"})
    assert response.status_code == 404


def test_delete(auth_client, fake_db):
    provider_id = fake_db[INSURANCE_PROVIDERS].seed({"name": "Aetna"})

    response = auth_client.delete(f"{BASE}/{provider_id}")

    assert response.json() == {"success": True, "message": "Provider deleted successfully"}
    assert fake_db[INSURANCE_PROVIDERS].docs == []
    assert auth_client.delete(f"{BASE}/{provider_id}").status_code == 404


def test_mutations_require_session(test_client, fake_db):
    provider_id = fake_db[INSURANCE_PROVIDERS].seed({"name": "Aetna"})

    assert test_client.patch(f"{BASE}/{provider_id}", json={"name": "B"}).status_code == 401
    assert test_client.delete(f"{BASE}/{provider_id}").status_code == 401
    assert len(fake_db[INSURANCE_PROVIDERS].docs) == 1


@pytest.mark.parametrize("field", ["name", "sortOrder", "isActive"])
def test_update_rejects_null_for_stored_fields(auth_client, fake_db, field):
    provider_id = fake_db[INSURANCE_PROVIDERS].seed({"name": "Aetna", "sort_order": 1, "is_active": True})

    response = auth_client.patch(f"{BASE}/{provider_id}", json={field: None})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
    assert fake_db[INSURANCE_PROVIDERS].docs[0] == {
        "_id": provider_id, "name": "Aetna", "sort_order": 1, "is_active": True,
    }
    assert [p["name"] for p in auth_client.get(BASE).json()] == ["Aetna"]


def test_update_clears_description(auth_client, fake_db):
    provider_id = fake_db[INSURANCE_PROVIDERS].seed({"name": "Aetna", "description": "PPO"})

    response = auth_client.patch(f"{BASE}/{provider_id}", json={"description": None})

    assert response.status_code == 200
    assert response.json()["description"] is None


def test_unauthenticated_malformed_body_gets_401(test_client, fake_db):
    response = test_client.post(BASE, content="{bad", headers={"Content-Type": "application/json"})

    assert response.status_code == 401
    assert response.json() == {"error": UNAUTHORIZED_MESSAGE}
    assert fake_db[INSURANCE_PROVIDERS].docs == []


def test_unauthenticated_invalid_body_gets_401(test_client, fake_db):
    provider_id = fake_db[INSURANCE_PROVIDERS].seed({"name": "Aetna"})

    assert test_client.post(BASE, json={"description": "no name"}).json() == {"error": UNAUTHORIZED_MESSAGE}
    assert test_client.patch(f"{BASE}/{provider_id}", json={"sortOrder": "first"}).status_code == 401


def test_authenticated_malformed_body_gets_400(auth_client):
    response = auth_client.post(BASE, content="{bad", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
