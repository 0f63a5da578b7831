"""
Test Locations API

This module tests locations and their treatment links including:
- Listing and featured fallback
- Detail with related records
- Cascading deletion
- Link conflicts
- Null rejection on update
"""

import pytest
from bson import ObjectId

from careadmin.shared.database import LOCATION_TREATMENTS, LOCATIONS, STAFF, TESTIMONIALS, TREATMENTS
from careadmin.shared.exceptions import UNAUTHORIZED_MESSAGE

BASE = "/api/center/locations"

NEW_LOCATION = {
    "name": "Denver",
    "address": "1 Main St",
    "city": "Denver",
    "state": "CO",
    "zipCode": "80202",
    "phone": "555-0100",
}


def seed_location(fake_db, name, **fields):
    doc = dict(name=name, address="a", city="c", state="s", zip_code="z", phone="p", **fields)
    return str(fake_db[LOCATIONS].seed(doc))


def test_list_by_sort_order(test_client, fake_db):
    seed_location(fake_db, "B", sort_order=2)
    seed_location(fake_db, "A", sort_order=1)

    response = test_client.get(BASE)

    assert [loc["name"] for loc in response.json()] == ["A", "B"]


def test_featured_locations(test_client, fake_db):
    seed_location(fake_db, "A", sort_order=1)
    seed_location(fake_db, "B", sort_order=2, featured_on_homepage=True)

    response = test_client.get(f"{BASE}/featured")

    assert [loc["name"] for loc in response.json()] == ["B"]


def test_featured_falls_back_to_first_three(test_client, fake_db):
    for i in range(5):
        seed_location(fake_db, f"L{i}", sort_order=i)

    response = test_client.get(f"{BASE}/featured")

    assert [loc["name"] for loc in response.json()] == ["L0", "L1", "L2"]


def test_create_with_defaults(auth_client):
    response = auth_client.post(BASE, json=NEW_LOCATION)

    assert response.status_code == 201
    body = response.json()
    assert body["zipCode"] == "80202"
    assert body["featuredOnHomepage"] is False
    assert body["tagline"] == "Leading Eating Disorder Treatment"


def test_create_missing_required_field(auth_client):
    incomplete = dict(NEW_LOCATION)
    del incomplete["phone"]

    assert auth_client.post(BASE, json=incomplete).status_code == 400


@pytest.mark.parametrize("method", ["put", "patch"])
def test_update(auth_client, fake_db, method):
    location_id = seed_location(fake_db, "Old")

    response = getattr(auth_client, method)(f"{BASE}/{location_id}", json={"name": "New", "featuredOnHomepage": True})

    assert response.status_code == 200
    assert response.json()["name"] == "New"
    assert response.json()["featuredOnHomepage"] is True
    assert response.json()["city"] == "c"


def test_detail_includes_related(test_client, fake_db):
    location_id = seed_location(fake_db, "Denver")
    treatment_id = str(fake_db[TREATMENTS].seed({"name": "Residential"}))
    fake_db[LOCATION_TREATMENTS].seed({"location_id": location_id, "treatment_id": treatment_id})
    fake_db[STAFF].seed({"name": "Dr. B", "title": "MD", "location_id": location_id, "sort_order": 2})
    fake_db[STAFF].seed({"name": "Dr. A", "title": "MD", "location_id": location_id, "sort_order": 1})
    fake_db[TESTIMONIALS].seed({"quote": "Great", "author": "J", "location_id": location_id})

    response = test_client.get(f"{BASE}/{location_id}")

    assert response.status_code == 200
    body = response.json()
    assert [s["name"] for s in body["staff"]] == ["Dr. A", "Dr. B"]
    assert [t["name"] for t in body["treatments"]] == ["Residential"]
    assert body["testimonials"][0]["quote"] == "Great"


def test_detail_errors(test_client):
    assert test_client.get(f"{BASE}/bad").json() == {"error": "Invalid location ID"}
    assert test_client.get(f"{BASE}/{ObjectId()}").json() == {"error": "Location not found"}


def test_by_treatment(test_client, fake_db):
    denver = seed_location(fake_db, "Denver")
    seed_location(fake_db, "Austin")
    treatment_id = str(fake_db[TREATMENTS].seed({"name": "PHP"}))
    fake_db[LOCATION_TREATMENTS].seed({"location_id": denver, "treatment_id": treatment_id})

    response = test_client.get(f"{BASE}/by-treatment/{treatment_id}")

    assert [loc["name"] for loc in response.json()] == ["Denver"]


def test_delete_cascades(auth_client, fake_db):
    location_id = seed_location(fake_db, "Denver")
    other_id = seed_location(fake_db, "Austin")
    fake_db[LOCATION_TREATMENTS].seed({"location_id": location_id, "treatment_id": "t"})
    fake_db[TESTIMONIALS].seed({"quote": "q", "author": "a", "location_id": location_id})
    fake_db[STAFF].seed({"name": "n", "title": "t", "location_id": location_id})
    fake_db[STAFF].seed({"name": "keep", "title": "t", "location_id": other_id})

    response = auth_client.delete(f"{BASE}/{location_id}")

    assert response.json() == {"success": True}
    assert [loc["name"] for loc in fake_db[LOCATIONS].docs] == ["Austin"]
    assert fake_db[LOCATION_TREATMENTS].docs == []
    assert fake_db[TESTIMONIALS].docs == []
    assert [s["name"] for s in fake_db[STAFF].docs] == ["keep"]


def test_link_treatment(auth_client, fake_db):
    location_id = seed_location(fake_db, "Denver")
    treatment_id = str(fake_db[TREATMENTS].seed({"name": "IOP"}))
    url = f"{BASE}/{location_id}/treatments/{treatment_id}"

    created = auth_client.post(url)
    assert created.status_code == 201
    assert created.json()["locationId"] == location_id
    assert created.json()["treatmentId"] == treatment_id

    duplicate = auth_client.post(url)
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "Association already exists"}

    assert auth_client.delete(url).json() == {"success": True}
    assert auth_client.delete(url).status_code == 404


def test_link_missing_side(auth_client, fake_db):
    location_id = seed_location(fake_db, "Denver")

    response = auth_client.post(f"{BASE}/{location_id}/treatments/{ObjectId()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Treatment not found"}


def test_mutations_require_session(test_client, fake_db):
    location_id = seed_location(fake_db, "Denver")

    assert test_client.post(BASE, json=NEW_LOCATION).status_code == 401
    assert test_client.delete(f"{BASE}/{location_id}").status_code == 401
    assert len(fake_db[LOCATIONS].docs) == 1


@pytest.mark.parametrize("field", ["name", "zipCode", "phone", "tagline", "sortOrder", "featuredOnHomepage"])
def test_update_rejects_null_for_stored_fields(auth_client, fake_db, field):
    location_id = seed_location(fake_db, "Denver")

    response = auth_client.patch(f"{BASE}/{location_id}", json={field: None})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
    assert fake_db[LOCATIONS].docs[0]["name"] == "Denver"
    assert "tagline" not in fake_db[LOCATIONS].docs[0]
    assert auth_client.get(BASE).status_code == 200


def test_update_clears_optional_field(auth_client, fake_db):
    location_id = seed_location(fake_db, "Denver", email="denver@example.com")

    response = auth_client.put(f"{BASE}/{location_id}", json={"email": None})

    assert response.status_code == 200
    assert response.json()["email"] is None
    assert response.json()["name"] == "Denver"


def test_unauthenticated_malformed_body_gets_401(test_client, fake_db):
    response = test_client.post(BASE, content="{bad", headers={"Content-Type": "application/json"})

    assert response.status_code == 401
    assert response.json() == {"error": UNAUTHORIZED_MESSAGE}
    assert fake_db[LOCATIONS].docs == []
