"""API tests for the patent lifecycle and approval workflow."""

import io

import pytest

from techmatch.database.config.config import settings
from techmatch.database.entities.patent import Patent
from techmatch.database.helpers.transactionManagement import SessionFactory


def approve(admin_client, patent_id):
    resp = admin_client.put(f"/api/admin/patents/{patent_id}/approve")
    assert resp.status_code == 200, resp.text
    return resp


def insert_unowned_patent(title="Legacy listing") -> str:
    with SessionFactory() as session:
        patent = Patent(title=title, description="imported", category="energy", price=0, owner_id=None)
        session.add(patent)
        session.commit()
        return str(patent.id)


class TestCreate:
    def test_new_listing_is_available_and_pending(self, seller, create_listing):
        user_client, identity = seller
        patent = create_listing(user_client, status="sold")
        assert patent["status"] == "available"
        assert patent["approval_status"] == "pending"
        assert patent["owner_id"] == str(identity.id)
        assert patent["owner_name"] == identity.name

    def test_requires_authentication(self, client):
        assert client.post("/api/patents", json={"title": "x"}).status_code == 401

    @pytest.mark.parametrize("price, expected", [("1200", 1200.0), ("abc", 0.0), (None, 0.0), (-50, 0.0)])
    def test_price_is_coerced_to_non_negative_number(self, seller, create_listing, price, expected):
        user_client, _ = seller
        assert create_listing(user_client, price=price)["price"] == expected

    def test_patent_number_alias(self, seller, create_listing):
        user_client, _ = seller
        assert create_listing(user_client, patentNumber="JP2024-0001")["patent_number"] == "JP2024-0001"

    def test_multipart_with_image(self, seller, upload_dir):
        user_client, _ = seller
        resp = user_client.post(
            "/api/patents",
            data={"title": "Imaged", "category": "bio", "price": "300", "patentNumber": "JP-1"},
            files={"image": ("photo.PNG", io.BytesIO(b"\x89PNG fake"), "image/png")},
        )
        assert resp.status_code == 200, resp.text
        patent = resp.json()["patent"]
        assert patent["price"] == 300.0
        assert patent["patent_number"] == "JP-1"
        assert patent["image"].startswith("/uploads/")
        assert patent["image"].endswith(".png")
        assert (upload_dir / patent["image"].rsplit("/", 1)[1]).exists()

    def test_disallowed_image_extension_is_rejected(self, seller):
        user_client, _ = seller
        resp = user_client.post(
            "/api/patents",
            data={"title": "Bad"},
            files={"image": ("run.sh", io.BytesIO(b"#!/bin/sh"), "text/x-sh")},
        )
        assert resp.status_code == 400
        assert resp.json()["type"] == "ValidationError"


class TestListing:
    def test_public_scope_shows_only_approved(self, seller, admin, client, create_listing):
        user_client, _ = seller
        pending = create_listing(user_client, title="Pending one")
        approved = create_listing(user_client, title="Approved one")
        approve(admin[0], approved["id"])

        ids = [p["id"] for p in client.get("/api/patents").json()]
        assert ids == [approved["id"]]
        assert pending["id"] not in ids

    def test_mine_scope_includes_unowned_legacy_rows(self, seller, make_user, create_listing):
        user_client, _ = seller
        other_client, _ = make_user("seller")
        mine = create_listing(user_client)
        create_listing(other_client, title="Someone else's")
        legacy = insert_unowned_patent()

        ids = {p["id"] for p in user_client.get("/api/patents", params={"owner": "me"}).json()}
        assert ids == {mine["id"], legacy}

    def test_user_patents_is_strict_owner_match(self, seller, create_listing):
        user_client, _ = seller
        mine = create_listing(user_client)
        insert_unowned_patent()
        assert [p["id"] for p in user_client.get("/api/user/patents").json()] == [mine["id"]]

    def test_mine_and_all_require_authentication(self, client):
        assert client.get("/api/patents", params={"owner": "me"}).status_code == 401
        assert client.get("/api/patents", params={"owner": "all"}).status_code == 401

    def test_all_scope_returns_every_approval_state(self, seller, buyer, admin, create_listing):
        user_client, _ = seller
        first = create_listing(user_client)
        second = create_listing(user_client)
        admin[0].put(f"/api/admin/patents/{second['id']}/reject")
        ids = {p["id"] for p in buyer[0].get("/api/patents", params={"owner": "all"}).json()}
        assert ids == {first["id"], second["id"]}

    def test_all_scope_honours_admin_role_requirement(self, buyer, admin, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_ROLE_REQUIRED", True)
        assert buyer[0].get("/api/patents", params={"owner": "all"}).status_code == 403
        assert admin[0].get("/api/patents", params={"owner": "all"}).status_code == 200

    def test_unknown_owner_value_is_rejected(self, client):
        assert client.get("/api/patents", params={"owner": "them"}).status_code == 400

    def test_search_is_case_insensitive_over_title_and_description(self, seller, admin, client, create_listing):
        user_client, _ = seller
        by_title = create_listing(user_client, title="Quantum Sensor", description="")
        by_description = create_listing(user_client, title="Sensor array", description="uses QUANTUM tunnelling")
        other = create_listing(user_client, title="Cement", description="low carbon")
        for patent in (by_title, by_description, other):
            approve(admin[0], patent["id"])

        ids = {p["id"] for p in client.get("/api/patents", params={"search": "quantum"}).json()}
        assert ids == {by_title["id"], by_description["id"]}

    def test_category_and_status_filters(self, seller, admin, client, create_listing):
        user_client, _ = seller
        energy = create_listing(user_client, category="energy")
        bio = create_listing(user_client, category="bio")
        for patent in (energy, bio):
            approve(admin[0], patent["id"])
        resp = user_client.put(f"/api/patents/{bio['id']}", json={"status": "negotiation"})
        assert resp.status_code == 200

        assert [p["id"] for p in client.get("/api/patents", params={"category": "energy"}).json()] == [energy["id"]]
        assert len(client.get("/api/patents", params={"category": "all"}).json()) == 2
        assert [p["id"] for p in client.get("/api/patents", params={"status": "negotiation"}).json()] == [bio["id"]]


class TestDetail:
    def test_any_caller_can_fetch_a_pending_patent(self, seller, client, create_listing):
        patent = create_listing(seller[0])
        resp = client.get(f"/api/patents/{patent['id']}")
        assert resp.status_code == 200
        assert resp.json()["approval_status"] == "pending"

    @pytest.mark.parametrize("patent_id", ["00000000-0000-0000-0000-00000000beef", "not-a-uuid"])
    def test_unknown_id_is_404(self, client, patent_id):
        resp = client.get(f"/api/patents/{patent_id}")
        assert resp.status_code == 404
        assert resp.json()["type"] == "NotFound"


class TestUpdate:
    def test_owner_updates_supplied_fields_only(self, seller, create_listing):
        user_client, _ = seller
        patent = create_listing(user_client, title="Old", description="keep me")
        resp = user_client.put(f"/api/patents/{patent['id']}", json={"title": "New", "price": "2500"})
        assert resp.status_code == 200
        updated = resp.json()["patent"]
        assert updated["title"] == "New"
        assert updated["description"] == "keep me"
        assert updated["price"] == 2500.0

    def test_unparsable_price_keeps_existing_value(self, seller, create_listing):
        user_client, _ = seller
        patent = create_listing(user_client, price=800)
        updated = user_client.put(f"/api/patents/{patent['id']}", json={"price": "lots"}).json()["patent"]
        assert updated["price"] == 800.0

    def test_approval_status_cannot_be_changed_by_owner(self, seller, create_listing):
        user_client, _ = seller
        patent = create_listing(user_client)
        resp = user_client.put(f"/api/patents/{patent['id']}", json={"approval_status": "approved"})
        assert resp.status_code == 200
        assert resp.json()["patent"]["approval_status"] == "pending"

    def test_non_owner_is_forbidden(self, seller, buyer, create_listing):
        patent = create_listing(seller[0])
        resp = buyer[0].put(f"/api/patents/{patent['id']}", json={"title": "Hijacked"})
        assert resp.status_code == 403

    def test_invalid_availability_status(self, seller, create_listing):
        user_client, _ = seller
        patent = create_listing(user_client)
        assert user_client.put(f"/api/patents/{patent['id']}", json={"status": "gone"}).status_code == 400

    def test_missing_patent_is_404(self, seller):
        resp = seller[0].put("/api/patents/00000000-0000-0000-0000-00000000beef", json={"title": "x"})
        assert resp.status_code == 404


class TestDelete:
    def test_owner_delete_removes_row_and_image(self, seller, client, upload_dir):
        user_client, _ = seller
        resp = user_client.post(
            "/api/patents",
            data={"title": "With image"},
            files={"image": ("a.jpg", io.BytesIO(b"jpeg"), "image/jpeg")},
        )
        patent = resp.json()["patent"]
        stored = upload_dir / patent["image"].rsplit("/", 1)[1]
        assert stored.exists()

        assert user_client.delete(f"/api/patents/{patent['id']}").status_code == 200
        assert client.get(f"/api/patents/{patent['id']}").status_code == 404
        assert not stored.exists()

    def test_missing_image_file_does_not_fail_delete(self, seller, upload_dir):
        user_client, _ = seller
        resp = user_client.post(
            "/api/patents",
            data={"title": "With image"},
            files={"image": ("b.png", io.BytesIO(b"png"), "image/png")},
        )
        patent = resp.json()["patent"]
        (upload_dir / patent["image"].rsplit("/", 1)[1]).unlink()
        assert user_client.delete(f"/api/patents/{patent['id']}").status_code == 200

    def test_non_owner_is_forbidden(self, seller, buyer, client, create_listing):
        patent = create_listing(seller[0])
        assert buyer[0].delete(f"/api/patents/{patent['id']}").status_code == 403
        assert client.get(f"/api/patents/{patent['id']}").status_code == 200


class TestApproval:
    def test_approve_is_idempotent(self, seller, admin, create_listing):
        patent = create_listing(seller[0])
        first = approve(admin[0], patent["id"]).json()
        second = approve(admin[0], patent["id"]).json()
        assert first["approval_status"] == second["approval_status"] == "approved"

    def test_reject_hides_from_public(self, seller, admin, client, create_listing):
        patent = create_listing(seller[0])
        approve(admin[0], patent["id"])
        assert admin[0].put(f"/api/admin/patents/{patent['id']}/reject").status_code == 200
        assert client.get("/api/patents").json() == []

    def test_unknown_patent_is_404(self, admin):
        assert admin[0].put("/api/admin/patents/00000000-0000-0000-0000-00000000beef/approve").status_code == 404

    def test_requires_authentication(self, client):
        assert client.put("/api/admin/patents/00000000-0000-0000-0000-00000000beef/approve").status_code == 401

    def test_admin_role_requirement_is_configurable(self, seller, create_listing, monkeypatch):
        patent = create_listing(seller[0])
        monkeypatch.setattr(settings, "ADMIN_ROLE_REQUIRED", True)
        resp = seller[0].put(f"/api/admin/patents/{patent['id']}/approve")
        assert resp.status_code == 403
        assert resp.json()["type"] == "Forbidden"

    def test_pending_rows_carry_owner_details(self, make_user, admin, create_listing):
        owner_client, _ = make_user("seller", name="Dr. Owner", organization="Tohoku Lab")
        patent = create_listing(owner_client)
        insert_unowned_patent()

        rows = {row["id"]: row for row in admin[0].get("/api/admin/patents/pending").json()}
        assert rows[patent["id"]]["owner_name"] == "Dr. Owner"
        assert rows[patent["id"]]["owner"]["organization"] == "Tohoku Lab"
        legacy = [row for row in rows.values() if row["owner_id"] is None]
        assert legacy[0]["owner_name"] == "unknown"
        assert legacy[0]["owner"] is None
