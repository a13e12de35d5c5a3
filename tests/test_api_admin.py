"""API tests for the admin aggregation views."""

from techmatch.database.config.config import settings


class TestAdminViews:
    def test_stats_count_across_tables(self, seller, buyer, admin, create_listing):
        first = create_listing(seller[0])
        create_listing(seller[0])
        admin[0].put(f"/api/admin/patents/{first['id']}/approve")
        buyer[0].post("/api/interests", json={"patent_id": first["id"]})
        buyer[0].post("/api/messages", json={"receiver_id": str(seller[1].id), "subject": "s", "content": "c"})
        admin[0].post("/api/admin/articles", json={"type": "column", "title": "T", "category": "legal"})

        stats = admin[0].get("/api/admin/stats").json()
        assert stats["users"]["total"] == 3
        assert stats["users"]["by_role"] == {"seller": 1, "buyer": 1, "admin": 1}
        assert stats["patents"]["by_approval_status"] == {"approved": 1, "pending": 1}
        assert stats["interests"] == {"total": 1, "by_status": {"pending": 1}}
        assert stats["messages"] == {"total": 1, "unread": 1}
        assert stats["articles"] == {"column": {"draft": 1}}

    def test_users_are_listed_without_password(self, seller, admin):
        users = admin[0].get("/api/admin/users").json()
        assert {u["email"] for u in users} == {seller[1].email, admin[1].email}
        assert all("password" not in u for u in users)

    def test_all_patents_include_pending(self, seller, admin, create_listing):
        patent = create_listing(seller[0])
        assert [p["id"] for p in admin[0].get("/api/admin/patents").json()] == [patent["id"]]

    def test_role_requirement_applies_to_every_admin_view(self, buyer, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_ROLE_REQUIRED", True)
        for path in ("/api/admin/stats", "/api/admin/users", "/api/admin/patents",
                     "/api/admin/patents/pending", "/api/admin/articles"):
            assert buyer[0].get(path).status_code == 403, path
