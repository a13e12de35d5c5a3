"""API tests for admin article management and the public content endpoints."""

import inspect
from datetime import datetime

import pytest

from techmatch.api import fast_api

MISSING = "00000000-0000-0000-0000-00000000beef"


def create(admin_client, **fields):
    body = {"type": "column", "title": "Licensing 101", "category": "patent-basics",
            "excerpt": "<p>Intro</p>", "content": "<p>" + "本文" * 400 + "</p>"}
    body.update(fields)
    resp = admin_client.post("/api/admin/articles", json=body)
    assert resp.status_code == 200, resp.text
    return resp.json()["article"]


class TestAdminArticles:
    def test_create_defaults_to_draft(self, admin):
        article = create(admin[0])
        assert article["status"] == "draft"
        assert article["created_at"] == article["updated_at"]

    @pytest.mark.parametrize("missing", ["type", "title", "category"])
    def test_create_requires_type_title_and_category(self, admin, missing):
        body = {"type": "column", "title": "T", "category": "legal", missing: ""}
        resp = admin[0].post("/api/admin/articles", json=body)
        assert resp.status_code == 400
        assert resp.json()["type"] == "ValidationError"

    def test_unknown_type_is_rejected(self, admin):
        resp = admin[0].post("/api/admin/articles", json={"type": "podcast", "title": "T", "category": "c"})
        assert resp.status_code == 400

    def test_list_includes_drafts_and_filters_by_type(self, admin):
        create(admin[0], status="published")
        create(admin[0])
        create(admin[0], type="interview", category="startup")
        assert len(admin[0].get("/api/admin/articles").json()) == 3
        columns = admin[0].get("/api/admin/articles", params={"type": "column"}).json()
        assert {a["status"] for a in columns} == {"draft", "published"}

    def test_update_bumps_updated_at(self, admin):
        article = create(admin[0])
        resp = admin[0].put(f"/api/admin/articles/{article['id']}", json={"status": "published", "title": "Renamed"})
        assert resp.status_code == 200
        updated = resp.json()["article"]
        assert updated["title"] == "Renamed"
        assert updated["status"] == "published"
        assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(article["updated_at"])
        assert updated["content"] == article["content"]

    def test_update_cannot_blank_title(self, admin):
        article = create(admin[0])
        assert admin[0].put(f"/api/admin/articles/{article['id']}", json={"title": ""}).status_code == 400

    def test_get_and_delete(self, admin):
        article = create(admin[0])
        assert admin[0].get(f"/api/admin/articles/{article['id']}").json()["content"] == article["content"]
        assert admin[0].delete(f"/api/admin/articles/{article['id']}").status_code == 200
        assert admin[0].get(f"/api/admin/articles/{article['id']}").status_code == 404

    def test_missing_article_is_404(self, admin):
        assert admin[0].put(f"/api/admin/articles/{MISSING}", json={"title": "x"}).status_code == 404
        assert admin[0].delete(f"/api/admin/articles/{MISSING}").status_code == 404

    def test_requires_authentication(self, client):
        assert client.get("/api/admin/articles").status_code == 401


class TestPublicContent:
    def test_published_local_articles_are_served(self, admin, client):
        published = create(admin[0], status="published")
        create(admin[0], title="Still a draft")

        columns = client.get("/api/columns").json()
        assert [c["id"] for c in columns] == [str(published["id"])]
        assert "content" not in columns[0]
        assert columns[0]["description"] == "Intro"
        assert columns[0]["read_time"] == 2

    def test_detail_includes_content(self, admin, client):
        published = create(admin[0], status="published")
        detail = client.get(f"/api/columns/{published['id']}").json()
        assert detail["content"].startswith("<p>")
        assert detail["read_time"] == 2
        assert detail["readTime"] == "2分"

    def test_type_mismatch_is_404(self, admin, client):
        published = create(admin[0], status="published")
        resp = client.get(f"/api/interviews/{published['id']}")
        assert resp.status_code == 404

    def test_drafts_are_not_public(self, admin, client):
        draft = create(admin[0])
        assert client.get(f"/api/columns/{draft['id']}").status_code == 404

    def test_samples_when_nothing_is_published(self, client):
        interviews = client.get("/api/interviews").json()
        assert interviews
        assert all(i["id"].startswith("sample-interview-") for i in interviews)
        assert client.get("/api/interviews/sample-interview-1").json()["researcher"]

    def test_category_filter(self, client):
        columns = client.get("/api/columns", params={"category": "legal"}).json()
        assert columns == []
        columns = client.get("/api/columns", params={"category": "case-study"}).json()
        assert [c["id"] for c in columns] == ["sample-column-3"]

    @pytest.mark.parametrize("handler", [
        fast_api.list_columns, fast_api.get_column, fast_api.list_interviews, fast_api.get_interview,
    ])
    def test_content_routes_are_sync_so_remote_calls_leave_the_event_loop_free(self, handler):
        assert not inspect.iscoroutinefunction(handler)
