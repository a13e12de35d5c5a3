"""API tests for expressions of interest and direct messages."""

import uuid
from uuid import UUID

from techmatch.database.config.config import settings
from techmatch.database.entities.interest import Interest
from techmatch.database.helpers.transactionManagement import SessionFactory

MISSING = "00000000-0000-0000-0000-00000000beef"


class TestInterests:
    def test_buyer_expresses_interest(self, seller, buyer, create_listing):
        patent = create_listing(seller[0])
        buyer_client, buyer_identity = buyer
        resp = buyer_client.post("/api/interests", json={"patentId": patent["id"], "message": "Licensing terms?"})
        assert resp.status_code == 200
        interest = resp.json()["interest"]
        assert interest["status"] == "pending"
        assert interest["buyer_id"] == str(buyer_identity.id)
        assert interest["buyer_email"] == buyer_identity.email

    def test_unknown_patent_is_404(self, buyer):
        resp = buyer[0].post("/api/interests", json={"patent_id": MISSING, "message": "hi"})
        assert resp.status_code == 404

    def test_missing_patent_id_is_400(self, buyer):
        resp = buyer[0].post("/api/interests", json={"message": "hi"})
        assert resp.status_code == 400
        assert resp.json()["type"] == "ValidationError"

    def test_owner_may_express_interest_by_default(self, seller, create_listing):
        patent = create_listing(seller[0])
        assert seller[0].post("/api/interests", json={"patent_id": patent["id"]}).status_code == 200

    def test_self_interest_can_be_forbidden(self, seller, create_listing, monkeypatch):
        patent = create_listing(seller[0])
        monkeypatch.setattr(settings, "ALLOW_SELF_INTEREST", False)
        assert seller[0].post("/api/interests", json={"patent_id": patent["id"]}).status_code == 403

    def test_my_interests_lists_only_own(self, seller, buyer, make_user, create_listing):
        patent = create_listing(seller[0])
        other_client, _ = make_user("buyer")
        buyer[0].post("/api/interests", json={"patent_id": patent["id"], "message": "mine"})
        other_client.post("/api/interests", json={"patent_id": patent["id"], "message": "theirs"})

        assert [i["message"] for i in buyer[0].get("/api/my-interests").json()] == ["mine"]

    def test_user_interests_embed_the_patent(self, seller, buyer, create_listing):
        patent = create_listing(seller[0], title="Embedded")
        buyer[0].post("/api/interests", json={"patent_id": patent["id"]})
        rows = buyer[0].get("/api/user/interests").json()
        assert rows[0]["patent"]["title"] == "Embedded"

    def test_received_interests_are_normalised(self, seller, buyer, create_listing):
        patent = create_listing(seller[0], title="Received")
        buyer[0].post("/api/interests", json={"patent_id": patent["id"]})

        rows = seller[0].get("/api/patent-interests").json()
        assert len(rows) == 1
        assert rows[0]["patent_title"] == "Received"
        assert rows[0]["user_name"] == "Buyer One"
        assert rows[0]["message"] == ""

    def test_received_interests_carry_page_keys(self, seller, buyer, create_listing):
        patent = create_listing(seller[0], title="Received")
        buyer[0].post("/api/interests", json={"patent_id": patent["id"]})

        row = seller[0].get("/api/patent-interests").json()[0]
        assert row["patentId"] == patent["id"]
        assert row["patentTitle"] == "Received"
        assert row["userName"] == "Buyer One"
        assert row["createdAt"] == row["created_at"]

    def test_received_user_name_falls_back_to_email_then_label(self, seller, create_listing):
        patent = create_listing(seller[0])
        with SessionFactory() as session:
            session.add(Interest(patent_id=UUID(patent["id"]), buyer_id=uuid.uuid4(), buyer_name=None,
                                 buyer_email="anon@example.com", message="a"))
            session.add(Interest(patent_id=UUID(patent["id"]), buyer_id=uuid.uuid4(), buyer_name=None,
                                 buyer_email=None, message="b"))
            session.commit()

        names = {row["message"]: row["user_name"] for row in seller[0].get("/api/patent-interests").json()}
        assert names == {"a": "anon@example.com", "b": "Buyer"}

    def test_no_owned_patents_means_empty_list(self, buyer):
        resp = buyer[0].get("/api/patent-interests")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_per_patent_interests_are_owner_only(self, seller, buyer, create_listing):
        patent = create_listing(seller[0])
        buyer[0].post("/api/interests", json={"patent_id": patent["id"]})
        assert len(seller[0].get(f"/api/patents/{patent['id']}/interests").json()) == 1
        assert buyer[0].get(f"/api/patents/{patent['id']}/interests").status_code == 403
        assert seller[0].get(f"/api/patents/{MISSING}/interests").status_code == 404


class TestMessages:
    def test_send_and_list_for_both_parties(self, seller, buyer):
        seller_client, seller_identity = seller
        buyer_client, _ = buyer
        resp = buyer_client.post("/api/messages", json={
            "receiverId": str(seller_identity.id), "subject": "Hello", "content": "Interested",
        })
        assert resp.status_code == 200
        assert resp.json()["message_data"]["is_read"] is False
        assert resp.json()["messageData"] == resp.json()["message_data"]

        assert [m["subject"] for m in buyer_client.get("/api/messages").json()] == ["Hello"]
        assert [m["subject"] for m in seller_client.get("/api/messages").json()] == ["Hello"]

    def test_receiver_need_not_exist(self, buyer):
        resp = buyer[0].post("/api/messages", json={"receiver_id": MISSING, "subject": "?", "content": "?"})
        assert resp.status_code == 200

    def test_only_receiver_marks_read(self, seller, buyer):
        seller_client, seller_identity = seller
        buyer_client, _ = buyer
        message = buyer_client.post("/api/messages", json={
            "receiver_id": str(seller_identity.id), "subject": "s", "content": "c",
        }).json()["message_data"]

        assert buyer_client.put(f"/api/messages/{message['id']}/read").status_code == 403
        assert seller_client.put(f"/api/messages/{message['id']}/read").status_code == 200
        assert seller_client.get("/api/messages").json()[0]["is_read"] is True

    def test_unknown_message_is_404(self, seller):
        assert seller[0].put(f"/api/messages/{MISSING}/read").status_code == 404

    def test_unrelated_user_sees_nothing(self, seller, buyer, make_user):
        buyer[0].post("/api/messages", json={"receiver_id": str(seller[1].id), "subject": "s", "content": "c"})
        outsider, _ = make_user("buyer")
        assert outsider.get("/api/messages").json() == []
