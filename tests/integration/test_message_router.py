"""Integration tests for the studio mailbox endpoints."""

import pytest

from castdesk.accounts.service import AccountService
from castdesk.messaging.models import MessageModel, Party


async def _send(client, headers, profile_id, subject="Callback", content="See you Monday", **extra):
    return await client.post(
        "/api/studio/messages",
        json={"talentReceiverId": profile_id, "subject": subject, "content": content, **extra},
        headers=headers,
    )


async def _talent_to_studio(app_db, talent, studio, content="Thanks for the invite"):
    async with app_db.get_session() as session:
        message = MessageModel(subject="Re: Callback", content=content)
        message.set_parties(Party("talent", talent.profile_id), Party("studio", studio.studio_id))
        session.add(message)
        await session.flush()
        return message.id


class TestAuthentication:
    async def test_no_session_is_401(self, client):
        resp = await client.get("/api/studio/messages")
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}

    async def test_garbage_cookie_is_401(self, client):
        resp = await client.get(
            "/api/studio/messages", headers={"Cookie": "castdesk_session=not-a-token"},
        )
        assert resp.status_code == 401

    async def test_talent_tenant_is_403(self, client, talent_headers):
        resp = await client.get("/api/studio/messages", headers=talent_headers)
        assert resp.status_code == 403
        assert "studio" in resp.json()["error"]


class TestSendMessage:
    async def test_send_to_talent(self, client, studio, studio_headers, talents):
        resp = await _send(client, studio_headers, talents[0].profile_id)
        assert resp.status_code == 201
        data = resp.json()
        assert data["sender"] == {
            "kind": "studio", "id": studio.studio_id, "name": "Acme Pictures",
            "firstName": None, "lastName": None, "email": None,
        }
        assert data["receiver"]["kind"] == "talent"
        assert data["receiver"]["id"] == talents[0].profile_id
        assert data["receiver"]["email"] == "ana@talent.test"
        assert data["isRead"] is False
        assert data["isArchived"] is False

    async def test_recipient_id_alias(self, client, studio_headers, talents):
        resp = await client.post(
            "/api/studio/messages",
            json={"recipientId": talents[1].profile_id, "subject": "Hi", "content": "Hello"},
            headers=studio_headers,
        )
        assert resp.status_code == 201
        assert resp.json()["receiver"]["id"] == talents[1].profile_id

    async def test_unknown_recipient_is_404(self, client, studio_headers):
        resp = await _send(client, studio_headers, "no-such-profile")
        assert resp.status_code == 404
        assert resp.json()["error"] == "Talent profile not found"

    async def test_missing_content_is_400(self, client, studio_headers, talents):
        resp = await _send(client, studio_headers, talents[0].profile_id, content="")
        assert resp.status_code == 400
        data = resp.json()
        assert data["error"] == "Invalid input data"
        assert any("content" in err["loc"] for err in data["details"])

    async def test_missing_recipient_is_400(self, client, studio_headers):
        resp = await client.post(
            "/api/studio/messages",
            json={"subject": "Hi", "content": "Hello"},
            headers=studio_headers,
        )
        assert resp.status_code == 400

    async def test_related_casting_call_must_be_own(
        self, client, studio_headers, other_studio_headers, talents, casting_call,
    ):
        resp = await _send(
            client, other_studio_headers, talents[0].profile_id,
            relatedToCastingCallId=casting_call["id"],
        )
        assert resp.status_code == 404

        resp = await _send(
            client, studio_headers, talents[0].profile_id,
            relatedToCastingCallId=casting_call["id"],
        )
        assert resp.status_code == 201
        assert resp.json()["relatedToCastingCall"]["title"] == casting_call["title"]


class TestListMessages:
    async def test_sent_and_received_are_separate(
        self, client, app_db, studio, studio_headers, talents,
    ):
        await _send(client, studio_headers, talents[0].profile_id, subject="First")
        await _send(client, studio_headers, talents[1].profile_id, subject="Second")
        await _talent_to_studio(app_db, talents[0], studio)

        sent = await client.get("/api/studio/messages?sent=true", headers=studio_headers)
        assert sent.status_code == 200
        assert [m["subject"] for m in sent.json()] == ["Second", "First"]

        received = await client.get("/api/studio/messages", headers=studio_headers)
        assert received.status_code == 200
        items = received.json()
        assert len(items) == 1
        assert items[0]["sender"]["firstName"] == "Ana"
        assert items[0]["sender"]["lastName"] == "Actor"

    async def test_other_studio_sees_nothing(
        self, client, studio_headers, other_studio_headers, talents,
    ):
        await _send(client, studio_headers, talents[0].profile_id)
        resp = await client.get("/api/studio/messages?sent=true", headers=other_studio_headers)
        assert resp.json() == []


class TestGetMessage:
    async def test_inbound_message_marked_read(
        self, client, app_db, studio, studio_headers, talents,
    ):
        message_id = await _talent_to_studio(app_db, talents[0], studio)

        first = await client.get(f"/api/studio/messages/{message_id}", headers=studio_headers)
        assert first.status_code == 200
        assert first.json()["isRead"] is True

        # Repeated reads converge, never toggle back
        for _ in range(2):
            again = await client.get(f"/api/studio/messages/{message_id}", headers=studio_headers)
            assert again.json()["isRead"] is True

    async def test_outbound_message_not_marked_read(
        self, client, studio_headers, talents,
    ):
        sent = await _send(client, studio_headers, talents[0].profile_id)
        resp = await client.get(f"/api/studio/messages/{sent.json()['id']}", headers=studio_headers)
        assert resp.status_code == 200
        assert resp.json()["isRead"] is False

    async def test_other_tenant_is_403(
        self, client, studio_headers, other_studio_headers, talents,
    ):
        sent = await _send(client, studio_headers, talents[0].profile_id)
        resp = await client.get(
            f"/api/studio/messages/{sent.json()['id']}", headers=other_studio_headers,
        )
        assert resp.status_code == 403

    async def test_foreign_read_does_not_mark_read(
        self, client, app_db, studio, studio_headers, other_studio_headers, talents,
    ):
        message_id = await _talent_to_studio(app_db, talents[0], studio)
        resp = await client.get(f"/api/studio/messages/{message_id}", headers=other_studio_headers)
        assert resp.status_code == 403

        async with app_db.get_session() as session:
            message = await session.get(MessageModel, message_id)
            assert message.is_read is False

    async def test_unknown_message_is_404(self, client, studio_headers):
        resp = await client.get("/api/studio/messages/missing", headers=studio_headers)
        assert resp.status_code == 404


class TestUpdateMessage:
    async def test_archive(self, client, studio_headers, talents):
        sent = await _send(client, studio_headers, talents[0].profile_id)
        resp = await client.patch(
            f"/api/studio/messages/{sent.json()['id']}",
            json={"isArchived": True},
            headers=studio_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["isArchived"] is True
        assert resp.json()["isRead"] is False

    async def test_foreign_patch_is_403_and_unchanged(
        self, client, app_db, studio_headers, other_studio_headers, talents,
    ):
        sent = await _send(client, studio_headers, talents[0].profile_id)
        message_id = sent.json()["id"]

        resp = await client.patch(
            f"/api/studio/messages/{message_id}",
            json={"isArchived": True},
            headers=other_studio_headers,
        )
        assert resp.status_code == 403

        async with app_db.get_session() as session:
            message = await session.get(MessageModel, message_id)
            assert message.is_archived is False

    async def test_non_boolean_is_400(self, client, studio_headers, talents):
        sent = await _send(client, studio_headers, talents[0].profile_id)
        resp = await client.patch(
            f"/api/studio/messages/{sent.json()['id']}",
            json={"isRead": "yes"},
            headers=studio_headers,
        )
        assert resp.status_code == 400

    async def test_unknown_field_is_400(self, client, studio_headers, talents):
        sent = await _send(client, studio_headers, talents[0].profile_id)
        resp = await client.patch(
            f"/api/studio/messages/{sent.json()['id']}",
            json={"content": "rewritten"},
            headers=studio_headers,
        )
        assert resp.status_code == 400


class TestDeleteMessage:
    async def test_delete_then_get_is_404(self, client, studio_headers, talents):
        sent = await _send(client, studio_headers, talents[0].profile_id)
        message_id = sent.json()["id"]

        resp = await client.delete(f"/api/studio/messages/{message_id}", headers=studio_headers)
        assert resp.status_code == 204

        resp = await client.get(f"/api/studio/messages/{message_id}", headers=studio_headers)
        assert resp.status_code == 404

    async def test_foreign_delete_is_403(
        self, client, studio_headers, other_studio_headers, talents,
    ):
        sent = await _send(client, studio_headers, talents[0].profile_id)
        message_id = sent.json()["id"]

        resp = await client.delete(
            f"/api/studio/messages/{message_id}", headers=other_studio_headers,
        )
        assert resp.status_code == 403

        resp = await client.get(f"/api/studio/messages/{message_id}", headers=studio_headers)
        assert resp.status_code == 200


@pytest.fixture
async def bare_studio_user(app_db) -> str:
    """A studio-tenant user whose studio row was never created."""
    svc = AccountService()
    async with app_db.get_session() as session:
        tenant = await svc.create_tenant(session, "Fresh Co", "STUDIO")
        user = await svc.create_user(session, "new@fresh.test", tenant_id=tenant.id)
        return user.id


class TestStudioWithoutProfile:
    async def test_mailbox_routes_are_404(self, client, bare_studio_user, login):
        headers = login(bare_studio_user)

        resp = await client.get("/api/studio/messages", headers=headers)
        assert resp.status_code == 404
        assert resp.json()["error"] == "Studio profile not found"

    async def test_message_routes_are_403(
        self, client, bare_studio_user, login, studio_headers, talents,
    ):
        sent = await _send(client, studio_headers, talents[0].profile_id)
        url = f"/api/studio/messages/{sent.json()['id']}"
        headers = login(bare_studio_user)

        assert (await client.get(url, headers=headers)).status_code == 403
        resp = await client.patch(url, json={"isArchived": True}, headers=headers)
        assert resp.status_code == 403
        assert (await client.delete(url, headers=headers)).status_code == 403

        resp = await client.get(url, headers=studio_headers)
        assert resp.status_code == 200
        assert resp.json()["isArchived"] is False

    async def test_casting_call_routes_are_403(
        self, client, bare_studio_user, login, casting_call, talents,
    ):
        base = f"/api/studio/casting-calls/{casting_call['id']}"
        headers = login(bare_studio_user)

        assert (await client.get(base, headers=headers)).status_code == 403
        assert (await client.get(f"{base}/applications", headers=headers)).status_code == 403
        assert (await client.get(f"{base}/invitations", headers=headers)).status_code == 403
        resp = await client.post(
            f"{base}/invitations",
            json={"talentIds": [talents[0].profile_id]},
            headers=headers,
        )
        assert resp.status_code == 403
