"""Integration tests for the talent mailbox and the shared unread counter."""

import pytest


@pytest.fixture
async def inbound(client, studio_headers, talents) -> dict:
    """A studio message waiting in the first talent's inbox."""
    resp = await client.post(
        "/api/studio/messages",
        json={
            "talentReceiverId": talents[0].profile_id,
            "subject": "Callback",
            "content": "Can you come in Monday?",
        },
        headers=studio_headers,
    )
    assert resp.status_code == 201
    return resp.json()


class TestTalentInbox:
    async def test_list_and_read(self, client, talent_headers, inbound):
        resp = await client.get("/api/talent/messages?unread=true", headers=talent_headers)
        assert [m["id"] for m in resp.json()] == [inbound["id"]]

        resp = await client.get(f"/api/talent/messages/{inbound['id']}", headers=talent_headers)
        assert resp.status_code == 200
        assert resp.json()["isRead"] is True

        resp = await client.get("/api/talent/messages?unread=true", headers=talent_headers)
        assert resp.json() == []

    async def test_archived_hidden(self, client, talent_headers, inbound):
        resp = await client.patch(
            f"/api/talent/messages/{inbound['id']}",
            json={"isArchived": True},
            headers=talent_headers,
        )
        assert resp.status_code == 200

        resp = await client.get("/api/talent/messages", headers=talent_headers)
        assert resp.json() == []

    async def test_other_talent_is_403(self, client, login, talents, inbound):
        resp = await client.get(
            f"/api/talent/messages/{inbound['id']}", headers=login(talents[1].user_id),
        )
        assert resp.status_code == 403

    async def test_studio_cannot_use_talent_mailbox(self, client, studio_headers):
        resp = await client.get("/api/talent/messages", headers=studio_headers)
        assert resp.status_code == 403


class TestTalentReply:
    async def test_reply_reaches_studio(
        self, client, studio, studio_headers, talent_headers, inbound,
    ):
        resp = await client.post(
            "/api/talent/messages",
            json={
                "originalMessageId": inbound["id"],
                "subject": "Re: Callback",
                "content": "Monday works for me.",
            },
            headers=talent_headers,
        )
        assert resp.status_code == 201
        assert resp.json()["receiver"] == {
            "kind": "studio", "id": studio.studio_id, "name": "Acme Pictures",
            "firstName": None, "lastName": None, "email": None,
        }

        received = await client.get("/api/studio/messages", headers=studio_headers)
        assert [m["content"] for m in received.json()] == ["Monday works for me."]

        sent = await client.get("/api/talent/messages?sent=true", headers=talent_headers)
        assert len(sent.json()) == 1

    async def test_reply_inherits_casting_call(
        self, client, studio_headers, talent_headers, talents, casting_call,
    ):
        await client.post(
            f"/api/studio/casting-calls/{casting_call['id']}/invitations",
            json={"talentIds": [talents[0].profile_id]},
            headers=studio_headers,
        )
        inbox = await client.get("/api/talent/messages", headers=talent_headers)
        invitation = inbox.json()[0]

        resp = await client.post(
            "/api/talent/messages",
            json={
                "originalMessageId": invitation["id"],
                "subject": "Re: invitation",
                "content": "Thanks, applying today.",
            },
            headers=talent_headers,
        )
        assert resp.json()["relatedToCastingCallId"] == casting_call["id"]

    async def test_new_thread_is_403(self, client, studio, talent_headers):
        resp = await client.post(
            "/api/talent/messages",
            json={"recipientId": studio.studio_id, "subject": "Hello", "content": "Hire me"},
            headers=talent_headers,
        )
        assert resp.status_code == 403

    async def test_reply_to_someone_elses_message_is_404(
        self, client, login, talents, inbound,
    ):
        resp = await client.post(
            "/api/talent/messages",
            json={"originalMessageId": inbound["id"], "subject": "Re", "content": "Me too"},
            headers=login(talents[1].user_id),
        )
        assert resp.status_code == 404

    async def test_redirected_reply_is_403(
        self, client, other_studio, talent_headers, inbound,
    ):
        resp = await client.post(
            "/api/talent/messages",
            json={
                "originalMessageId": inbound["id"],
                "recipientId": other_studio.studio_id,
                "subject": "Re: Callback",
                "content": "Forwarding this along.",
            },
            headers=talent_headers,
        )
        assert resp.status_code == 403


class TestUnreadCount:
    async def test_talent_count(self, client, talent_headers, inbound):
        resp = await client.get("/api/messages/unread-count", headers=talent_headers)
        assert resp.json() == {"unreadCount": 1}

        await client.get(f"/api/talent/messages/{inbound['id']}", headers=talent_headers)
        resp = await client.get("/api/messages/unread-count", headers=talent_headers)
        assert resp.json() == {"unreadCount": 0}

    async def test_studio_count(self, client, studio_headers, talent_headers, inbound):
        resp = await client.get("/api/messages/unread-count", headers=studio_headers)
        assert resp.json() == {"unreadCount": 0}

        await client.post(
            "/api/talent/messages",
            json={"originalMessageId": inbound["id"], "subject": "Re", "content": "Yes"},
            headers=talent_headers,
        )
        resp = await client.get("/api/messages/unread-count", headers=studio_headers)
        assert resp.json() == {"unreadCount": 1}

    async def test_requires_session(self, client):
        resp = await client.get("/api/messages/unread-count")
        assert resp.status_code == 401
