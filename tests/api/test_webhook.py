"""
Webhook tests: secret path, background dispatch, upload -> listing freshness
"""
import pytest
from fastapi import status

from catalog_bot.services.resolution_service import NOT_FOUND_TEXT
from catalog_bot.services.upload_service import UNAUTHORIZED_TEXT
from tests.factories import ADMIN_ID, USER_ID, WEBHOOK_SECRET, start_update, video_update


class TestWebhookRouting:

    @pytest.mark.asyncio
    async def test_only_secret_path_accepts_updates(self, client):
        response = await client.post("/not-the-secret", json=start_update())
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_start_without_payload_gets_welcome(self, client, container, transport):
        response = await client.post(f"/{WEBHOOK_SECRET}", json=start_update())
        await container.dispatcher.drain()

        assert response.json() == {"ok": True}
        chat_id, text = transport.reply.await_args.args
        assert chat_id == USER_ID
        assert "Welcome" in text

    @pytest.mark.asyncio
    async def test_start_with_unknown_id(self, client, container, transport):
        await client.post(f"/{WEBHOOK_SECRET}", json=start_update("video_abc123"))
        await container.dispatcher.drain()

        transport.reply.assert_awaited_once_with(USER_ID, NOT_FOUND_TEXT)

    @pytest.mark.asyncio
    async def test_irrelevant_update_is_acknowledged(self, client, container, transport):
        response = await client.post(f"/{WEBHOOK_SECRET}", json={"update_id": 9})
        await container.dispatcher.drain()

        assert response.status_code == status.HTTP_200_OK
        transport.reply.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_body_rejected(self, client):
        response = await client.post(
            f"/{WEBHOOK_SECRET}",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestUploadThroughWebhook:

    @pytest.mark.asyncio
    async def test_non_admin_upload_rejected(self, client, container, transport):
        await client.post(f"/{WEBHOOK_SECRET}", json=video_update(user_id=USER_ID))
        await container.dispatcher.drain()

        transport.delete_message.assert_awaited_once()
        transport.reply.assert_awaited_once_with(USER_ID, UNAUTHORIZED_TEXT)
        assert (await client.get("/api/files")).json()["total"] == 0

    @pytest.mark.asyncio
    async def test_upload_is_visible_to_next_listing(self, client, container, transport):
        before = (await client.get("/api/files")).json()
        assert before["total"] == 0

        await client.post(f"/{WEBHOOK_SECRET}", json=video_update(user_id=ADMIN_ID, caption="Trailer"))
        await container.dispatcher.drain()
        transport.reply.assert_awaited_once()

        after = (await client.get("/api/files")).json()
        assert after["total"] == 1
        assert after["data"][0]["title"] == "Trailer"
        assert after["data"][0]["fileId"] == "video-file-id"
