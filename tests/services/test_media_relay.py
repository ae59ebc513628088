"""
Unit tests for MediaRelay with httpx.MockTransport standing in for Telegram and GitHub
"""
import base64
import json
import re

import httpx
import pytest

from catalog_bot.exceptions import PublishFailed, SourceUnavailable
from catalog_bot.services.media_relay import MediaRelay
from catalog_bot.storage.github_client import GitHubClient
from catalog_bot.storage.telegram_client import TelegramFileClient

TOKEN = "123456:TEST-TOKEN"
IMAGE = b"\xff\xd8\xff\xe0fake-jpeg"


class FakeApis:
    """Telegram getFile/file + GitHub contents, with switchable failures."""

    def __init__(self):
        self.get_file_status = 200
        self.get_file_body = {"ok": True, "result": {"file_id": "thumb", "file_path": "thumbnails/file_1.jpg"}}
        self.download_status = 200
        self.put_status = 201
        self.raise_on = None
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.raise_on and self.raise_on in path:
            raise httpx.ReadTimeout("timed out", request=request)
        if path == f"/bot{TOKEN}/getFile":
            return httpx.Response(self.get_file_status, json=self.get_file_body)
        if path.startswith(f"/file/bot{TOKEN}/"):
            return httpx.Response(self.download_status, content=IMAGE)
        if request.method == "PUT" and path.startswith("/repos/owner/repo/contents/"):
            return httpx.Response(self.put_status, json={"content": {"path": path}})
        return httpx.Response(404)


@pytest.fixture
def apis():
    return FakeApis()


@pytest.fixture
async def relay(apis):
    async with httpx.AsyncClient(transport=httpx.MockTransport(apis)) as http:
        yield MediaRelay(
            source=TelegramFileClient(http, TOKEN),
            host=GitHubClient(http, token="gh-token", owner="owner", repo="repo", branch="main"),
        )


class TestFetchBinary:

    @pytest.mark.asyncio
    async def test_resolves_handle_then_downloads(self, relay, apis):
        data = await relay.fetch_binary("thumb")

        assert data == IMAGE
        get_file, download = apis.requests
        assert get_file.url.params["file_id"] == "thumb"
        assert download.url.path == f"/file/bot{TOKEN}/thumbnails/file_1.jpg"

    @pytest.mark.asyncio
    async def test_get_file_error_status(self, relay, apis):
        apis.get_file_status = 400
        with pytest.raises(SourceUnavailable):
            await relay.fetch_binary("thumb")

    @pytest.mark.asyncio
    async def test_get_file_not_ok_body(self, relay, apis):
        apis.get_file_body = {"ok": False, "description": "Bad Request: invalid file_id"}
        with pytest.raises(SourceUnavailable):
            await relay.fetch_binary("thumb")
        assert len(apis.requests) == 1

    @pytest.mark.asyncio
    async def test_download_error_status(self, relay, apis):
        apis.download_status = 404
        with pytest.raises(SourceUnavailable):
            await relay.fetch_binary("thumb")

    @pytest.mark.asyncio
    async def test_timeout_is_source_unavailable(self, relay, apis):
        apis.raise_on = "/file/"
        with pytest.raises(SourceUnavailable):
            await relay.fetch_binary("thumb")

    @pytest.mark.asyncio
    async def test_no_automatic_retry(self, relay, apis):
        apis.download_status = 500
        with pytest.raises(SourceUnavailable):
            await relay.fetch_binary("thumb")
        assert len(apis.requests) == 2


class TestPublish:

    @pytest.mark.asyncio
    async def test_put_contents_and_return_raw_url(self, relay, apis):
        url = await relay.publish(IMAGE, "thumbnails/x.jpg")

        assert url == "https://raw.githubusercontent.com/owner/repo/main/thumbnails/x.jpg"
        (request,) = apis.requests
        assert request.method == "PUT"
        assert request.url.path == "/repos/owner/repo/contents/thumbnails/x.jpg"
        assert request.headers["Authorization"] == "Bearer gh-token"
        body = json.loads(request.content)
        assert base64.b64decode(body["content"]) == IMAGE
        assert body["branch"] == "main"
        assert "thumbnails/x.jpg" in body["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 409, 422, 500])
    async def test_error_status_is_publish_failed(self, relay, apis, status):
        apis.put_status = status
        with pytest.raises(PublishFailed):
            await relay.publish(IMAGE, "thumbnails/x.jpg")

    @pytest.mark.asyncio
    async def test_timeout_is_publish_failed(self, relay, apis):
        apis.raise_on = "/contents/"
        with pytest.raises(PublishFailed):
            await relay.publish(IMAGE)

    @pytest.mark.asyncio
    async def test_generated_paths_are_fresh(self, relay):
        paths = {relay.generate_path() for _ in range(50)}
        assert len(paths) == 50
        for path in paths:
            assert re.fullmatch(r"thumbnails/[0-9a-f-]{36}\.jpg", path)


class TestRelay:

    @pytest.mark.asyncio
    async def test_relay_fetches_and_publishes_at_new_paths(self, relay, apis):
        first = await relay.relay("thumb")
        second = await relay.relay("thumb")

        assert first != second
        assert first.startswith("https://raw.githubusercontent.com/owner/repo/main/thumbnails/")
        puts = [r for r in apis.requests if r.method == "PUT"]
        assert len(puts) == 2
