"""Tests for the storage REST client."""

import json

import httpx
import pytest

from src.lamyda.core.exceptions import StorageError
from src.lamyda.storage import SupabaseStorage

pytestmark = pytest.mark.unit

BASE = "https://abc.supabase.co"


def make_storage(handler) -> SupabaseStorage:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SupabaseStorage(BASE + "/", "service-key", "process-files", client=client)


async def test_upload_posts_bytes_with_headers():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"Key": "process-files/p/1.pdf"})

    storage = make_storage(handler)
    await storage.upload("p/1.pdf", b"%PDF", "application/pdf")

    (request,) = seen
    assert request.method == "POST"
    assert str(request.url) == f"{BASE}/storage/v1/object/process-files/p/1.pdf"
    assert request.headers["authorization"] == "Bearer service-key"
    assert request.headers["apikey"] == "service-key"
    assert request.headers["content-type"] == "application/pdf"
    assert request.headers["x-upsert"] == "false"
    assert request.content == b"%PDF"


async def test_upload_rejection_raises():
    storage = make_storage(lambda request: httpx.Response(409, json={"error": "Duplicate"}))

    with pytest.raises(StorageError, match="409"):
        await storage.upload("p/1.pdf", b"x", "application/pdf")


async def test_transport_failure_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route to host", request=request)

    storage = make_storage(handler)

    with pytest.raises(StorageError) as exc_info:
        await storage.upload("p/1.pdf", b"x", "application/pdf")
    assert isinstance(exc_info.value.original_error, httpx.ConnectError)


def test_public_url():
    storage = make_storage(lambda request: httpx.Response(200))

    assert (
        storage.public_url("process-images/1-a.png")
        == f"{BASE}/storage/v1/object/public/process-files/process-images/1-a.png"
    )


async def test_remove_sends_prefixes():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    storage = make_storage(handler)
    await storage.remove(["p/1.pdf", "p/2.pdf"])

    (request,) = seen
    assert request.method == "DELETE"
    assert str(request.url) == f"{BASE}/storage/v1/object/process-files"
    assert json.loads(request.content) == {"prefixes": ["p/1.pdf", "p/2.pdf"]}


async def test_remove_nothing_makes_no_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("unexpected request")

    await make_storage(handler).remove([])


async def test_remove_failure_raises():
    storage = make_storage(lambda request: httpx.Response(500))

    with pytest.raises(StorageError):
        await storage.remove(["p/1.pdf"])
