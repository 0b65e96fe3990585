from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable

import httpx
import pytest

from docchat.core.config import Settings
from docchat.services import llm
from docchat.services.search import SearchClient
from docchat.services.storage import StoredBlob, StorageServiceError


class WordEncoder:
    """Offline stand-in for a tiktoken encoding: one token per word."""

    def encode(self, text: str) -> list[str]:
        return text.split()


@pytest.fixture(autouse=True)
def offline_token_encoder(monkeypatch):
    monkeypatch.setattr(llm, "_encoder", WordEncoder())


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        azure_search_endpoint="https://search.example.net/",
        azure_search_index="trio",
        azure_search_api_key="search-key",
        azure_storage_account_name="account",
        azure_storage_account_key="c3RvcmFnZS1rZXk=",
        azure_storage_container_name="uploads",
        azure_openai_endpoint="https://openai.example.net",
        azure_openai_api_key="openai-key",
        azure_openai_deployment_name="gpt-4o-mini",
        azure_cv_endpoint="https://vision.example.net",
        azure_cv_key="cv-key",
    )


def mock_http(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def search_returning(hits: list[dict], seen: list | None = None) -> Callable:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(200, json={"value": hits})
    return handler


@pytest.fixture
def make_search_client(settings):
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> SearchClient:
        return SearchClient(settings, mock_http(handler))
    return _make


class FakeChatClient:
    """Stands in for AsyncAzureOpenAI: ``client.chat.completions.create``."""

    def __init__(self, reply: str | None = "Odgovor.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeStorage:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads: list[tuple[bytes, str, str | None]] = []

    async def upload(self, data: bytes, filename: str, content_type: str | None) -> StoredBlob:
        if self.fail:
            raise StorageServiceError("container unreachable")
        self.uploads.append((data, filename, content_type))
        name = f"1700000000000-{filename}"
        return StoredBlob(name=name, url=f"https://account.blob.core.windows.net/uploads/{name}")

    def close(self) -> None:
        pass


@pytest.fixture
def fake_chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()
