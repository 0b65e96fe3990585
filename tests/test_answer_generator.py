import asyncio

import httpx
import openai

from docchat.pipeline.answer_generator import (
    CANNOT_ANSWER,
    CONTEXT_TOO_LONG,
    GENERATION_FAILED,
    build_exchange,
    generate_answer,
)
from docchat.pipeline.context_builder import NO_USABLE_CONTENT
from docchat.schemas.chat import ChatMessage

from conftest import FakeChatClient

CONTEXT = 'Document "a.pdf": Godišnji odmor traje 20 dana. ---'
_REQUEST = httpx.Request("POST", "https://openai.example.net/openai/deployments/gpt-4o-mini/chat/completions")


def _bad_request(code: str) -> openai.BadRequestError:
    response = httpx.Response(400, request=_REQUEST)
    return openai.BadRequestError(
        "request failed", response=response, body={"code": code, "message": "request failed"},
    )


def test_empty_context_skips_completion_call(settings):
    client = FakeChatClient()
    assert asyncio.run(generate_answer("Pitanje?", "", client, settings)) == CANNOT_ANSWER
    assert asyncio.run(generate_answer("Pitanje?", "   ", client, settings)) == CANNOT_ANSWER
    assert client.calls == []


def test_sentinel_context_skips_completion_call(settings):
    client = FakeChatClient()
    answer = asyncio.run(generate_answer("Pitanje?", NO_USABLE_CONTENT, client, settings))
    assert answer == CANNOT_ANSWER
    assert client.calls == []


def test_answer_is_trimmed_first_choice(settings):
    client = FakeChatClient(reply="  Odmor traje 20 dana. [Source: a.pdf]\n")
    answer = asyncio.run(generate_answer("Koliko traje odmor?", CONTEXT, client, settings))

    assert answer == "Odmor traje 20 dana. [Source: a.pdf]"
    call = client.calls[0]
    assert call["model"] == "gpt-4o-mini"
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 1000
    roles = [m["role"] for m in call["messages"]]
    assert roles == ["system", "user"]
    assert "Do not make up information" in call["messages"][0]["content"]
    assert "Croatian" in call["messages"][0]["content"]
    assert "[Source: DocumentName.pdf]" in call["messages"][0]["content"]
    assert CONTEXT in call["messages"][1]["content"]
    assert "Koliko traje odmor?" in call["messages"][1]["content"]


def test_context_length_exceeded_asks_for_specific_question(settings):
    client = FakeChatClient(error=_bad_request("context_length_exceeded"))
    answer = asyncio.run(generate_answer("Pitanje?", CONTEXT, client, settings))
    assert answer == CONTEXT_TOO_LONG


def test_other_api_errors_give_generic_apology(settings):
    client = FakeChatClient(error=_bad_request("content_filter"))
    assert asyncio.run(generate_answer("Pitanje?", CONTEXT, client, settings)) == GENERATION_FAILED

    client = FakeChatClient(error=openai.APIConnectionError(request=_REQUEST))
    assert asyncio.run(generate_answer("Pitanje?", CONTEXT, client, settings)) == GENERATION_FAILED
    assert len(client.calls) == 1


def test_empty_completion_gives_generic_apology(settings):
    client = FakeChatClient(reply=None)
    assert asyncio.run(generate_answer("Pitanje?", CONTEXT, client, settings)) == GENERATION_FAILED


def test_history_sits_between_system_and_question(settings):
    history = [
        ChatMessage(role="user", content="prvo"),
        ChatMessage(role="assistant", content="drugo"),
        ChatMessage(role="system", content="ignored"),
        ChatMessage(role="user", content="treće"),
    ]
    capped = settings.model_copy(update={"max_history_messages": 3})

    exchange = build_exchange("Pitanje?", CONTEXT, capped, history)

    assert [(m.role, m.content) for m in exchange.messages[1:-1]] == [
        ("assistant", "drugo"),
        ("user", "treće"),
    ]
    assert exchange.messages[0].role == "system"
    assert exchange.messages[-1].role == "user"
    assert "Pitanje?" in exchange.messages[-1].content
