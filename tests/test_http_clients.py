"""Tests for the OpenAI menu client."""

import asyncio
import json
from types import SimpleNamespace

import pytest

from school_meals.adapters.openai_menu_client import OpenAIMenuClient


class _FakeResponses:
    def __init__(self, response: SimpleNamespace) -> None:
        self.response = response
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return self.response


class _FakeOpenAI:
    def __init__(self, output_text: str, **attributes: object) -> None:
        self.responses = _FakeResponses(
            SimpleNamespace(output_text=output_text, **attributes)
        )


def _generate(client: OpenAIMenuClient, reasoning_effort: str | None = "low"):  # type: ignore[no-untyped-def]
    return asyncio.run(
        client.generate(
            model="gpt-5.2",
            reasoning_effort=reasoning_effort,
            store=False,
            schema={"type": "object"},
            prompt="Suggest a lunch",
        )
    )


def test_openai_menu_client_parses_output() -> None:
    fake = _FakeOpenAI(json.dumps({"menuSuggestions": [], "reasoning": "none"}))

    result = _generate(OpenAIMenuClient(client=fake))

    assert result == {"menuSuggestions": [], "reasoning": "none"}
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["input"] == "Suggest a lunch"
    assert payload["reasoning"] == {"effort": "low"}
    assert payload["store"] is False
    assert payload["text"]["format"]["type"] == "json_schema"
    assert payload["text"]["format"]["name"] == "menu_suggestion"
    assert payload["text"]["format"]["strict"] is True


def test_openai_menu_client_skips_reasoning_when_unset() -> None:
    fake = _FakeOpenAI(json.dumps({"menuSuggestions": [], "reasoning": ""}))

    _generate(OpenAIMenuClient(client=fake), reasoning_effort=None)

    payload = fake.responses.last_payload
    assert payload is not None
    assert "reasoning" not in payload


@pytest.mark.parametrize(
    ("fake", "message"),
    [
        (_FakeOpenAI(""), "empty"),
        (_FakeOpenAI("{not json"), "malformed"),
        (
            _FakeOpenAI(
                "{",
                status="incomplete",
                incomplete_details=SimpleNamespace(reason="max_output_tokens"),
            ),
            "max_output_tokens",
        ),
    ],
)
def test_openai_menu_client_rejects_unusable_output(
    fake: _FakeOpenAI, message: str
) -> None:
    with pytest.raises(RuntimeError, match=message):
        _generate(OpenAIMenuClient(client=fake))
