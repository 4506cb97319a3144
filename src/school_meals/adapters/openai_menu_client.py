"""OpenAI Responses API client for menu suggestions."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from school_meals.services.menus import MenuClient

SCHEMA_NAME = "menu_suggestion"


@dataclass
class OpenAIMenuClient(MenuClient):
    """Menu client that asks the Responses API for schema-constrained JSON."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIMenuClient":
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Send a text-only prompt and decode the structured reply."""
        options: dict[str, object] = {"store": store}
        if reasoning_effort:
            options["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(
            model=model,
            input=prompt,
            text={"format": _json_schema_format(schema)},
            **options,
        )
        if getattr(response, "status", None) == "incomplete":
            details = getattr(response, "incomplete_details", None)
            reason = getattr(details, "reason", None) or "unknown reason"
            raise RuntimeError(f"OpenAI response was incomplete: {reason}")
        if not response.output_text:
            raise RuntimeError("OpenAI returned an empty response")
        try:
            return json.loads(response.output_text)
        except json.JSONDecodeError as exc:
            raise RuntimeError("OpenAI returned malformed JSON") from exc

    async def close(self) -> None:
        await self.client.close()


def _json_schema_format(schema: dict[str, object]) -> dict[str, object]:
    return {
        "type": "json_schema",
        "name": SCHEMA_NAME,
        "strict": True,
        "schema": schema,
    }
