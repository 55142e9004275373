"""OpenAI Responses API client for structured inference."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from nutri_coach.services.inference import InferenceClient, MediaPart, Part, TextPart

_FILE_EXTENSIONS = {"audio/webm": "webm", "image/jpeg": "jpg"}


@dataclass
class OpenAIInferenceClient(InferenceClient):
    """Inference client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIInferenceClient":
        """Create an OpenAI inference client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        parts: list[Part],
        schema: dict[str, object],
        schema_name: str,
    ) -> str:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [_to_content(part) for part in parts],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _to_content(part: Part) -> dict[str, object]:
    """Map a request part to a Responses API content item."""
    if isinstance(part, TextPart):
        return {"type": "input_text", "text": part.text}
    if isinstance(part, MediaPart) and part.mime_type.startswith("image/"):
        return {"type": "input_image", "image_url": part.to_data_url()}
    extension = _FILE_EXTENSIONS.get(part.mime_type, "bin")
    return {
        "type": "input_file",
        "filename": f"input.{extension}",
        "file_data": part.to_data_url(),
    }
