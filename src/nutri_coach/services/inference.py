"""Interface to the structured-output inference service."""

from dataclasses import dataclass
from typing import Protocol

IMAGE_MIME_TYPE = "image/jpeg"
AUDIO_MIME_TYPE = "audio/webm"


@dataclass(frozen=True)
class TextPart:
    """Plain text content."""

    text: str


@dataclass(frozen=True)
class MediaPart:
    """Binary content as base64 without any data URL header."""

    mime_type: str
    data: str

    def to_data_url(self) -> str:
        """Return the payload as a data URL."""
        return f"data:{self.mime_type};base64,{self.data}"


Part = TextPart | MediaPart


class InferenceClient(Protocol):
    """Interface for LLM calls constrained by a JSON schema."""

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
        """Return the raw text of the structured response."""
