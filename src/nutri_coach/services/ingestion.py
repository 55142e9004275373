"""Multimodal meal ingestion via the inference service."""

import base64
import binascii
import logging
from dataclasses import dataclass
from enum import StrEnum

from pydantic import ValidationError

from nutri_coach.domain.meals import MealDraft
from nutri_coach.services.inference import (
    AUDIO_MIME_TYPE,
    IMAGE_MIME_TYPE,
    InferenceClient,
    MediaPart,
    Part,
    TextPart,
)

_logger = logging.getLogger(__name__)

INGESTION_FAILURE_MESSAGE = "Could not process the meal. Please try again."

MEAL_PROMPT = (
    "Analyze the meal. Strict JSON: "
    '{ "name": string, "calories": number, "protein": number, '
    '"carbs": number, "fat": number }.'
)

MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "calories": {"type": "number"},
        "protein": {"type": "number"},
        "carbs": {"type": "number"},
        "fat": {"type": "number"},
    },
    "required": ["name", "calories", "protein", "carbs", "fat"],
    "additionalProperties": False,
}


class IngestionError(StrEnum):
    """Reason an ingestion attempt failed."""

    EMPTY_INPUT = "empty_input"
    INVALID_MEDIA = "invalid_media"
    REMOTE_ERROR = "remote_error"
    EMPTY_RESPONSE = "empty_response"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class MultimodalInput:
    """Raw user input for a meal: any mix of text, photo and voice.

    Media values are base64 strings, optionally with a data URL header,
    or raw bytes.
    """

    text: str | None = None
    image: str | bytes | None = None
    audio: str | bytes | None = None

    @property
    def is_empty(self) -> bool:
        """Return True when there is nothing to send."""
        has_text = bool(self.text and self.text.strip())
        return not (has_text or self.image or self.audio)


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of one ingestion attempt: a draft or an error."""

    draft: MealDraft | None = None
    error: IngestionError | None = None

    @property
    def ok(self) -> bool:
        """Return True when a draft was produced."""
        return self.draft is not None

    @property
    def message(self) -> str | None:
        """Return the user-facing message for a failure."""
        return INGESTION_FAILURE_MESSAGE if self.error else None


class InvalidMediaError(ValueError):
    """Raised when a media payload is not valid base64."""


@dataclass
class MealIngestionService:
    """Turns multimodal input into a validated meal draft."""

    client: InferenceClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def ingest(self, data: MultimodalInput) -> IngestionResult:
        """Make a single inference attempt and validate its reply."""
        if data.is_empty:
            _logger.info("Meal ingestion rejected: no input")
            return IngestionResult(error=IngestionError.EMPTY_INPUT)
        try:
            parts = build_parts(data)
        except InvalidMediaError as exc:
            _logger.warning("Meal ingestion rejected: %s", exc)
            return IngestionResult(error=IngestionError.INVALID_MEDIA)

        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                parts=parts,
                schema=MEAL_SCHEMA,
                schema_name="meal_estimate",
            )
        except Exception:
            _logger.exception("Meal ingestion failed during inference call")
            return IngestionResult(error=IngestionError.REMOTE_ERROR)

        if not raw or not raw.strip():
            _logger.warning("Meal ingestion failed: empty response")
            return IngestionResult(error=IngestionError.EMPTY_RESPONSE)
        try:
            draft = MealDraft.model_validate_json(raw.strip())
        except ValidationError as exc:
            _logger.warning("Meal ingestion failed: invalid response (%s)", exc)
            return IngestionResult(error=IngestionError.INVALID_RESPONSE)

        _logger.info("Meal ingested: name=%s calories=%s", draft.name, draft.calories)
        return IngestionResult(draft=draft)


def build_parts(data: MultimodalInput) -> list[Part]:
    """Assemble request parts in text, image, audio, instruction order."""
    parts: list[Part] = []
    if data.text and data.text.strip():
        parts.append(TextPart(text=f"Description: {data.text.strip()}"))
    if data.image:
        parts.append(MediaPart(mime_type=IMAGE_MIME_TYPE, data=_to_base64(data.image)))
    if data.audio:
        parts.append(MediaPart(mime_type=AUDIO_MIME_TYPE, data=_to_base64(data.audio)))
    parts.append(TextPart(text=MEAL_PROMPT))
    return parts


def _to_base64(payload: str | bytes) -> str:
    """Return bare base64 for raw bytes or a possibly data-URL prefixed string."""
    if isinstance(payload, bytes):
        return base64.b64encode(payload).decode("utf-8")
    encoded = strip_data_url_header(payload)
    if not encoded:
        raise InvalidMediaError("media payload is empty")
    try:
        base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidMediaError("media payload is not valid base64") from exc
    return encoded


def strip_data_url_header(payload: str) -> str:
    """Drop a ``data:<mime>;base64,`` prefix if present."""
    cleaned = payload.strip()
    if "," in cleaned:
        return cleaned.split(",", 1)[1]
    return cleaned
