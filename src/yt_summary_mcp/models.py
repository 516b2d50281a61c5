"""Data models for transcript requests, bridge messages and summaries."""

from enum import Enum

from pydantic import BaseModel, model_validator
from pydantic.alias_generators import to_camel


class TranscriptMethod(str, Enum):
    LEGACY_XML = "legacy-xml"
    STRUCTURED_JSON = "structured-json"


class MessageType(str, Enum):
    REQUEST = "request"
    RESPONSE = "response"


class BridgeMessage(BaseModel):
    """Envelope posted on the shared channel between the two contexts."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "use_enum_values": True,
    }

    type: MessageType
    correlation_id: str
    video_id: str | None = None
    method: TranscriptMethod | None = None
    text: str | None = None
    error: str | None = None

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class TranscriptRequest(BaseModel):
    video_id: str
    correlation_id: str

    def to_message(self) -> BridgeMessage:
        return BridgeMessage(
            type=MessageType.REQUEST,
            correlation_id=self.correlation_id,
            video_id=self.video_id,
        )


class TranscriptResponse(BaseModel):
    correlation_id: str
    method: TranscriptMethod | None = None
    text: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _success_xor_failure(self):
        if self.error is None and self.method is None:
            raise ValueError("response needs either a method or an error")
        if self.error is not None and self.text is not None:
            raise ValueError("response cannot carry both text and an error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_message(self) -> BridgeMessage:
        return BridgeMessage(
            type=MessageType.RESPONSE,
            correlation_id=self.correlation_id,
            method=self.method,
            text=self.text,
            error=self.error,
        )


class TranscriptResult(BaseModel):
    video_id: str
    method: TranscriptMethod
    text: str = ""


class ProviderKind(str, Enum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


class ProviderConfig(BaseModel):
    provider: ProviderKind
    api_key: str
    model: str | None = None
    base_url: str | None = None

    @model_validator(mode="after")
    def _base_url_for_openai(self):
        if self.provider == ProviderKind.OPENAI and not self.base_url:
            raise ValueError("base_url is required for OpenAI-compatible providers")
        return self


class SummaryRequest(BaseModel):
    config: ProviderConfig
    transcript_text: str
