"""Shared types and dataclasses for services.

Provides typed alternatives to dict[str, Any] for better type safety.
"""

from dataclasses import dataclass
from enum import Enum

from llm.base import MediaPart


class RenderVariant(str, Enum):
    """Which attachment sections reach the prompt."""

    MEDIA_ONLY = "media_only"
    TEXT_ONLY = "text_only"
    NEITHER = "neither"
    BOTH = "both"


@dataclass(frozen=True)
class AttachmentContent:
    """What the format extractor produced for one attachment.

    ``text`` is extracted content or an in-band notice; ``media`` is the
    raw payload for formats the model reads natively.
    """

    variant: RenderVariant
    text: str | None = None
    media: MediaPart | None = None

    def __post_init__(self) -> None:
        has_text = self.variant in (RenderVariant.TEXT_ONLY, RenderVariant.BOTH)
        has_media = self.variant in (RenderVariant.MEDIA_ONLY, RenderVariant.BOTH)
        if has_text != (self.text is not None):
            raise ValueError(f"{self.variant.value} content requires text={has_text}")
        if has_media != (self.media is not None):
            raise ValueError(f"{self.variant.value} content requires media={has_media}")

    @classmethod
    def media_only(cls, media: MediaPart) -> "AttachmentContent":
        return cls(RenderVariant.MEDIA_ONLY, media=media)

    @classmethod
    def text_only(cls, text: str) -> "AttachmentContent":
        return cls(RenderVariant.TEXT_ONLY, text=text)

    @classmethod
    def neither(cls) -> "AttachmentContent":
        return cls(RenderVariant.NEITHER)


@dataclass(frozen=True)
class KnowledgeResult:
    """Documentation text and reference links returned by a knowledge source."""

    text: str
    links: tuple[str, ...]
