import re
from dataclasses import dataclass
from typing import Optional

from matching.config.matching_types import (
    IMAGE_EXTENSIONS,
    IMAGE_MARKERS,
    PICTURE_TITLE,
    SEQUENTIAL,
    TITLE_DESCRIPTION,
)

TEXT_MODALITY = "text"
IMAGE_MODALITY = "image"

_IMAGE_EXTENSION_RE = re.compile(
    r"\.(%s)(\?.*)?$" % "|".join(IMAGE_EXTENSIONS), re.IGNORECASE
)


def detect_modality(value: str) -> str:
    """
    An item is an image when it is an absolute http(s) URL that either ends
    with an image extension (query string allowed) or points at a known image
    host. Everything else renders as text.
    """
    if not value or not isinstance(value, str):
        return TEXT_MODALITY
    candidate = value.strip()
    if not candidate.lower().startswith(("http://", "https://")):
        return TEXT_MODALITY
    if _IMAGE_EXTENSION_RE.search(candidate):
        return IMAGE_MODALITY
    lowered = candidate.lower()
    if any(marker in lowered for marker in IMAGE_MARKERS):
        return IMAGE_MODALITY
    return TEXT_MODALITY


@dataclass(frozen=True)
class MatchItem:
    value: str
    modality: str = TEXT_MODALITY

    @classmethod
    def from_value(cls, value):
        value = str(value).strip()
        return cls(value=value, modality=detect_modality(value))

    @property
    def is_image(self):
        return self.modality == IMAGE_MODALITY

    def to_dict(self):
        return {"value": self.value, "modality": self.modality}


@dataclass(frozen=True)
class MatchPair:
    left: MatchItem
    right: MatchItem
    left_content_id: Optional[str] = None
    right_content_id: Optional[str] = None

    @property
    def is_mixed_modality(self):
        return self.left.is_image != self.right.is_image

    @property
    def is_all_text(self):
        return not self.left.is_image and not self.right.is_image

    def to_dict(self):
        return {
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
            "left_content_id": self.left_content_id,
            "right_content_id": self.right_content_id,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            left=MatchItem(**data["left"]),
            right=MatchItem(**data["right"]),
            left_content_id=data.get("left_content_id"),
            right_content_id=data.get("right_content_id"),
        )


def grid_columns(count):
    if count <= 3:
        return 3
    if count <= 4:
        return 4
    return 6


def display_hints(item: MatchItem, kind: str, in_drop_zone: bool = False) -> dict:
    """Tailwind classes the view layer uses to size and align an item."""
    if item.is_image:
        return {
            "font_size": None,
            "alignment": "text-center",
            "weight": None,
            "line_height": None,
            "fit": "object-contain",
            "max_height": 120,
        }

    text = item.value
    word_count = len(text.split())
    char_count = len(text)

    # Sequential activities pass their current phase as the kind
    if kind == TITLE_DESCRIPTION:
        if in_drop_zone:
            if char_count > 200:
                font_size = "text-sm"
            elif char_count > 100:
                font_size = "text-base"
            elif char_count > 50:
                font_size = "text-lg"
            else:
                font_size = "text-xl"
            return {
                "font_size": font_size,
                "alignment": "text-center",
                "weight": "font-medium",
                "line_height": "leading-relaxed",
            }
        if word_count > 30:
            font_size = "text-xs"
        elif word_count > 20:
            font_size = "text-sm"
        else:
            font_size = "text-base"
        return {
            "font_size": font_size,
            "alignment": "text-center",
            "weight": "font-medium",
            "line_height": "leading-tight",
        }

    if kind in (PICTURE_TITLE, SEQUENTIAL):
        if word_count > 15:
            font_size = "text-lg"
        elif word_count > 10:
            font_size = "text-xl"
        else:
            font_size = "text-2xl"
        return {
            "font_size": font_size,
            "alignment": "text-center",
            "weight": "font-bold",
            "line_height": "leading-tight",
        }

    return {
        "font_size": "text-base",
        "alignment": "text-center",
        "weight": "font-medium",
        "line_height": "leading-tight",
    }
