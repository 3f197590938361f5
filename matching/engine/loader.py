import json
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Tuple

from matching.config.matching_types import (
    MAX_PROMPTS,
    PAIR_SEPARATORS,
    PICTURE_TITLE,
    PROMPT_FIELDS,
    SEQUENTIAL,
    SEQUENTIAL_PHASES,
    TEXT,
    TITLE_DESCRIPTION,
)
from matching.engine.items import MatchItem, MatchPair

logger = logging.getLogger(__name__)

CONTENT_REF_RE = re.compile(
    r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}|\b[a-f0-9]{8}\b",
    re.IGNORECASE,
)


def field_value(record, name, default=None):
    """Read a field from a dict-shaped record or a model instance."""
    if record is None:
        return default
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def classify_kind(declared_type):
    """
    Maps a free-form activity type onto a matching kind.

    "Picture Title", "picture_title" and "Match: picture-title" all read as
    picture-title. A type naming both phases is sequential.
    """
    if not declared_type:
        return TEXT
    normalized = re.sub(r"[\s_]+", "-", str(declared_type).strip().lower())
    has_picture_title = PICTURE_TITLE in normalized
    has_title_description = TITLE_DESCRIPTION in normalized
    if has_picture_title and has_title_description:
        return SEQUENTIAL
    if has_picture_title:
        return PICTURE_TITLE
    if has_title_description:
        return TITLE_DESCRIPTION
    return TEXT


@dataclass(frozen=True)
class MatchDefinition:
    activity_id: str
    title: str
    kind: str
    pairs: Tuple[MatchPair, ...]
    subject: Optional[str] = None
    topic_id: Optional[str] = None
    description: Optional[str] = None
    phases: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_sequential(self):
        return bool(self.phases)

    def pairs_for_phase(self, phase):
        if phase == PICTURE_TITLE:
            return tuple(pair for pair in self.pairs if pair.is_mixed_modality)
        if phase == TITLE_DESCRIPTION:
            return tuple(pair for pair in self.pairs if pair.is_all_text)
        return self.pairs

    def to_dict(self):
        return {
            "activity_id": self.activity_id,
            "title": self.title,
            "kind": self.kind,
            "pairs": [pair.to_dict() for pair in self.pairs],
            "subject": self.subject,
            "topic_id": self.topic_id,
            "description": self.description,
            "phases": list(self.phases),
        }

    @classmethod
    def from_dict(cls, data):
        """Rebuilds an already parsed definition; prompts are not read again."""
        return cls(
            activity_id=data["activity_id"],
            title=data["title"],
            kind=data["kind"],
            pairs=tuple(MatchPair.from_dict(pair) for pair in data["pairs"]),
            subject=data.get("subject"),
            topic_id=data.get("topic_id"),
            description=data.get("description"),
            phases=tuple(data.get("phases") or ()),
        )

    def next_phase(self, phase):
        if phase not in self.phases:
            return None
        index = self.phases.index(phase)
        if index < len(self.phases) - 1:
            return self.phases[index + 1]
        return None


def extract_prompts(raw):
    prompts = field_value(raw, "prompts")
    if prompts is None:
        prompts = [field_value(raw, name) for name in PROMPT_FIELDS]
    cleaned = []
    for prompt in list(prompts)[:MAX_PROMPTS]:
        if prompt is None:
            continue
        if isinstance(prompt, str) and not prompt.strip():
            continue
        cleaned.append(prompt)
    return cleaned


def _make_pair(left, right, left_content_id=None, right_content_id=None):
    if left is None or right is None:
        return None
    left_item = MatchItem.from_value(left)
    right_item = MatchItem.from_value(right)
    if not left_item.value or not right_item.value:
        return None
    return MatchPair(
        left=left_item,
        right=right_item,
        left_content_id=left_content_id,
        right_content_id=right_content_id,
    )


def _pairs_from_content(content, kind):
    content_id = str(field_value(content, "id"))
    title = field_value(content, "title")
    description = field_value(content, "short_description")
    image = field_value(content, "imageid")

    candidates = []
    if kind in (PICTURE_TITLE, SEQUENTIAL):
        candidates.append(_make_pair(image, title, content_id, content_id))
    if kind in (TITLE_DESCRIPTION, SEQUENTIAL, TEXT):
        candidates.append(_make_pair(title, description, content_id, content_id))
    return [pair for pair in candidates if pair is not None]


def parse_prompt(prompt, kind, content_lookup=None):
    """
    Turns one prompt slot into zero or more pairs.

    Accepted forms, tried in order: a JSON object or dict with "left" and
    "right", a literal "left | right" (also "=>" and "->"), or text holding
    content ids resolved through ``content_lookup``.
    """
    if isinstance(prompt, dict):
        pair = _make_pair(prompt.get("left"), prompt.get("right"))
        return [pair] if pair else []

    text = str(prompt).strip()

    if text.startswith("{"):
        try:
            payload = json.loads(text)
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            pair = _make_pair(payload.get("left"), payload.get("right"))
            return [pair] if pair else []

    for separator in PAIR_SEPARATORS:
        if separator in text:
            left, right = text.split(separator, 1)
            pair = _make_pair(left, right)
            return [pair] if pair else []

    if content_lookup is None:
        return []

    pairs = []
    for content_id in CONTENT_REF_RE.findall(text):
        content = content_lookup(content_id)
        if content is None:
            logger.debug(f"Content reference {content_id} could not be resolved")
            continue
        pairs.extend(_pairs_from_content(content, kind))
    return pairs


def _dedupe_pairs(pairs, activity_id):
    seen_left = set()
    seen_right = set()
    unique = []
    for pair in pairs:
        if pair.left.value in seen_left:
            logger.warning(
                f"Activity {activity_id}: duplicate left item {pair.left.value!r}, keeping first mapping"
            )
            continue
        if pair.right.value in seen_right:
            logger.warning(
                f"Activity {activity_id}: duplicate right item {pair.right.value!r}, dropping pair"
            )
            continue
        seen_left.add(pair.left.value)
        seen_right.add(pair.right.value)
        unique.append(pair)
    return tuple(unique)


def load(raw, content_lookup: Optional[Callable] = None) -> MatchDefinition:
    activity_id = str(field_value(raw, "id", ""))
    kind = classify_kind(field_value(raw, "type"))

    pairs = []
    for index, prompt in enumerate(extract_prompts(raw), start=1):
        parsed = parse_prompt(prompt, kind, content_lookup)
        if not parsed:
            logger.debug(f"Activity {activity_id}: dropped unparseable prompt slot {index}")
            continue
        pairs.extend(parsed)

    definition = MatchDefinition(
        activity_id=activity_id,
        title=field_value(raw, "topic") or "Matching Activity",
        kind=kind,
        pairs=_dedupe_pairs(pairs, activity_id),
        subject=field_value(raw, "subject"),
        topic_id=field_value(raw, "topicid"),
        description=field_value(raw, "description"),
    )

    if kind == SEQUENTIAL:
        phases = tuple(phase for phase in SEQUENTIAL_PHASES if definition.pairs_for_phase(phase))
        definition = replace(definition, phases=phases)

    logger.info(
        f"Loaded matching activity {activity_id} ({kind}) with {len(definition.pairs)} pairs"
    )
    return definition
