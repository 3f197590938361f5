from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Dict

from matching.engine.items import detect_modality, IMAGE_MODALITY

EXACT = "exact"
NORMALIZED = "normalized"
CONTENT = "content"


class AnswerKey(Mapping):
    """
    Read-only mapping of left value to the correct right value.

    ``content_ids`` remembers which content record an item value was built
    from, for activities resolved from content references.
    """

    def __init__(self, expected, content_ids=None):
        self._expected = dict(expected)
        self._content_ids = dict(content_ids or {})

    @classmethod
    def from_pairs(cls, pairs):
        expected = {}
        content_ids = {}
        for pair in pairs:
            if pair.left.value in expected:
                continue
            expected[pair.left.value] = pair.right.value
            if pair.left_content_id:
                content_ids.setdefault(pair.left.value, pair.left_content_id)
            if pair.right_content_id:
                content_ids.setdefault(pair.right.value, pair.right_content_id)
        return cls(expected, content_ids)

    def __getitem__(self, key):
        return self._expected[key]

    def __iter__(self):
        return iter(self._expected)

    def __len__(self):
        return len(self._expected)

    def __repr__(self):
        return f"AnswerKey({self._expected!r})"

    def content_id(self, value):
        return self._content_ids.get(value)

    def to_dict(self):
        return {"expected": dict(self._expected), "content_ids": dict(self._content_ids)}

    @classmethod
    def from_dict(cls, data):
        return cls(data.get("expected", {}), data.get("content_ids", {}))


@dataclass(frozen=True)
class ScoreResult:
    correctness: Dict[str, bool] = field(default_factory=dict)
    correct_count: int = 0
    total: int = 0

    @property
    def percent(self):
        if not self.total:
            return 0
        return round(self.correct_count / self.total * 100)

    @property
    def is_perfect(self):
        return self.total > 0 and self.correct_count == self.total

    def to_dict(self):
        return {
            "correctness": dict(self.correctness),
            "correct_count": self.correct_count,
            "total": self.total,
            "percent": self.percent,
            "is_perfect": self.is_perfect,
        }


def _normalize(value):
    return value.strip().casefold()


def is_equivalent(chosen, expected, answer_key=None, left=None, equivalence=EXACT):
    if chosen is None:
        return False

    if equivalence == CONTENT and answer_key is not None:
        left_content = answer_key.content_id(left)
        chosen_content = answer_key.content_id(chosen)
        if left_content and answer_key.content_id(expected):
            return chosen_content == left_content

    if equivalence == NORMALIZED:
        if detect_modality(chosen) == IMAGE_MODALITY or detect_modality(expected) == IMAGE_MODALITY:
            return chosen == expected
        return _normalize(chosen) == _normalize(expected)

    return chosen == expected


def score(pairing, answer_key, equivalence=EXACT) -> ScoreResult:
    """
    Compares a frozen pairing with the answer key.

    Every answer key entry is scored; a left item missing from the pairing
    counts as incorrect. The default equivalence is byte-exact equality.
    """
    correctness = {}
    for left, expected in answer_key.items():
        correctness[left] = is_equivalent(
            pairing.get(left),
            expected,
            answer_key=answer_key if isinstance(answer_key, AnswerKey) else None,
            left=left,
            equivalence=equivalence,
        )
    correct_count = sum(1 for is_correct in correctness.values() if is_correct)
    return ScoreResult(correctness=correctness, correct_count=correct_count, total=len(answer_key))
