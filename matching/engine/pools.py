import logging
import random
from dataclasses import dataclass
from typing import Tuple

from matching.engine.items import MatchItem, display_hints, grid_columns
from matching.engine.scoring import AnswerKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pools:
    left_items: Tuple[MatchItem, ...]
    right_items: Tuple[MatchItem, ...]
    answer_key: AnswerKey

    @property
    def total(self):
        return len(self.answer_key)

    def has_left(self, value):
        return any(item.value == value for item in self.left_items)

    def has_right(self, value):
        return any(item.value == value for item in self.right_items)

    def to_dict(self):
        return {
            "left_items": [item.to_dict() for item in self.left_items],
            "right_items": [item.to_dict() for item in self.right_items],
            "answer_key": self.answer_key.to_dict(),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            left_items=tuple(MatchItem(**item) for item in data["left_items"]),
            right_items=tuple(MatchItem(**item) for item in data["right_items"]),
            answer_key=AnswerKey.from_dict(data["answer_key"]),
        )

    def presentation(self, kind):
        return {
            "left": [
                dict(item.to_dict(), hints=display_hints(item, kind)) for item in self.left_items
            ],
            "right": [
                dict(item.to_dict(), hints=display_hints(item, kind, in_drop_zone=True))
                for item in self.right_items
            ],
            "columns": grid_columns(len(self.left_items)),
        }


def _shuffle_right(left_items, right_items, answer_key, rng):
    shuffled = list(right_items)
    rng.shuffle(shuffled)
    if len(shuffled) > 1:
        aligned = all(
            answer_key[left.value] == right.value for left, right in zip(left_items, shuffled)
        )
        if aligned:
            shuffled = shuffled[1:] + shuffled[:1]
    return tuple(shuffled)


def build(definition, phase=None, rng=None) -> Pools:
    """
    Left items keep display order; right items are shuffled independently so
    position never gives the answer away. ``phase`` restricts a sequential
    activity to the pairs of that phase.
    """
    rng = rng or random.Random()
    # loader.load already made the pairs one-to-one
    pairs = definition.pairs_for_phase(phase)

    answer_key = AnswerKey.from_pairs(pairs)
    left_items = [pair.left for pair in pairs]
    right_items = [pair.right for pair in pairs]

    pools = Pools(
        left_items=tuple(left_items),
        right_items=_shuffle_right(left_items, right_items, answer_key, rng),
        answer_key=answer_key,
    )
    logger.debug(
        f"Built pools for activity {definition.activity_id} phase={phase}: {pools.total} pairs"
    )
    return pools
