import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from matching.engine.scoring import EXACT, ScoreResult, score

logger = logging.getLogger(__name__)

UNANSWERED = "unanswered"
PARTIALLY_MATCHED = "partially_matched"
FULLY_MATCHED = "fully_matched"
SUBMITTED = "submitted"
REVIEWED = "reviewed"

EDITABLE_STATES = (UNANSWERED, PARTIALLY_MATCHED, FULLY_MATCHED)


@dataclass(frozen=True)
class MatchState:
    left_values: Tuple[str, ...]
    right_values: Tuple[str, ...]
    pairing: Dict[str, str] = field(default_factory=dict)
    status: str = UNANSWERED
    result: Optional[ScoreResult] = None

    @property
    def total(self):
        return len(self.left_values)

    @property
    def is_editable(self):
        return self.status in EDITABLE_STATES

    @property
    def is_complete(self):
        return self.total > 0 and len(self.pairing) == self.total

    def left_for(self, right):
        for left, paired_right in self.pairing.items():
            if paired_right == right:
                return left
        return None

    def to_dict(self):
        return {
            "left_values": list(self.left_values),
            "right_values": list(self.right_values),
            "pairing": dict(self.pairing),
            "status": self.status,
            "result": self.result.to_dict() if self.result else None,
        }

    @classmethod
    def from_dict(cls, data):
        result = data.get("result")
        if result:
            result = ScoreResult(
                correctness=dict(result["correctness"]),
                correct_count=result["correct_count"],
                total=result["total"],
            )
        return cls(
            left_values=tuple(data["left_values"]),
            right_values=tuple(data["right_values"]),
            pairing=dict(data.get("pairing", {})),
            status=data.get("status", UNANSWERED),
            result=result,
        )


@dataclass(frozen=True)
class Transition:
    state: MatchState
    accepted: bool = True
    reason: Optional[str] = None


def _matching_status(pairing, total):
    if not pairing:
        return UNANSWERED
    if len(pairing) < total:
        return PARTIALLY_MATCHED
    return FULLY_MATCHED


def _reject(state, reason):
    logger.debug(f"Rejected transition in state {state.status}: {reason}")
    return Transition(state=state, accepted=False, reason=reason)


def initial_state(pools) -> MatchState:
    return MatchState(
        left_values=tuple(item.value for item in pools.left_items),
        right_values=tuple(item.value for item in pools.right_items),
    )


def assign(state, left, right) -> Transition:
    """
    Pairs ``left`` with ``right``. A right item already taken by another left
    item is released from it first; that left item becomes unmatched.
    """
    if right is None:
        # dropped outside any target: nothing to do
        return Transition(state=state)
    if not state.is_editable:
        return _reject(state, "matches are locked after submission")
    if left not in state.left_values:
        return _reject(state, f"unknown left item {left!r}")
    if right not in state.right_values:
        return _reject(state, f"unknown right item {right!r}")
    if state.pairing.get(left) == right:
        return Transition(state=state)

    pairing = {key: value for key, value in state.pairing.items() if value != right}
    pairing[left] = right
    return Transition(
        state=replace(state, pairing=pairing, status=_matching_status(pairing, state.total))
    )


def unassign(state, left) -> Transition:
    if not state.is_editable:
        return _reject(state, "matches are locked after submission")
    if left not in state.pairing:
        return Transition(state=state)
    pairing = {key: value for key, value in state.pairing.items() if key != left}
    return Transition(
        state=replace(state, pairing=pairing, status=_matching_status(pairing, state.total))
    )


def submit(state, answer_key, equivalence=EXACT) -> Transition:
    if state.status != FULLY_MATCHED:
        return _reject(state, f"cannot submit from {state.status}")
    result = score(state.pairing, answer_key, equivalence=equivalence)
    return Transition(state=replace(state, status=SUBMITTED, result=result))


def review(state) -> Transition:
    if state.status != SUBMITTED:
        return _reject(state, f"cannot review from {state.status}")
    return Transition(state=replace(state, status=REVIEWED))


def reset(state) -> Transition:
    return Transition(state=replace(state, pairing={}, status=UNANSWERED, result=None))


class MatchSession:
    """
    Holds the current MatchState of one runner and tells subscribers about
    every accepted transition. Rejected actions leave the state untouched.
    """

    def __init__(self, pools, equivalence=EXACT, state=None):
        self.pools = pools
        self.equivalence = equivalence
        self.state = state or initial_state(pools)
        self._listeners = []

    def subscribe(self, listener):
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _apply(self, transition):
        if transition.accepted and transition.state is not self.state:
            previous = self.state
            self.state = transition.state
            for listener in list(self._listeners):
                listener(previous, self.state)
        return transition

    @property
    def status(self):
        return self.state.status

    @property
    def pairing(self):
        return dict(self.state.pairing)

    @property
    def result(self):
        return self.state.result

    @property
    def can_submit(self):
        return self.state.status == FULLY_MATCHED

    def assign(self, left, right):
        return self._apply(assign(self.state, left, right))

    def unassign(self, left):
        return self._apply(unassign(self.state, left))

    def submit(self):
        transition = self._apply(submit(self.state, self.pools.answer_key, self.equivalence))
        if not transition.accepted:
            return transition
        result = self.state.result
        logger.info(f"Matching submitted: {result.correct_count}/{result.total} correct")
        return self._apply(review(self.state))

    def reset(self):
        return self._apply(reset(self.state))
