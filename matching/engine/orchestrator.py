import logging
import random

from matching.engine import pools as pool_builder
from matching.engine.loader import MatchDefinition
from matching.engine.pools import Pools
from matching.engine.scoring import EXACT
from matching.engine.state import REVIEWED, MatchSession, MatchState, Transition

logger = logging.getLogger(__name__)


class ActivityRunner:
    """
    Plays one matching activity, phase by phase.

    A sequential activity starts on its first phase; each phase gets fresh
    pools, a fresh answer key and an unanswered state. Only the names of
    completed phases survive a phase change. ``on_complete`` is called with
    the runner and the caller-supplied ``context`` once the learner moves on
    to the next activity.
    """

    def __init__(self, definition, equivalence=EXACT, rng=None, on_complete=None, context=None):
        self.definition = definition
        self.equivalence = equivalence
        self.rng = rng or random.Random()
        self.on_complete = on_complete
        self.context = dict(context or {})
        self.completed_phases = []
        self.is_finished = False
        self.current_phase = definition.phases[0] if definition.is_sequential else None
        self.session = self._new_session()

    def _new_session(self):
        pools = pool_builder.build(self.definition, phase=self.current_phase, rng=self.rng)
        return MatchSession(pools, equivalence=self.equivalence)

    @property
    def pools(self):
        return self.session.pools

    @property
    def next_phase(self):
        if self.current_phase is None:
            return None
        return self.definition.next_phase(self.current_phase)

    @property
    def can_advance_phase(self):
        return (
            not self.is_finished
            and self.session.status == REVIEWED
            and self.next_phase is not None
        )

    @property
    def can_advance_activity(self):
        return not self.is_finished and self.session.status == REVIEWED and self.next_phase is None

    def available_actions(self):
        if self.can_advance_phase:
            return ["next_phase"]
        if self.can_advance_activity:
            return ["next_activity"]
        return []

    def advance_phase(self):
        if not self.can_advance_phase:
            return Transition(state=self.session.state, accepted=False, reason="no next phase available")
        self.completed_phases.append(self.current_phase)
        self.current_phase = self.next_phase
        self.session = self._new_session()
        logger.info(
            f"Activity {self.definition.activity_id} moved to phase {self.current_phase}"
        )
        return Transition(state=self.session.state)

    def advance_activity(self):
        if not self.can_advance_activity:
            return Transition(state=self.session.state, accepted=False, reason="activity is not finished")
        if self.current_phase is not None:
            self.completed_phases.append(self.current_phase)
        self.is_finished = True
        logger.info(f"Activity {self.definition.activity_id} completed")
        if self.on_complete is not None:
            self.on_complete(self, self.context)
        return Transition(state=self.session.state)

    def snapshot(self):
        """
        Plain data for the run cache. Carries the parsed definition and the
        shuffle generator's state, so a restored runner builds later phases
        from the same pairs and the same random sequence.
        """
        return {
            "activity_id": self.definition.activity_id,
            "definition": self.definition.to_dict(),
            "equivalence": self.equivalence,
            "context": dict(self.context),
            "current_phase": self.current_phase,
            "completed_phases": list(self.completed_phases),
            "is_finished": self.is_finished,
            "rng_state": _dump_rng_state(self.rng.getstate()),
            "pools": self.pools.to_dict(),
            "state": self.session.state.to_dict(),
        }

    @classmethod
    def restore(cls, snapshot, rng=None, on_complete=None):
        runner = cls.__new__(cls)
        runner.definition = MatchDefinition.from_dict(snapshot["definition"])
        runner.equivalence = snapshot.get("equivalence", EXACT)
        if rng is None:
            rng = random.Random()
            if snapshot.get("rng_state") is not None:
                rng.setstate(_load_rng_state(snapshot["rng_state"]))
        runner.rng = rng
        runner.on_complete = on_complete
        runner.context = dict(snapshot.get("context") or {})
        runner.completed_phases = list(snapshot.get("completed_phases", []))
        runner.is_finished = snapshot.get("is_finished", False)
        runner.current_phase = snapshot.get("current_phase")
        runner.session = MatchSession(
            Pools.from_dict(snapshot["pools"]),
            equivalence=runner.equivalence,
            state=MatchState.from_dict(snapshot["state"]),
        )
        return runner


def _dump_rng_state(state):
    version, internal, gauss = state
    return [version, list(internal), gauss]


def _load_rng_state(data):
    version, internal, gauss = data
    return (version, tuple(internal), gauss)
