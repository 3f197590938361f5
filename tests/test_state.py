from matching.engine import state as machine
from matching.engine.state import (
    FULLY_MATCHED,
    PARTIALLY_MATCHED,
    REVIEWED,
    SUBMITTED,
    UNANSWERED,
    MatchSession,
    MatchState,
)


def test_new_session_is_unanswered(abc_pools):
    session = MatchSession(abc_pools)

    assert session.status == UNANSWERED
    assert session.pairing == {}
    assert not session.can_submit


def test_rematch_scenario(abc_pools):
    session = MatchSession(abc_pools)

    session.assign("A", "1")
    session.assign("B", "3")
    session.assign("C", "3")

    assert session.pairing == {"A": "1", "C": "3"}
    assert session.status == PARTIALLY_MATCHED

    session.assign("B", "2")
    assert session.status == FULLY_MATCHED

    transition = session.submit()

    assert transition.accepted
    assert session.status == REVIEWED
    assert session.result.correctness == {"A": True, "B": True, "C": True}
    assert session.result.correct_count == 3
    assert session.result.total == 3


def test_scenario_with_a_wrong_final_pairing(abc_pools):
    session = MatchSession(abc_pools)
    session.assign("A", "1")
    session.assign("B", "3")
    session.assign("C", "2")

    session.submit()

    assert session.result.correctness == {"A": True, "B": False, "C": False}
    assert session.result.correct_count == 1
    assert session.result.percent == 33


def test_assign_is_idempotent(abc_pools):
    session = MatchSession(abc_pools)
    session.assign("A", "2")
    before = session.state

    transition = session.assign("A", "2")

    assert transition.accepted
    assert session.state is before
    assert session.pairing == {"A": "2"}


def test_rematch_evicts_previous_left_item(abc_pools):
    state = machine.initial_state(abc_pools)
    state = machine.assign(state, "A", "3").state

    state = machine.assign(state, "B", "3").state

    assert "A" not in state.pairing
    assert state.pairing["B"] == "3"
    assert state.left_for("3") == "B"


def test_moving_a_left_item_frees_its_old_right_item(abc_pools):
    session = MatchSession(abc_pools)
    session.assign("A", "1")
    session.assign("A", "2")

    assert session.pairing == {"A": "2"}
    assert session.state.left_for("1") is None


def test_status_only_moves_forward_while_assigning(abc_pools):
    session = MatchSession(abc_pools)
    seen = [session.status]
    for left, right in [("A", "1"), ("B", "2"), ("C", "3")]:
        session.assign(left, right)
        seen.append(session.status)

    assert seen == [UNANSWERED, PARTIALLY_MATCHED, PARTIALLY_MATCHED, FULLY_MATCHED]


def test_unassign_steps_back(abc_pools):
    session = MatchSession(abc_pools)
    session.assign("A", "1")

    session.unassign("A")
    assert session.status == UNANSWERED

    # nothing to remove is still fine
    assert session.unassign("B").accepted


def test_submit_incomplete_is_rejected_and_state_kept(abc_pools):
    session = MatchSession(abc_pools)
    session.assign("A", "1")
    before = session.state

    transition = session.submit()

    assert not transition.accepted
    assert "partially_matched" in transition.reason
    assert session.state is before
    assert session.result is None


def test_edits_are_rejected_after_submit(abc_pools):
    session = MatchSession(abc_pools)
    for left, right in [("A", "1"), ("B", "2"), ("C", "3")]:
        session.assign(left, right)
    session.submit()

    assert not session.assign("A", "2").accepted
    assert not session.unassign("A").accepted
    assert not session.submit().accepted
    assert session.pairing == {"A": "1", "B": "2", "C": "3"}


def test_unknown_items_are_rejected(abc_pools):
    session = MatchSession(abc_pools)

    assert not session.assign("Z", "1").accepted
    assert not session.assign("A", "9").accepted
    assert session.status == UNANSWERED


def test_drop_outside_a_target_is_a_no_op(abc_pools):
    session = MatchSession(abc_pools)
    session.assign("A", "1")
    before = session.state

    transition = session.assign("B", None)

    assert transition.accepted
    assert session.state is before


def test_reset_returns_to_unanswered_from_review(abc_pools):
    session = MatchSession(abc_pools)
    for left, right in [("A", "1"), ("B", "2"), ("C", "3")]:
        session.assign(left, right)
    session.submit()

    session.reset()

    assert session.status == UNANSWERED
    assert session.pairing == {}
    assert session.result is None


def test_listeners_see_every_transition(abc_pools):
    session = MatchSession(abc_pools)
    seen = []
    unsubscribe = session.subscribe(lambda previous, current: seen.append(current.status))

    for left, right in [("A", "1"), ("B", "2"), ("C", "3")]:
        session.assign(left, right)
    session.submit()
    session.assign("A", "2")
    unsubscribe()
    session.reset()

    assert seen == [PARTIALLY_MATCHED, PARTIALLY_MATCHED, FULLY_MATCHED, SUBMITTED, REVIEWED]


def test_state_round_trips_through_plain_data(abc_pools):
    session = MatchSession(abc_pools)
    for left, right in [("A", "1"), ("B", "3"), ("C", "2")]:
        session.assign(left, right)
    session.submit()

    restored = MatchState.from_dict(session.state.to_dict())

    assert restored == session.state
