from matching.config.matching_types import PICTURE_TITLE, TITLE_DESCRIPTION
import json
import random

from matching.engine import ActivityRunner, load
from matching.engine.state import REVIEWED, UNANSWERED

from .helpers import NoShuffle


def _solve(runner):
    for left, right in runner.pools.answer_key.items():
        runner.session.assign(left, right)
    runner.session.submit()


def test_single_phase_activity_has_no_phase(abc_definition):
    runner = ActivityRunner(abc_definition, rng=NoShuffle())

    assert runner.current_phase is None
    assert runner.available_actions() == []

    _solve(runner)

    assert runner.available_actions() == ["next_activity"]
    assert not runner.advance_phase().accepted


def test_sequential_activity_starts_on_first_phase(sequential_activity):
    runner = ActivityRunner(load(sequential_activity), rng=NoShuffle())

    assert runner.current_phase == PICTURE_TITLE
    assert all(item.is_image for item in runner.pools.left_items)


def test_advance_phase_rebuilds_pools_and_resets_state(sequential_activity):
    runner = ActivityRunner(load(sequential_activity), rng=NoShuffle())
    _solve(runner)
    assert runner.session.status == REVIEWED
    assert runner.available_actions() == ["next_phase"]

    transition = runner.advance_phase()

    assert transition.accepted
    assert runner.current_phase == TITLE_DESCRIPTION
    assert runner.completed_phases == [PICTURE_TITLE]
    assert runner.session.status == UNANSWERED
    assert runner.session.pairing == {}
    assert runner.session.result is None
    assert [item.value for item in runner.pools.left_items] == ["Solar panel", "Wind turbine"]
    assert dict(runner.pools.answer_key) == {
        "Solar panel": "Turns sunlight into electricity",
        "Wind turbine": "Turns moving air into electricity",
    }


def test_advance_phase_needs_reviewed_results(sequential_activity):
    runner = ActivityRunner(load(sequential_activity), rng=NoShuffle())

    transition = runner.advance_phase()

    assert not transition.accepted
    assert runner.current_phase == PICTURE_TITLE


def test_last_phase_only_offers_next_activity(sequential_activity):
    completed = []
    runner = ActivityRunner(
        load(sequential_activity),
        rng=NoShuffle(),
        on_complete=lambda r, context: completed.append((r.completed_phases[:], context)),
        context={"student_id": "s-1"},
    )
    _solve(runner)
    runner.advance_phase()
    _solve(runner)

    assert runner.available_actions() == ["next_activity"]
    assert runner.advance_activity().accepted
    assert runner.is_finished
    assert completed == [([PICTURE_TITLE, TITLE_DESCRIPTION], {"student_id": "s-1"})]
    assert not runner.advance_activity().accepted


def test_snapshot_restores_the_same_runner(sequential_activity):
    definition = load(sequential_activity)
    runner = ActivityRunner(definition, context={"run_id": "r1"})
    first_left = runner.pools.left_items[0].value
    runner.session.assign(first_left, runner.pools.answer_key[first_left])

    restored = ActivityRunner.restore(runner.snapshot())

    assert restored.current_phase == runner.current_phase
    assert restored.pools.right_items == runner.pools.right_items
    assert restored.session.state == runner.session.state
    assert restored.context == {"run_id": "r1"}
    assert restored.definition == definition


def test_restored_runner_builds_the_next_phase_from_the_snapshot(sequential_activity):
    runner = ActivityRunner(load(sequential_activity), rng=NoShuffle())
    _solve(runner)

    # the stored run goes through plain JSON, as a shared cache would keep it
    restored = ActivityRunner.restore(json.loads(json.dumps(runner.snapshot())), rng=NoShuffle())
    restored.advance_phase()

    assert [item.value for item in restored.pools.left_items] == ["Solar panel", "Wind turbine"]


def test_seeded_runs_shuffle_later_phases_the_same_way():
    activity = {
        "id": "act-big",
        "type": "picture-title title-description",
        "prompts": [f"https://upload.wikimedia.org/{n}.png | Word {n}" for n in range(3)]
        + [f"Word {n} | Meaning {n}" for n in range(3)],
    }
    definition = load(activity)

    def second_phase_order():
        runner = ActivityRunner(definition, rng=random.Random(11))
        _solve(runner)
        restored = ActivityRunner.restore(json.loads(json.dumps(runner.snapshot())))
        restored.advance_phase()
        return [item.value for item in restored.pools.right_items]

    assert second_phase_order() == second_phase_order()
