from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from neurovia.enums import ComponentType
from neurovia.errors import ConflictError, InvalidInputError, NotFoundError, PreconditionError
from neurovia.game.engine import RoundEngine
from neurovia.game.rules import GameRules
from neurovia.schemas.round2 import SchematicPlacement
from neurovia.schemas.state import Round1State, Round2State, Round3State

NOW = datetime(2025, 3, 14, 10, 30, tzinfo=timezone.utc)


@dataclass
class Part:
    id: str
    name: str
    type: ComponentType
    price: int
    icon: str = "📦"


PARTS = [
    Part("c-sensor", "DHT22", ComponentType.SENSOR, 300),
    Part("c-signal", "LM358", ComponentType.SIGNAL, 150),
    Part("c-controller", "ESP32", ComponentType.CONTROLLER, 400),
    Part("c-comm", "ESP8266", ComponentType.COMMUNICATION, 250),
    Part("c-cloud", "ThingSpeak", ComponentType.CLOUD, 200),
    Part("c-actuator", "Relay", ComponentType.ACTUATOR, 180),
    Part("c-servo", "Servo", ComponentType.ACTUATOR, 280),
]
ESSENTIAL_IDS = [part.id for part in PARTS[:6]]


@pytest.fixture
def engine() -> RoundEngine:
    return RoundEngine()


@pytest.fixture
def funded() -> Round1State:
    return Round1State(quiz_score=12, earned_amount=1200, total_balance=2400, quiz_submitted=True)


@pytest.fixture
def purchased(engine, funded) -> Round1State:
    return engine.purchase(funded, requested_ids=ESSENTIAL_IDS, resolved=PARTS, now=NOW).round1


def test_check_answer_hides_key_on_correct_answer(engine):
    hit = engine.check_answer([2, 0], question_index=0, selected=2)
    assert hit.is_correct and hit.correct_answer is None and hit.earned_amount == 100

    miss = engine.check_answer([2, 0], question_index=1, selected=3)
    assert not miss.is_correct and miss.correct_answer == 0 and miss.earned_amount == 0


@pytest.mark.parametrize("index", [-1, 2])
def test_check_answer_rejects_out_of_range_index(engine, index):
    with pytest.raises(InvalidInputError):
        engine.check_answer([2, 0], question_index=index, selected=0)


def test_quiz_can_be_resubmitted_until_purchase(engine, purchased):
    first = engine.submit_quiz(Round1State(), correct_answers=[0, 1], selected=[0, 0]).round1
    second = engine.submit_quiz(first, correct_answers=[0, 1], selected=[0, 1]).round1
    assert second.total_balance == 1400

    with pytest.raises(ConflictError):
        engine.submit_quiz(purchased, correct_answers=[0, 1], selected=[0, 1])


def test_purchase_deducts_balance_and_snapshots(engine, funded):
    outcome = engine.purchase(funded, requested_ids=ESSENTIAL_IDS, resolved=PARTS, now=NOW)
    round1 = outcome.round1
    assert outcome.total_cost == 1480
    assert round1.total_balance == 920
    assert round1.final_score == 920
    assert round1.submitted and round1.submitted_at == NOW
    assert [item.component_id for item in round1.purchased_components] == ESSENTIAL_IDS
    assert round1.purchased_components[0].name == "DHT22"
    assert round1.purchased_components[0].purchased_at == NOW
    # The input state is left untouched.
    assert funded.total_balance == 2400 and not funded.submitted


def test_second_purchase_conflicts(engine, purchased):
    with pytest.raises(ConflictError):
        engine.purchase(purchased, requested_ids=ESSENTIAL_IDS, resolved=PARTS)


def test_unknown_components_reported_before_count(engine, funded):
    with pytest.raises(NotFoundError) as info:
        engine.purchase(funded, requested_ids=["c-sensor", "ghost"], resolved=PARTS)
    assert info.value.extra["missing"] == ["ghost"]


def test_purchase_requires_exact_count(engine, funded):
    with pytest.raises(InvalidInputError, match="exactly 6"):
        engine.purchase(funded, requested_ids=ESSENTIAL_IDS[:5], resolved=PARTS)


def test_repeated_component_counts_as_not_found(engine, funded):
    ids = ESSENTIAL_IDS[:5] + ["c-sensor"]
    with pytest.raises(NotFoundError) as info:
        engine.purchase(funded, requested_ids=ids, resolved=PARTS)
    assert info.value.extra == {"repeated": ["c-sensor"]}


def test_repeated_component_reported_before_count(engine, funded):
    with pytest.raises(NotFoundError):
        engine.purchase(funded, requested_ids=["c-sensor", "c-sensor"], resolved=PARTS)


def test_purchase_rejects_insufficient_balance(engine):
    poor = Round1State(total_balance=1200, quiz_submitted=True)
    with pytest.raises(InvalidInputError) as info:
        engine.purchase(poor, requested_ids=ESSENTIAL_IDS, resolved=PARTS)
    assert info.value.extra == {"required": 1480, "available": 1200}
    assert not poor.submitted


def test_spending_exact_balance_leaves_zero(engine):
    exact = Round1State(total_balance=1480, quiz_submitted=True)
    round1 = engine.purchase(exact, requested_ids=ESSENTIAL_IDS, resolved=PARTS).round1
    assert round1.final_score == 0


def test_schematic_requires_round1(engine):
    with pytest.raises(PreconditionError):
        engine.submit_schematic(Round1State(), Round2State(), placements=[None] * 6, time_taken=1)


def test_schematic_requires_six_slots(engine, purchased):
    with pytest.raises(InvalidInputError, match="exactly 6"):
        engine.submit_schematic(purchased, Round2State(), placements=[None] * 5, time_taken=1)


def test_schematic_trusts_purchase_snapshot_over_client_type(engine, purchased):
    placements = [
        SchematicPlacement(component_id="c-sensor", component_type=ComponentType.CLOUD, component_name="Fake"),
        None,
        None,
        None,
        None,
        SchematicPlacement(component_type=ComponentType.ACTUATOR),
    ]
    outcome = engine.submit_schematic(purchased, Round2State(), placements=placements, time_taken=12, now=NOW)
    first = outcome.round2.schematic[0]
    assert first.component_type == ComponentType.SENSOR
    assert first.component_name == "DHT22"
    assert outcome.round2.schematic[1].component_type is None
    assert outcome.score.correct_placements == 2
    assert outcome.round2.final_score == 2 * 15 + 5
    assert outcome.round2.submitted_at == NOW


def test_schematic_rejects_unpurchased_component(engine, purchased):
    placements = [SchematicPlacement(component_id="c-servo")] + [None] * 5
    with pytest.raises(InvalidInputError, match="did not purchase"):
        engine.submit_schematic(purchased, Round2State(), placements=placements, time_taken=1)


def test_schematic_rejects_component_in_two_slots(engine, purchased):
    placements = [SchematicPlacement(component_id="c-sensor")] * 2 + [None] * 4
    with pytest.raises(InvalidInputError, match="only one slot"):
        engine.submit_schematic(purchased, Round2State(), placements=placements, time_taken=1)


def test_schematic_resubmission_replaces_score(engine, purchased):
    placements = [SchematicPlacement(component_id=component_id) for component_id in ESSENTIAL_IDS]
    first = engine.submit_schematic(purchased, Round2State(), placements=placements, time_taken=30).round2
    second = engine.submit_schematic(purchased, first, placements=[None] * 6, time_taken=1).round2
    assert first.final_score == 90
    assert second.final_score == 0
    assert second.correct_placements == 0


def test_challenge_link_requires_round2(engine):
    with pytest.raises(PreconditionError):
        engine.challenge_link("HydroCore", Round2State())


def test_challenge_link_missing_for_sector():
    engine = RoundEngine(GameRules(challenge_links={"HydroCore": "https://example.org/h"}))
    done = Round2State(submitted=True)
    assert engine.challenge_link("HydroCore", done) == "https://example.org/h"
    with pytest.raises(NotFoundError):
        engine.challenge_link("Lumina District", done)


def test_submit_challenge_awaits_verification(engine):
    outcome = engine.submit_challenge(
        "HydroCore",
        Round2State(submitted=True),
        Round3State(admin_verified=True),
        test_cases_passed=10,
        time_taken=12,
        now=NOW,
    )
    round3 = outcome.round3
    assert round3.final_score == 28
    assert round3.submitted
    assert not round3.admin_verified
    assert round3.challenge_link == GameRules().challenge_links["HydroCore"]


@pytest.mark.parametrize("tests_passed, minutes", [(11, 5), (-1, 5), (5, 31), (5, -1)])
def test_submit_challenge_range_checks(engine, tests_passed, minutes):
    with pytest.raises(InvalidInputError):
        engine.submit_challenge(
            "HydroCore",
            Round2State(submitted=True),
            Round3State(),
            test_cases_passed=tests_passed,
            time_taken=minutes,
        )


def test_verify_requires_submission(engine):
    with pytest.raises(PreconditionError):
        engine.verify_challenge(Round3State(), verified=True)


def test_verify_with_and_without_adjustment(engine):
    submitted = Round3State(submitted=True, test_cases_passed=10, time_taken=12, final_score=28)
    assert engine.verify_challenge(submitted, verified=True).final_score == 28
    adjusted = engine.verify_challenge(submitted, verified=True, adjusted_score=40)
    assert adjusted.final_score == 40 and adjusted.admin_verified
    assert not engine.verify_challenge(submitted, verified=False).admin_verified


def test_override_uses_admin_time_cap(engine):
    submitted = Round3State(submitted=True, test_cases_passed=10, time_taken=12, final_score=28)
    overridden = engine.override_challenge(submitted, time_taken=20)
    assert overridden.test_cases_passed == 10
    assert overridden.final_score == 15
    assert overridden.admin_verified

    with pytest.raises(InvalidInputError, match="between 0 and 25"):
        engine.override_challenge(submitted, time_taken=26)


def test_custom_rules_flow_through_engine():
    rules = GameRules(quiz_points_per_answer=50, quiz_bonus=0)
    outcome = RoundEngine(rules).submit_quiz(Round1State(), correct_answers=[1, 1], selected=[1, 1])
    assert outcome.round1.total_balance == 100
