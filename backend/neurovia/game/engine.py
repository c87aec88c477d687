from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol, Sequence

from ..enums import ComponentType
from ..errors import ConflictError, InvalidInputError, NotFoundError, PreconditionError
from ..schemas.state import PurchasedComponent, Round1State, Round2State, Round3State, SchematicSlot
from .rules import GameRules
from .scoring import (
    ChallengeScore,
    QuizScore,
    SchematicScore,
    compute_challenge_score,
    compute_quiz_score,
    compute_schematic_score,
)


class PricedComponent(Protocol):
    id: str
    name: str
    type: ComponentType
    price: int
    icon: str


class Placement(Protocol):
    component_id: Optional[str]
    component_name: Optional[str]
    component_type: Optional[ComponentType]


@dataclass
class AnswerCheck:
    is_correct: bool
    correct_answer: Optional[int]
    earned_amount: int


@dataclass
class QuizOutcome:
    round1: Round1State
    score: QuizScore


@dataclass
class PurchaseOutcome:
    round1: Round1State
    total_cost: int


@dataclass
class SchematicOutcome:
    round2: Round2State
    score: SchematicScore


@dataclass
class ChallengeOutcome:
    round3: Round3State
    score: ChallengeScore


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RoundEngine:
    """
    Validation and scoring for the three rounds. Works on round state values
    only and never touches storage; callers persist the returned states.
    """

    def __init__(self, rules: GameRules | None = None) -> None:
        self.rules = rules or GameRules()

    # Round 1: Component Quest

    def check_answer(self, correct_answers: Sequence[int], *, question_index: int, selected: int) -> AnswerCheck:
        if question_index < 0 or question_index >= len(correct_answers):
            raise InvalidInputError("Invalid question index", question_index=question_index)
        correct = int(correct_answers[question_index])
        is_correct = int(selected) == correct
        return AnswerCheck(
            is_correct=is_correct,
            correct_answer=None if is_correct else correct,
            earned_amount=self.rules.quiz_points_per_answer if is_correct else 0,
        )

    def submit_quiz(
        self,
        round1: Round1State,
        *,
        correct_answers: Sequence[int],
        selected: Sequence[Optional[int]],
    ) -> QuizOutcome:
        if round1.submitted:
            raise ConflictError("Components are already purchased; the quiz can no longer be resubmitted.")
        score = compute_quiz_score(
            correct_answers=correct_answers,
            selected=selected,
            points_per_answer=self.rules.quiz_points_per_answer,
            bonus_amount=self.rules.quiz_bonus,
        )
        updated = round1.model_copy(
            update={
                "quiz_score": score.correct_answers,
                "earned_amount": score.earned_amount,
                "total_balance": score.total_balance,
                "quiz_submitted": True,
            }
        )
        return QuizOutcome(round1=updated, score=score)

    def ensure_can_purchase(self, round1: Round1State) -> None:
        if round1.submitted:
            raise ConflictError("You have already purchased components. You cannot buy more components.")

    def purchase(
        self,
        round1: Round1State,
        *,
        requested_ids: Sequence[str],
        resolved: Sequence[PricedComponent],
        now: datetime | None = None,
    ) -> PurchaseOutcome:
        self.ensure_can_purchase(round1)

        unique_ids = list(dict.fromkeys(requested_ids))
        by_id = {component.id: component for component in resolved}
        missing = [component_id for component_id in unique_ids if component_id not in by_id]
        if missing:
            raise NotFoundError("Some components not found", missing=missing)
        # Resolved count must match requested count.
        if len(unique_ids) != len(requested_ids):
            repeated = sorted(
                {component_id for component_id in requested_ids if requested_ids.count(component_id) > 1}
            )
            raise NotFoundError("Some components not found", repeated=repeated)

        expected = self.rules.purchase_component_count
        if len(requested_ids) != expected:
            raise InvalidInputError(f"You must purchase exactly {expected} components")

        chosen = [by_id[component_id] for component_id in unique_ids]
        total_cost = sum(component.price for component in chosen)
        if total_cost > round1.total_balance:
            raise InvalidInputError(
                "Insufficient balance",
                required=total_cost,
                available=round1.total_balance,
            )

        now = now or _utcnow()
        remaining = round1.total_balance - total_cost
        snapshots = [
            PurchasedComponent(
                component_id=component.id,
                name=component.name,
                type=component.type,
                price=component.price,
                icon=component.icon,
                purchased_at=now,
            )
            for component in chosen
        ]
        updated = round1.model_copy(
            update={
                "purchased_components": snapshots,
                "total_balance": remaining,
                "submitted": True,
                "submitted_at": now,
                "final_score": remaining,
            }
        )
        return PurchaseOutcome(round1=updated, total_cost=total_cost)

    # Round 2: System Genesis

    def _build_schematic(
        self,
        round1: Round1State,
        placements: Sequence[Optional[Placement]],
    ) -> list[SchematicSlot]:
        purchased = {component.component_id: component for component in round1.purchased_components}
        used: set[str] = set()
        slots: list[SchematicSlot] = []
        for index, placement in enumerate(placements):
            if placement is None or (placement.component_id is None and placement.component_type is None):
                slots.append(SchematicSlot(slot_index=index))
                continue

            component_id = placement.component_id
            component_name = placement.component_name
            component_type = placement.component_type
            if component_id is not None:
                snapshot = purchased.get(component_id)
                if snapshot is None:
                    raise InvalidInputError(
                        "Schematic uses a component the team did not purchase",
                        slot_index=index,
                        component_id=component_id,
                    )
                if component_id in used:
                    raise InvalidInputError(
                        "A component can occupy only one slot",
                        slot_index=index,
                        component_id=component_id,
                    )
                used.add(component_id)
                component_name = snapshot.name
                component_type = snapshot.type

            slots.append(
                SchematicSlot(
                    slot_index=index,
                    component_id=component_id,
                    component_name=component_name,
                    component_type=component_type,
                )
            )
        return slots

    def submit_schematic(
        self,
        round1: Round1State,
        round2: Round2State,
        *,
        placements: Sequence[Optional[Placement]],
        time_taken: float,
        now: datetime | None = None,
    ) -> SchematicOutcome:
        if not round1.submitted:
            raise PreconditionError("Team must complete Round 1 first")

        slot_count = self.rules.schematic_slot_count
        if len(placements) != slot_count:
            raise InvalidInputError(f"Schematic must have exactly {slot_count} components")

        slots = self._build_schematic(round1, placements)
        score = compute_schematic_score(
            placed_types=[slot.component_type for slot in slots],
            correct_flow=self.rules.correct_flow,
            time_taken=time_taken,
            points_per_placement=self.rules.round2_points_per_placement,
            tiers=self.rules.round2_time_bonus_tiers,
        )
        updated = round2.model_copy(
            update={
                "schematic": slots,
                "correct_placements": score.correct_placements,
                "time_taken": time_taken,
                "final_score": score.final_score,
                "submitted": True,
                "submitted_at": now or _utcnow(),
            }
        )
        return SchematicOutcome(round2=updated, score=score)

    # Round 3: Neural Logic

    def challenge_link(self, sector: str, round2: Round2State) -> str:
        if not round2.submitted:
            raise PreconditionError("Team must complete Round 2 first")
        link = self.rules.challenge_links.get(sector)
        if not link:
            raise NotFoundError("No challenge link configured for this sector", sector=sector)
        return link

    def _check_tests_passed(self, test_cases_passed: int) -> None:
        max_tests = self.rules.round3_max_tests
        if test_cases_passed < 0 or test_cases_passed > max_tests:
            raise InvalidInputError(f"Test cases passed must be between 0 and {max_tests}")

    def _check_time_taken(self, time_taken: int, cap: int) -> None:
        if time_taken < 0 or time_taken > cap:
            raise InvalidInputError(f"Time taken must be between 0 and {cap} minutes")

    def submit_challenge(
        self,
        sector: str,
        round2: Round2State,
        round3: Round3State,
        *,
        test_cases_passed: int,
        time_taken: int,
        now: datetime | None = None,
    ) -> ChallengeOutcome:
        link = self.challenge_link(sector, round2)
        cap = self.rules.round3_submission_time_cap_minutes
        self._check_tests_passed(test_cases_passed)
        self._check_time_taken(time_taken, cap)

        score = compute_challenge_score(
            test_cases_passed=test_cases_passed,
            time_taken=time_taken,
            time_cap=cap,
        )
        updated = round3.model_copy(
            update={
                "challenge_link": link,
                "test_cases_passed": test_cases_passed,
                "time_taken": time_taken,
                "final_score": score.final_score,
                "submitted": True,
                "submitted_at": now or _utcnow(),
                "admin_verified": False,
            }
        )
        return ChallengeOutcome(round3=updated, score=score)

    def verify_challenge(
        self,
        round3: Round3State,
        *,
        verified: bool,
        adjusted_score: Optional[int] = None,
    ) -> Round3State:
        if not round3.submitted:
            raise PreconditionError("Team has not submitted Round 3 yet")
        update: dict = {"admin_verified": verified}
        if adjusted_score is not None:
            update["final_score"] = adjusted_score
        return round3.model_copy(update=update)

    def override_challenge(
        self,
        round3: Round3State,
        *,
        time_taken: Optional[int] = None,
        test_cases_passed: Optional[int] = None,
    ) -> Round3State:
        cap = self.rules.round3_override_time_cap_minutes
        if time_taken is not None:
            self._check_time_taken(time_taken, cap)
        if test_cases_passed is not None:
            self._check_tests_passed(test_cases_passed)

        time_value = round3.time_taken if time_taken is None else time_taken
        tests_value = round3.test_cases_passed if test_cases_passed is None else test_cases_passed
        score = compute_challenge_score(
            test_cases_passed=tests_value,
            time_taken=time_value,
            time_cap=cap,
        )
        return round3.model_copy(
            update={
                "time_taken": time_value,
                "test_cases_passed": tests_value,
                "final_score": score.final_score,
                "admin_verified": True,
            }
        )
