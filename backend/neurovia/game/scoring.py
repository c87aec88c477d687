from dataclasses import dataclass
from typing import Optional, Sequence

from ..enums import ComponentType

NO_ANSWER = -1


@dataclass
class QuizScore:
    correct_answers: int
    total_questions: int
    earned_amount: int
    bonus_amount: int
    total_balance: int


@dataclass
class SchematicScore:
    correct_placements: int
    filled_slots: int
    total_slots: int
    time_taken: float
    time_bonus: int
    placement_score: int
    final_score: int
    is_all_correct: bool
    can_proceed: bool


@dataclass
class ChallengeScore:
    test_cases_passed: int
    time_taken: int
    time_bonus: int
    final_score: int


def count_correct_answers(correct_answers: Sequence[int], selected: Sequence[Optional[int]]) -> int:
    correct = 0
    for index, choice in enumerate(selected):
        if index >= len(correct_answers) or choice is None or choice == NO_ANSWER:
            continue
        if int(choice) == int(correct_answers[index]):
            correct += 1
    return correct


def compute_quiz_score(
    *,
    correct_answers: Sequence[int],
    selected: Sequence[Optional[int]],
    points_per_answer: int,
    bonus_amount: int,
) -> QuizScore:
    correct = count_correct_answers(correct_answers, selected)
    earned_amount = correct * points_per_answer
    return QuizScore(
        correct_answers=correct,
        total_questions=len(correct_answers),
        earned_amount=earned_amount,
        bonus_amount=bonus_amount,
        total_balance=earned_amount + bonus_amount,
    )


def placement_time_bonus(
    correct_placements: int,
    time_taken: float,
    tiers: Sequence[tuple[float, int]],
) -> int:
    # No bonus for speed alone.
    if correct_placements <= 0:
        return 0
    for limit, bonus in tiers:
        if time_taken < limit:
            return bonus
    return 0


def compute_schematic_score(
    *,
    placed_types: Sequence[Optional[ComponentType]],
    correct_flow: Sequence[ComponentType],
    time_taken: float,
    points_per_placement: int,
    tiers: Sequence[tuple[float, int]],
) -> SchematicScore:
    filled_slots = 0
    correct_placements = 0
    for index, component_type in enumerate(placed_types):
        if component_type is None:
            continue
        filled_slots += 1
        if index < len(correct_flow) and component_type == correct_flow[index]:
            correct_placements += 1

    placement_score = correct_placements * points_per_placement
    time_bonus = placement_time_bonus(correct_placements, time_taken, tiers)
    return SchematicScore(
        correct_placements=correct_placements,
        filled_slots=filled_slots,
        total_slots=len(correct_flow),
        time_taken=time_taken,
        time_bonus=time_bonus,
        placement_score=placement_score,
        final_score=placement_score + time_bonus,
        is_all_correct=correct_placements == len(correct_flow),
        can_proceed=True,
    )


def compute_challenge_score(*, test_cases_passed: int, time_taken: int, time_cap: int) -> ChallengeScore:
    time_bonus = max(0, time_cap - time_taken)
    return ChallengeScore(
        test_cases_passed=test_cases_passed,
        time_taken=time_taken,
        time_bonus=time_bonus,
        final_score=test_cases_passed + time_bonus,
    )


def compute_total_score(*final_scores: Optional[int]) -> int:
    return sum(score or 0 for score in final_scores)
