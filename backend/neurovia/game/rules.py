from dataclasses import dataclass, field

from ..config import DEFAULT_CHALLENGE_LINKS, DEFAULT_CORRECT_FLOW, Settings
from ..enums import ComponentType

DEFAULT_TIME_BONUS_TIERS: tuple[tuple[float, int], ...] = ((5, 10), (10, 8), (15, 5), (20, 3))


@dataclass(frozen=True)
class GameRules:
    """Tunable constants of the three rounds, handed to the engine at construction."""

    quiz_question_limit: int = 12
    quiz_points_per_answer: int = 100
    quiz_bonus: int = 1200
    purchase_component_count: int = 6
    correct_flow: tuple[ComponentType, ...] = tuple(ComponentType(value) for value in DEFAULT_CORRECT_FLOW)
    round2_points_per_placement: int = 15
    round2_time_bonus_tiers: tuple[tuple[float, int], ...] = DEFAULT_TIME_BONUS_TIERS
    challenge_links: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CHALLENGE_LINKS))
    challenge_time_limit_minutes: int = 30
    round3_max_tests: int = 10
    round3_submission_time_cap_minutes: int = 30
    round3_override_time_cap_minutes: int = 25

    @property
    def schematic_slot_count(self) -> int:
        return len(self.correct_flow)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GameRules":
        tiers = tuple(
            (float(limit), int(bonus))
            for limit, bonus in sorted(settings.round2_time_bonus_tiers, key=lambda tier: tier[0])
        )
        return cls(
            quiz_question_limit=settings.quiz_question_limit,
            quiz_points_per_answer=settings.quiz_points_per_answer,
            quiz_bonus=settings.quiz_bonus,
            purchase_component_count=settings.purchase_component_count,
            correct_flow=tuple(ComponentType(value) for value in settings.correct_flow),
            round2_points_per_placement=settings.round2_points_per_placement,
            round2_time_bonus_tiers=tiers,
            challenge_links=dict(settings.challenge_links),
            challenge_time_limit_minutes=settings.challenge_time_limit_minutes,
            round3_max_tests=settings.round3_max_tests,
            round3_submission_time_cap_minutes=settings.round3_submission_time_cap_minutes,
            round3_override_time_cap_minutes=settings.round3_override_time_cap_minutes,
        )
