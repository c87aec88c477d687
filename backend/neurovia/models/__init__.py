from .admin import Admin
from .component import Component
from .quiz_question import QuizQuestion
from .team import Team

__all__ = [
    "Admin",
    "Component",
    "QuizQuestion",
    "Team",
]
