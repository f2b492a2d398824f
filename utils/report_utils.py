import math
from typing import Any, Mapping, Optional


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, as score arithmetic expects (round() is banker's)."""
    return int(math.floor(value + 0.5))


def score_category(score: Optional[int]) -> str:
    if score is None:
        return "Needs Improvement"
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs Improvement"


def is_answered(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def completion_percentage(answers: Optional[Mapping[str, Any]]) -> int:
    """Share of answer values that are filled in, 0-100."""
    if not answers or not isinstance(answers, Mapping):
        return 0
    completed = sum(1 for value in answers.values() if is_answered(value))
    return round_half_up(completed / len(answers) * 100)


def formatted_question(order: int, question_text: str) -> str:
    return f"{order + 1}. {question_text}"


def ingredient_count(ingredients) -> int:
    return len(ingredients or [])


def user_profile(user) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "company": user.company,
        "role": user.role,
        "isActive": user.is_active,
        "lastLogin": user.last_login.isoformat() if user.last_login else None,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }
