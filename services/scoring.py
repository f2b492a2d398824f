import math
import random
from typing import Any, Mapping, Optional

from utils.report_utils import round_half_up

# Baseline used when the AI result carries no usable score, inclusive range
FALLBACK_BASELINE_MIN = 40
FALLBACK_BASELINE_MAX = 79

AI_WEIGHT = 0.6
COMPLETENESS_WEIGHT = 0.4

# Matched in order against the lowercased category, first hit wins
CATEGORY_BOOSTS = [
    (("skincare",), 5),
    (("food",), 4),
    (("personal", "care"), 3),
    (("cleaning",), 3),
    (("clothing", "apparel"), 2),
    (("electronics",), 1),
]

_default_rng = random.Random()


def _finite_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def ai_base_score(ai_result: Optional[Mapping[str, Any]]) -> Optional[int]:
    """Score reported by the AI, clamped to 0-100, or None when absent or not finite."""
    if not isinstance(ai_result, Mapping):
        return None
    raw = ai_result.get("transparencyScore")
    if raw is None:
        raw = ai_result.get("score")
    number = _finite_number(raw)
    if number is None:
        return None
    return clamp(round_half_up(number))


def expected_question_count(ai_result: Optional[Mapping[str, Any]]) -> Optional[int]:
    if not isinstance(ai_result, Mapping):
        return None
    for key in ("questions", "expectedQuestions"):
        questions = ai_result.get(key)
        if isinstance(questions, list):
            return len(questions)
    return None


def category_boost(category: Optional[str]) -> int:
    category = str(category or "").lower()
    for keywords, boost in CATEGORY_BOOSTS:
        if any(keyword in category for keyword in keywords):
            return boost
    return 0


def derive_transparency_score(
    ai_result: Optional[Mapping[str, Any]],
    category: Optional[str],
    answers: Optional[Mapping[str, Any]],
    rng: Optional[random.Random] = None,
) -> int:
    """Blend the AI score with answer completeness and a category bonus.

    The result is 60% AI base and 40% completeness. Reasonably complete
    submissions (at least half of the expected questions) earn the category
    boost, sparse ones lose up to 5 points. Without a usable AI score the
    base is drawn from ``rng`` in [40, 79]; pass a seeded or stub ``rng`` for
    reproducible results. Always returns an int in [0, 100].
    """
    base = ai_base_score(ai_result)
    if base is None:
        base = (rng or _default_rng).randint(FALLBACK_BASELINE_MIN, FALLBACK_BASELINE_MAX)

    answered_count = len(answers) if isinstance(answers, Mapping) else 0
    question_count = expected_question_count(ai_result)
    if question_count is None:
        question_count = max(1, answered_count)

    completeness_ratio = min(1.0, answered_count / question_count) if question_count > 0 else 0.0
    completeness_percent = round_half_up(completeness_ratio * 100)

    computed = round_half_up(base * AI_WEIGHT + completeness_percent * COMPLETENESS_WEIGHT)
    if completeness_ratio >= 0.5:
        computed += category_boost(category)
    else:
        computed -= max(0, math.floor((1 - completeness_ratio) * 5))

    return clamp(computed)
