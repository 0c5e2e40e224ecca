"""
core/recommendation.py
────────────────────────────────────────────────────────────────────────
Weekly nutrient analysis:

  • compute_nutrient_scores()  → coverage baseline + random perturbation
  • build_recommendations()    → lowest-nutrient tip + condition advice
  • analyze_week()             → both of the above, stamped with a week

Everything here is pure.  Randomness comes from an injectable source
(anything with a `random()` method returning a float in [0, 1)), so
tests can pin the scores.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Protocol, Sequence

import numpy as np

from core.models.meal import MealEntry
from core.models.profile import MedicalConditionSet
from core.models.report import NUTRIENTS, NutrientScoreSet, WeeklyReport

_LOG = logging.getLogger(__name__)

FULL_WEEK_MEALS = 21          # 3 meals × 7 days
MAX_PERTURBATION = 20.0       # percentage points
SCORE_FLOOR, SCORE_CEIL = 20.0, 100.0


class RandomSource(Protocol):
    def random(self) -> float: ...


# ──────────────── message tables ──────────────────
# nutrient → (condition that switches wording, variant, default)
_NUTRIENT_TIPS: dict[str, tuple[str, str, str]] = {
    "iron": (
        "diabetes",
        "Add spinach, lentils, and chickpeas to your meals (avoid high sugar fruits)",
        "Increase intake of red meat, spinach, lentils, and fortified cereals",
    ),
    "calcium": (
        "hypertension",
        "Include low-fat dairy, tofu, and leafy greens (watch sodium content)",
        "Add dairy products, fortified plant milk, and calcium-rich greens",
    ),
    "potassium": (
        "cholesterol",
        "Eat more bananas, sweet potatoes, and avocados (heart-healthy options)",
        "Include bananas, potatoes, beans, and fish in your diet",
    ),
    "magnesium": (
        "diabetes",
        "Add almonds, pumpkin seeds, and whole grains (portion controlled)",
        "Consume more nuts, seeds, whole grains, and dark chocolate",
    ),
}

CONDITION_ADVICE: dict[str, tuple[str, str]] = {
    "diabetes": (
        "Focus on complex carbohydrates and avoid refined sugars",
        "Include fiber-rich foods to help manage blood sugar",
    ),
    "hypertension": (
        "Reduce sodium intake and increase potassium-rich foods",
        "Choose fresh foods over processed options",
    ),
    "cholesterol": (
        "Include omega-3 fatty acids from fish and nuts",
        "Avoid trans fats and limit saturated fats",
    ),
}


# ──────────────── scoring ──────────────────
def _clamp(v: float) -> float:
    return max(SCORE_FLOOR, min(SCORE_CEIL, v))


def compute_nutrient_scores(
    meals: Sequence[MealEntry],
    rng: RandomSource | None = None,
) -> NutrientScoreSet:
    """
    Placeholder estimate: how much of a fully logged week is covered,
    nudged upward by up to 20 points per nutrient.  Never below 20,
    even for an empty week.
    """
    rng = rng if rng is not None else np.random.default_rng()
    baseline = min(1.0, len(meals) / FULL_WEEK_MEALS) * 100
    scores = {k: _clamp(baseline + float(rng.random()) * MAX_PERTURBATION) for k in NUTRIENTS}
    return NutrientScoreSet(**scores)


def lowest_nutrient(scores: NutrientScoreSet) -> str:
    """First nutrient (iron → magnesium) holding the strict minimum."""
    name, low = NUTRIENTS[0], getattr(scores, NUTRIENTS[0])
    for k, v in scores.items()[1:]:
        if v < low:
            name, low = k, v
    return name


def build_recommendations(
    scores: NutrientScoreSet,
    conditions: MedicalConditionSet,
) -> list[str]:
    nutrient = lowest_nutrient(scores)
    flag, variant, default = _NUTRIENT_TIPS[nutrient]
    out = [variant if flag in conditions else default]

    for cond in conditions.tracked():
        out.extend(CONDITION_ADVICE[cond])
    return out


# ──────────────── composition ──────────────────
def analyze_week(
    meals: Sequence[MealEntry],
    conditions: MedicalConditionSet,
    week_start: dt.date,
    week_end: dt.date,
    rng: RandomSource | None = None,
    min_meals: int = 1,
) -> WeeklyReport | None:
    """Return None when there is not enough logged data to say anything."""
    if len(meals) < max(min_meals, 1):
        _LOG.debug("insufficient data: %d meal(s), need %d", len(meals), min_meals)
        return None

    scores = compute_nutrient_scores(meals, rng)
    recs = build_recommendations(scores, conditions)
    return WeeklyReport(
        week_start=week_start,
        week_end=week_end,
        scores=scores,
        recommendations=tuple(recs),
    )
