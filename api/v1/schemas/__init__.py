"""Re-export individual schema modules for easy imports."""

from .auth import AuthOut, Credentials
from .profile import ProfileIn, ProfileOut
from .meal import DayMeals, MealIn, MealOut, MealSaved, WeekSummary
from .analysis import AnalysisOut, NutrientScores, WeeklyReportOut
from .report import MedicalReportOut

__all__ = [
    "AuthOut",
    "Credentials",
    "ProfileIn",
    "ProfileOut",
    "DayMeals",
    "MealIn",
    "MealOut",
    "MealSaved",
    "WeekSummary",
    "AnalysisOut",
    "NutrientScores",
    "WeeklyReportOut",
    "MedicalReportOut",
]
