from typing import Tuple

# (minimum overall score, grade, display color), checked top to bottom
GRADE_BANDS: Tuple[Tuple[int, str, str], ...] = (
    (90, "A+", "#10b981"),
    (80, "A", "#22c55e"),
    (70, "B", "#84cc16"),
    (60, "C", "#eab308"),
    (50, "D", "#f97316"),
)
FAILING_GRADE = ("F", "#ef4444")

GRADE_DESCRIPTIONS = {
    "A+": "Excellent! Your page is well-optimized for SEO.",
    "A": "Great job! Minor improvements can make it even better.",
    "B": "Good! There are some areas that need attention.",
    "C": "Average. Several improvements are recommended.",
    "D": "Needs work. Multiple issues should be addressed.",
    "F": "Critical issues found. Immediate action required.",
}


def calculate_grade(score: int) -> Tuple[str, str]:
    """
    Map an overall score to its letter grade and display color.

    Args:
        score: Overall score between 0 and 100

    Returns:
        (grade, hex color) tuple
    """
    for minimum, grade, color in GRADE_BANDS:
        if score >= minimum:
            return grade, color
    return FAILING_GRADE


def grade_description(grade: str) -> str:
    """One-line verdict for a grade; unknown grades get the failing verdict."""
    return GRADE_DESCRIPTIONS.get(grade, GRADE_DESCRIPTIONS["F"])
