"""
Issue Schemas

Rule verdicts and the per-category rollup built from them.
"""
import math
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

Severity = Literal["critical", "warning", "info", "success"]
Impact = Literal["high", "medium", "low"]

SEVERITIES: Tuple[str, ...] = ("critical", "warning", "info", "success")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, the way score percentages are displayed."""
    return int(math.floor(value + 0.5))


class AuditModel(BaseModel):
    """Base for every engine model: immutable, camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Issue(AuditModel):
    """The verdict of evaluating one rule against a document."""
    id: str
    severity: Severity
    title: str
    description: str
    fix_guidance: Optional[str] = None
    impact: Impact
    points: int = Field(ge=0)
    max_points: int = Field(ge=0)

    @model_validator(mode="after")
    def _points_within_max(self) -> "Issue":
        if self.points > self.max_points:
            raise ValueError(f"points ({self.points}) exceed max_points ({self.max_points}) for {self.id}")
        return self

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "meta-1",
                "severity": "critical",
                "title": "Missing Page Title",
                "description": "Your page has no title tag. The title is crucial for SEO and appears in search results.",
                "fixGuidance": "Add a <title> tag inside the <head> section of your HTML.",
                "impact": "high",
                "points": 0,
                "maxPoints": 20,
            }
        }
    )


class CategoryScore(AuditModel):
    """
    One category's rollup.

    score, max_score and percentage are derived from `issues` and are never stored
    separately, so the totals always match the emitted verdicts.
    """
    name: str
    icon: str
    issues: Tuple[Issue, ...] = ()

    @computed_field(alias="score")
    @property
    def score(self) -> int:
        return sum(issue.points for issue in self.issues)

    @computed_field(alias="maxScore")
    @property
    def max_score(self) -> int:
        return sum(issue.max_points for issue in self.issues)

    @computed_field(alias="percentage")
    @property
    def percentage(self) -> int:
        if self.max_score == 0:
            return 0
        return round_half_up(self.score / self.max_score * 100)

    def issue(self, issue_id: str) -> Optional[Issue]:
        """Look up a verdict by its rule id."""
        for item in self.issues:
            if item.id == issue_id:
                return item
        return None
