"""
Analysis Schemas

Top-level report returned by the audit engine and the request bodies accepted by the API.
"""
from datetime import datetime
from typing import Dict, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from app.features.seo_audit.schemas.issue import AuditModel, CategoryScore, Issue, Severity
from app.platform.schemas import APIResponse

CATEGORY_KEYS: Tuple[str, ...] = (
    "meta",
    "content",
    "headings",
    "images",
    "links",
    "technical",
    "mobile",
    "social",
    "security",
    "performance",
)


class Categories(AuditModel):
    """Fixed mapping of the ten category keys to their rollups."""
    meta: CategoryScore
    content: CategoryScore
    headings: CategoryScore
    images: CategoryScore
    links: CategoryScore
    technical: CategoryScore
    mobile: CategoryScore
    social: CategoryScore
    security: CategoryScore
    performance: CategoryScore

    def items(self) -> Iterator[Tuple[str, CategoryScore]]:
        for key in CATEGORY_KEYS:
            yield key, getattr(self, key)

    def values(self) -> Iterator[CategoryScore]:
        for _, category in self.items():
            yield category

    def __getitem__(self, key: str) -> CategoryScore:
        if key not in CATEGORY_KEYS:
            raise KeyError(key)
        return getattr(self, key)


class Summary(AuditModel):
    """Issue counts by severity across all categories."""
    critical: int = 0
    warnings: int = 0
    passed: int = 0
    info: int = 0
    total: int = 0


class PageInfo(AuditModel):
    """Display-only facts about the analyzed document."""
    title: str
    description: str
    url: str
    word_count: int
    load_time: float
    page_size: str


class AnalysisResult(AuditModel):
    url: str
    analyzed_at: datetime
    overall_score: int = Field(ge=0, le=100)
    grade: str
    grade_color: str
    categories: Categories
    summary: Summary
    page_info: PageInfo

    def all_issues(self) -> Iterator[Tuple[str, Issue]]:
        """Every issue tagged with its category key, in category then evaluation order."""
        for key, category in self.categories.items():
            for issue in category.issues:
                yield key, issue


class AnalyzeRequest(BaseModel):
    """Request schema for analyzing a document"""
    markup: str = Field("", description="Raw markup of the page to audit")
    url: str = Field("", description="URL the markup was served from; may be empty")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "markup": "<!DOCTYPE html><html lang=\"en\"><head><title>Example</title></head><body></body></html>",
                "url": "https://example.com/page",
            }
        }
    )


class PrioritizedIssue(AuditModel):
    """An issue flattened out of its category for prioritization views."""
    category: str
    category_name: str
    issue: Issue


class IssueListResponse(AuditModel):
    url: str
    severity: Optional[Severity] = None
    total_issues: int
    issues: Tuple[PrioritizedIssue, ...]


class RuleDescriptor(AuditModel):
    """Catalog entry describing one possible rule outcome."""
    id: str
    category: str
    severity: Severity
    title: str
    impact: str
    points: Optional[int] = None
    max_points: int
    fix_guidance: Optional[str] = None


class RuleCatalogResponse(AuditModel):
    total_rules: int
    rules_per_category: Dict[str, int]
    rules: Tuple[RuleDescriptor, ...]


class AnalysisResponse(APIResponse[AnalysisResult]):
    """Envelope returned by /analyze and /demo."""


class IssuesResponse(APIResponse[IssueListResponse]):
    pass


class RuleCatalogEnvelope(APIResponse[RuleCatalogResponse]):
    pass
