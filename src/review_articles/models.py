"""Data models for the review_articles pipeline stage."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional


class CheckType(str, enum.Enum):
    LINK_VALIDATION = "link_validation"
    CONTENT_ANALYSIS = "content_analysis"
    FACT_CHECK = "fact_check"
    SEO_CHECK = "seo_check"


class CheckStatus(str, enum.Enum):
    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"


@dataclass
class QualityCheck:
    id: str
    type: CheckType
    status: CheckStatus
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class QualityReport:
    """Scored collection of checks for one article."""
    article_id: Optional[int]
    overall_score: int
    checks: list[QualityCheck] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return any(check.status == CheckStatus.FAILED for check in self.checks)

    def to_dict(self) -> dict[str, Any]:
        return {
            "article_id": self.article_id,
            "overall_score": self.overall_score,
            "checks": [
                {
                    "id": c.id,
                    "type": c.type.value,
                    "status": c.status.value,
                    "message": c.message,
                    "details": c.details,
                }
                for c in self.checks
            ],
            "recommendations": self.recommendations,
        }


@dataclass
class ReviewSummary:
    checked: int = 0
    promoted: int = 0
    failed: int = 0
    reports: list[QualityReport] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "checked": self.checked,
            "promoted": self.promoted,
            "failed": self.failed,
            "scores": {str(r.article_id): r.overall_score for r in self.reports},
        }
