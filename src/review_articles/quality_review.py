"""Quality review of persisted articles: links, content, SEO and facts."""

from __future__ import annotations

import logging
import re
from typing import Iterable

import requests
from sqlalchemy.orm import Session

from generate_articles.models import FactsPack
from generate_articles.render import count_words
from generate_articles.validate import FORBIDDEN_PHRASES
from rank_items.keywords import SEMVER_PATTERN
from review_articles.models import (
    CheckStatus,
    CheckType,
    QualityCheck,
    QualityReport,
    ReviewSummary,
)
from storage.articles import get_articles_needing_review, update_review_status
from storage.models import Article, ReviewStatus

logger = logging.getLogger(__name__)

LINK_TIMEOUT = 10
USER_AGENT = "release-notes-blog/1.0 (link checker)"

MIN_WORDS = 200
MAX_WORDS = 3000
MIN_HEADINGS = 2
MIN_TITLE_LENGTH = 30
MAX_TITLE_LENGTH = 60
MIN_DEK_LENGTH = 120
MAX_DEK_LENGTH = 160
PROMOTE_THRESHOLD = 80
LOW_SCORE_THRESHOLD = 70

_CODE_PATTERN = re.compile(r"<pre|<code", re.IGNORECASE)
_HEADING_PATTERN = re.compile(r"<h[1-6]", re.IGNORECASE)
_BREAKING_PATTERN = re.compile(r"breaking changes?", re.IGNORECASE)


def validate_links(urls: Iterable[str], timeout: float = LINK_TIMEOUT) -> list[QualityCheck]:
    """HEAD each URL, following redirects. Any status below 400 passes."""
    checks = []
    for url in urls:
        try:
            response = requests.head(
                url,
                timeout=timeout,
                allow_redirects=True,
                headers={"User-Agent": USER_AGENT},
            )
        except requests.RequestException as e:
            checks.append(QualityCheck(
                id=f"link_{url}",
                type=CheckType.LINK_VALIDATION,
                status=CheckStatus.FAILED,
                message=f"Link validation failed: {url}",
                details={"error": str(e)},
            ))
            continue

        if response.ok:
            checks.append(QualityCheck(
                id=f"link_{url}",
                type=CheckType.LINK_VALIDATION,
                status=CheckStatus.PASSED,
                message=f"Link is accessible: {url}",
                details={"status": response.status_code},
            ))
        else:
            checks.append(QualityCheck(
                id=f"link_{url}",
                type=CheckType.LINK_VALIDATION,
                status=CheckStatus.FAILED,
                message=f"Link returned {response.status_code}: {url}",
                details={"status": response.status_code},
            ))
    return checks


def _warning(check_id: str, check_type: CheckType, message: str, **details) -> QualityCheck:
    return QualityCheck(
        id=check_id,
        type=check_type,
        status=CheckStatus.WARNING,
        message=message,
        details=details,
    )


def analyze_content(body_html: str) -> list[QualityCheck]:
    """Warnings for cliches, length outside bounds, missing code and thin heading structure."""
    body_html = body_html or ""
    checks = []

    lowered = body_html.lower()
    for phrase in FORBIDDEN_PHRASES:
        if phrase in lowered:
            checks.append(_warning(
                f"content_pattern_{phrase}",
                CheckType.CONTENT_ANALYSIS,
                f'Avoid cliche phrases like "{phrase}"',
                pattern=phrase,
            ))

    word_count = count_words(body_html)
    if word_count < MIN_WORDS:
        checks.append(_warning(
            "content_length_short",
            CheckType.CONTENT_ANALYSIS,
            f"Content is quite short (less than {MIN_WORDS} words)",
            word_count=word_count,
        ))
    elif word_count > MAX_WORDS:
        checks.append(_warning(
            "content_length_long",
            CheckType.CONTENT_ANALYSIS,
            f"Content is quite long (more than {MAX_WORDS} words)",
            word_count=word_count,
        ))

    if not _CODE_PATTERN.search(body_html):
        checks.append(_warning(
            "content_no_code",
            CheckType.CONTENT_ANALYSIS,
            "No code snippets found - consider adding examples",
        ))

    heading_count = len(_HEADING_PATTERN.findall(body_html))
    if heading_count < MIN_HEADINGS:
        checks.append(_warning(
            "content_headings",
            CheckType.CONTENT_ANALYSIS,
            "Consider adding more headings for better structure",
            heading_count=heading_count,
        ))

    return checks


def analyze_seo(article) -> list[QualityCheck]:
    """Warnings for title and dek length and a missing hero image."""
    checks = []
    title = article.title or ""

    if len(title) < MIN_TITLE_LENGTH:
        checks.append(_warning(
            "seo_title_short",
            CheckType.SEO_CHECK,
            f"Title is quite short (less than {MIN_TITLE_LENGTH} characters)",
            length=len(title),
        ))
    elif len(title) > MAX_TITLE_LENGTH:
        checks.append(_warning(
            "seo_title_long",
            CheckType.SEO_CHECK,
            f"Title is quite long (more than {MAX_TITLE_LENGTH} characters)",
            length=len(title),
        ))

    dek = article.dek or ""
    if dek:
        if len(dek) < MIN_DEK_LENGTH:
            checks.append(_warning(
                "seo_description_short",
                CheckType.SEO_CHECK,
                f"Description is quite short (less than {MIN_DEK_LENGTH} characters)",
                length=len(dek),
            ))
        elif len(dek) > MAX_DEK_LENGTH:
            checks.append(_warning(
                "seo_description_long",
                CheckType.SEO_CHECK,
                f"Description is quite long (more than {MAX_DEK_LENGTH} characters)",
                length=len(dek),
            ))

    if not article.hero_url:
        checks.append(_warning(
            "seo_no_hero_image",
            CheckType.SEO_CHECK,
            "No hero image - consider adding one for better social sharing",
        ))

    return checks


def fact_check_article(body_html: str, facts_pack: FactsPack) -> list[QualityCheck]:
    """Warnings for versions the facts pack doesn't know and unmentioned risks."""
    body_html = body_html or ""
    checks = []

    fact_version = facts_pack.key_facts.version
    fact_versions = [fact_version.lstrip("vV")] if fact_version else []
    for version in dict.fromkeys(SEMVER_PATTERN.findall(body_html)):
        if version not in fact_versions:
            checks.append(_warning(
                f"fact_version_{version}",
                CheckType.FACT_CHECK,
                f"Version {version} mentioned but not in facts pack",
                version=version,
                fact_versions=fact_versions,
            ))

    risks = facts_pack.key_facts.risk
    if risks and not _BREAKING_PATTERN.search(body_html):
        checks.append(_warning(
            "fact_breaking_changes",
            CheckType.FACT_CHECK,
            "Breaking changes detected in facts but not highlighted in article",
            risks=list(risks),
        ))

    return checks


def score_checks(checks: list[QualityCheck]) -> int:
    """round((passed + 0.5 * warnings) / total * 100), 100 with no checks."""
    if not checks:
        return 100
    passed = sum(1 for c in checks if c.status == CheckStatus.PASSED)
    warnings = sum(1 for c in checks if c.status == CheckStatus.WARNING)
    return round((passed + warnings * 0.5) / len(checks) * 100)


def build_quality_report(article: Article, timeout: float = LINK_TIMEOUT) -> QualityReport:
    checks: list[QualityCheck] = []

    citation_urls = [citation.url for citation in article.citations]
    if citation_urls:
        checks.extend(validate_links(citation_urls, timeout=timeout))
    checks.extend(analyze_content(article.body_html))
    checks.extend(analyze_seo(article))

    score = score_checks(checks)
    recommendations = []
    if any(c.status == CheckStatus.FAILED for c in checks):
        recommendations.append("Fix failed checks before publishing")
    if any(c.status == CheckStatus.WARNING for c in checks):
        recommendations.append("Consider addressing warning items for better quality")
    if score < LOW_SCORE_THRESHOLD:
        recommendations.append("Overall quality score is low - review and improve content")

    return QualityReport(
        article_id=article.id,
        overall_score=score,
        checks=checks,
        recommendations=recommendations,
    )


def run_quality_checks(
    session: Session,
    limit: int = 10,
    promote_threshold: int = PROMOTE_THRESHOLD,
    timeout: float = LINK_TIMEOUT,
) -> ReviewSummary:
    """Review the newest `needs_review` articles and promote the ones that pass.

    An article is promoted to `reviewed` when its score reaches
    `promote_threshold` and no check failed. A failure on one article is
    logged and the batch continues.
    """
    articles = get_articles_needing_review(session, limit)
    logger.info("Running quality checks on %d articles", len(articles))

    summary = ReviewSummary()
    for article in articles:
        try:
            report = build_quality_report(article, timeout=timeout)
            summary.checked += 1
            summary.reports.append(report)
            logger.info("Quality report for article %s: %d%%", article.id, report.overall_score)

            if report.overall_score >= promote_threshold and not report.has_failures:
                update_review_status(session, article, ReviewStatus.REVIEWED)
                summary.promoted += 1
                logger.info("Article %s auto-approved based on quality score", article.id)
        except Exception as e:
            session.rollback()
            summary.failed += 1
            logger.error("Failed to check article %s: %s", article.id, e)

    logger.info(
        "Quality checks completed: %d checked, %d promoted, %d failed",
        summary.checked, summary.promoted, summary.failed,
    )
    return summary
