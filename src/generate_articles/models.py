"""Data models for the generate_articles pipeline stage."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from common.errors import ValidationError


@dataclass
class SourceRef:
    url: str
    title: str = ""


@dataclass
class KeyFacts:
    version: str = ""
    date: str = ""
    highlights: list[str] = field(default_factory=list)
    risk: list[str] = field(default_factory=list)
    ecosystem: list[str] = field(default_factory=list)


@dataclass
class FactsPack:
    """Structured brief handed to the generation capability."""
    topic: str
    sources: list[SourceRef]
    key_facts: KeyFacts
    audience: str = "experienced web developers"
    language: str = "en"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class BodySections:
    summary_150w: str = ""
    what_changed: list[str] = field(default_factory=list)
    why_it_matters: list[str] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)
    breaking_changes: list[str] = field(default_factory=list)


@dataclass
class CodeSnippet:
    lang: str
    title: str
    code: str


@dataclass
class CitationRef:
    url: str
    title: Optional[str] = None


@dataclass
class ArticleContent:
    """Sanitized LLM output."""
    headline: str
    dek: str
    body_sections: BodySections
    citations: list[CitationRef] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    code_snippet: Optional[CodeSnippet] = None


@dataclass
class ValidationResult:
    """Outcome of editorial/structural checks.

    `soft_issues` is the subset of `issues` that only flags the article for
    review instead of rejecting it.
    """
    issues: list[str] = field(default_factory=list)
    soft_issues: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.issues) == 0

    @property
    def blocking_issues(self) -> list[str]:
        return [issue for issue in self.issues if issue not in self.soft_issues]

    def raise_for_blocking(self) -> None:
        if self.blocking_issues:
            raise ValidationError(self.blocking_issues)


class CandidateState(str, enum.Enum):
    SELECTED = "selected"
    FACTS_BUILT = "facts_built"
    GENERATING = "generating"
    GENERATED = "generated"
    VALIDATING = "validating"
    PERSISTED = "persisted"
    REJECTED = "rejected"
    GENERATION_FAILED = "generation_failed"
    PERSISTENCE_FAILED = "persistence_failed"


TERMINAL_STATES = frozenset({
    CandidateState.PERSISTED,
    CandidateState.REJECTED,
    CandidateState.GENERATION_FAILED,
    CandidateState.PERSISTENCE_FAILED,
})


@dataclass
class CandidateOutcome:
    """Where one selected item ended up in a generation run."""
    item_id: Optional[int]
    title: Optional[str]
    state: CandidateState = CandidateState.SELECTED
    article: Any = None
    issues: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES
