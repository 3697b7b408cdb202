"""Error types raised across the content pipeline."""

from __future__ import annotations


class ContentPipelineError(Exception):
    """Base class for pipeline errors."""


class SourceFetchError(ContentPipelineError):
    """Fetching or parsing one source failed. The source is skipped."""

    def __init__(self, source_name: str, message: str):
        super().__init__(f"{source_name}: {message}")
        self.source_name = source_name


class DuplicateItemError(ContentPipelineError):
    """A raw item with the same fingerprint is already stored."""


class GenerationCapabilityError(ContentPipelineError):
    """The LLM call failed or returned structurally unusable output."""


class MalformedOutputError(GenerationCapabilityError):
    """The LLM response did not contain a well-formed JSON object."""


class ValidationError(ContentPipelineError):
    """Generated content failed editorial or structural checks."""

    def __init__(self, issues: list[str]):
        super().__init__("; ".join(issues))
        self.issues = issues


class DuplicateArticleError(ContentPipelineError):
    """A near-duplicate article was published within the duplicate window."""


class PersistenceError(ContentPipelineError):
    """Writing an article and its citations/tags failed and was rolled back."""


class PipelineTimeoutError(ContentPipelineError):
    """The run exceeded its wall-clock budget."""


class AuthorizationError(ContentPipelineError):
    """Trigger request did not carry the configured secret."""
