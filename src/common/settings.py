"""Pipeline configuration loaded from configs/<name>.yaml and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from common.config import LazyConfig, find_config_path, load_yaml

load_dotenv()

DEFAULT_TRUSTED_DOMAINS = [
    "github.com",
    "npmjs.com",
    "react.dev",
    "nextjs.org",
    "vuejs.org",
    "angular.dev",
    "angular.io",
    "svelte.dev",
    "nodejs.org",
    "typescriptlang.org",
    "devblogs.microsoft.com",
    "developer.mozilla.org",
    "mozilla.org",
    "chromereleases.googleblog.com",
    "developer.chrome.com",
    "aws.amazon.com",
    "azure.microsoft.com",
    "cloud.google.com",
    "vercel.com",
    "netlify.com",
    "openai.com",
    "anthropic.com",
    "huggingface.co",
    "ai.meta.com",
    "blog.google",
    "postgresql.org",
    "redis.io",
    "python.org",
    "rust-lang.org",
    "go.dev",
    "deno.com",
    "bun.sh",
    "vitejs.dev",
]


@dataclass
class IngestSettings:
    request_timeout: float = 30
    max_entries: int = 10
    github_page_size: int = 10
    registry_versions: int = 5
    source_delay_seconds: float = 1.0
    user_agent: str = "release-notes-blog/1.0 (feed reader)"


@dataclass
class RankingSettings:
    min_score: float = 0.3
    max_items: int = 50
    priority_sources: list[int] = field(default_factory=list)
    snapshot_size: int = 100


@dataclass
class GenerationSettings:
    model: str = "gpt-4o-mini"
    batch_size: int = 3
    duplicate_window_days: int = 7
    audience: str = "experienced web developers"
    language: str = "en"
    image_enabled: bool = False
    image_model: str = "dall-e-3"
    trusted_domains: list[str] = field(default_factory=lambda: list(DEFAULT_TRUSTED_DOMAINS))


@dataclass
class ReviewSettings:
    link_timeout: float = 10
    batch_limit: int = 10
    promote_threshold: int = 80


@dataclass
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class PipelineConfig:
    full_ingest: IngestSettings = field(default_factory=IngestSettings)
    fast_ingest: IngestSettings = field(
        default_factory=lambda: IngestSettings(
            request_timeout=5,
            max_entries=10,
            github_page_size=5,
            source_delay_seconds=0.2,
        )
    )
    ranking: RankingSettings = field(default_factory=RankingSettings)
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    review: ReviewSettings = field(default_factory=ReviewSettings)
    server: ServerSettings = field(default_factory=ServerSettings)
    fast_budget_seconds: float = 240
    cron_secret: str | None = None
    public_base_url: str = "http://localhost:8000"


def _parse_ingest(data: dict, defaults: IngestSettings) -> IngestSettings:
    return IngestSettings(
        request_timeout=data.get("request_timeout", defaults.request_timeout),
        max_entries=data.get("max_entries", defaults.max_entries),
        github_page_size=data.get("github_page_size", defaults.github_page_size),
        registry_versions=data.get("registry_versions", defaults.registry_versions),
        source_delay_seconds=data.get("source_delay_seconds", defaults.source_delay_seconds),
        user_agent=data.get("user_agent", defaults.user_agent),
    )


def parse_config(data: dict) -> PipelineConfig:
    """Parse config dictionary into PipelineConfig, filling secrets from env."""
    base = PipelineConfig()
    ingest = data.get("ingest", {})
    ranking = data.get("ranking", {})
    generation = data.get("generation", {})
    review = data.get("review", {})
    server = data.get("server", {})

    return PipelineConfig(
        full_ingest=_parse_ingest(ingest.get("full", {}), base.full_ingest),
        fast_ingest=_parse_ingest(ingest.get("fast", {}), base.fast_ingest),
        ranking=RankingSettings(
            min_score=ranking.get("min_score", base.ranking.min_score),
            max_items=ranking.get("max_items", base.ranking.max_items),
            priority_sources=ranking.get("priority_sources", []),
            snapshot_size=ranking.get("snapshot_size", base.ranking.snapshot_size),
        ),
        generation=GenerationSettings(
            model=generation.get("model", base.generation.model),
            batch_size=generation.get("batch_size", base.generation.batch_size),
            duplicate_window_days=generation.get(
                "duplicate_window_days", base.generation.duplicate_window_days
            ),
            audience=generation.get("audience", base.generation.audience),
            language=generation.get("language", base.generation.language),
            image_enabled=generation.get("image_enabled", base.generation.image_enabled),
            image_model=generation.get("image_model", base.generation.image_model),
            trusted_domains=generation.get("trusted_domains", list(DEFAULT_TRUSTED_DOMAINS)),
        ),
        review=ReviewSettings(
            link_timeout=review.get("link_timeout", base.review.link_timeout),
            batch_limit=review.get("batch_limit", base.review.batch_limit),
            promote_threshold=review.get("promote_threshold", base.review.promote_threshold),
        ),
        server=ServerSettings(
            host=server.get("host", base.server.host),
            port=server.get("port", base.server.port),
        ),
        fast_budget_seconds=data.get("fast_budget_seconds", base.fast_budget_seconds),
        cron_secret=os.environ.get("CRON_SECRET") or None,
        public_base_url=os.environ.get("PUBLIC_BASE_URL", base.public_base_url),
    )


def load_config(config_name: str | None = None) -> PipelineConfig:
    """Load configuration from configs/<name>.yaml (CONFIG_ENV, default "prod")."""
    return parse_config(load_yaml(find_config_path(config_name)))


_manager = LazyConfig(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
