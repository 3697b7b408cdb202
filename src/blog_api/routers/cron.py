"""Cron trigger endpoints for the content pipeline stages."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

from blog_api.dependencies import (
    get_db,
    get_pipeline_config,
    get_session_factory,
    verify_cron_secret,
)
from blog_api.models.cron import CronErrorResponse, CronSuccessResponse, CronUsageResponse
from common.errors import PipelineTimeoutError
from common.settings import PipelineConfig
from content_pipeline.run import run_content_pipeline, run_fast_pipeline, summarize_outcomes
from generate_articles.generate_articles import generate_articles
from ingest_items.ingest_items import run_ingest
from review_articles.quality_review import run_quality_checks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cron", tags=["cron"])

Authorized = [Depends(verify_cron_secret)]


def _error_response(error: Exception, message: str = "Internal server error", status_code: int = 500):
    body = CronErrorResponse(error=message, details=str(error))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post("/content-pipeline", response_model=CronSuccessResponse, dependencies=Authorized)
def trigger_content_pipeline(
    session: Annotated[Session, Depends(get_db)],
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    """Full ingest followed by a batch of diverse articles."""
    logger.info("Starting cron job: content-pipeline")
    try:
        result = run_content_pipeline(session, config)
    except Exception as e:
        logger.error("Content pipeline failed: %s", e)
        return _error_response(e)
    return CronSuccessResponse(message=result.message, results=result.to_summary())


@router.get("/content-pipeline", response_model=CronUsageResponse)
def describe_content_pipeline():
    return CronUsageResponse(
        message="Content pipeline cron endpoint",
        usage="POST to trigger content pipeline (ingest + generate multiple articles)",
        steps=[
            "1. Ingest new data from sources",
            "2. Generate diverse articles from ingested data",
            "3. Each article covers different topics/frameworks",
        ],
    )


@router.post("/fast-pipeline", response_model=CronSuccessResponse, dependencies=Authorized)
def trigger_fast_pipeline(
    factory: Annotated[sessionmaker, Depends(get_session_factory)],
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    """Fast allow-list ingest and generation under the wall-clock budget."""
    logger.info("Starting cron job: fast-pipeline")
    try:
        summary = run_fast_pipeline(factory, config)
    except PipelineTimeoutError as e:
        logger.error("Fast pipeline timed out: %s", e)
        return _error_response(e, message="Pipeline timed out", status_code=504)
    except Exception as e:
        logger.error("Fast pipeline failed: %s", e)
        return _error_response(e)
    return CronSuccessResponse(message=summary["message"], results=summary)


@router.get("/fast-pipeline", response_model=CronUsageResponse)
def describe_fast_pipeline():
    return CronUsageResponse(
        message="Fast content pipeline cron endpoint",
        usage="POST to trigger the time-budgeted pipeline over the fast source list",
        steps=[
            "1. Ingest from the fast allow-list with short timeouts",
            "2. Generate diverse articles from ingested data",
        ],
    )


@router.post("/ingest", response_model=CronSuccessResponse, dependencies=Authorized)
def trigger_ingest(
    session: Annotated[Session, Depends(get_db)],
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    logger.info("Starting cron job: ingest")
    try:
        ingested = run_ingest(session, config.full_ingest)
    except Exception as e:
        logger.error("Ingest failed: %s", e)
        return _error_response(e)
    return CronSuccessResponse(
        message=f"Ingested {ingested} new items",
        results={"ingested_count": ingested},
    )


@router.get("/ingest", response_model=CronUsageResponse)
def describe_ingest():
    return CronUsageResponse(message="Ingest cron endpoint", usage="POST to trigger data ingestion")


@router.post("/generate-article", response_model=CronSuccessResponse, dependencies=Authorized)
def trigger_generate_article(
    session: Annotated[Session, Depends(get_db)],
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    """Generate a single article from the current ranked snapshot."""
    logger.info("Starting cron job: generate-article")
    try:
        outcomes = generate_articles(session, 1, config)
    except Exception as e:
        logger.error("Article generation failed: %s", e)
        return _error_response(e)

    results = summarize_outcomes(outcomes)
    if results["articles_generated"]:
        message = "Article generated successfully"
    else:
        message = "No suitable content found for article generation"
    return CronSuccessResponse(message=message, results=results)


@router.get("/generate-article", response_model=CronUsageResponse)
def describe_generate_article():
    return CronUsageResponse(
        message="Article generation cron endpoint",
        usage="POST to trigger article generation",
    )


@router.post("/quality-check", response_model=CronSuccessResponse, dependencies=Authorized)
def trigger_quality_check(
    session: Annotated[Session, Depends(get_db)],
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
):
    logger.info("Starting cron job: quality-check")
    try:
        summary = run_quality_checks(
            session,
            limit=config.review.batch_limit,
            promote_threshold=config.review.promote_threshold,
            timeout=config.review.link_timeout,
        )
    except Exception as e:
        logger.error("Quality check failed: %s", e)
        return _error_response(e)
    return CronSuccessResponse(
        message="Quality checks completed successfully",
        results=summary.to_dict(),
    )


@router.get("/quality-check", response_model=CronUsageResponse)
def describe_quality_check():
    return CronUsageResponse(message="Quality check cron endpoint", usage="POST to trigger quality checks")
