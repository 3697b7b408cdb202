"""Optional hero image generation."""

from __future__ import annotations

import logging
import os

from openai import OpenAI, OpenAIError

from generate_articles.instructions import HERO_IMAGE_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MODEL = "dall-e-3"
IMAGE_SIZE = "1792x1024"


def build_image_prompt(topic: str) -> str:
    return HERO_IMAGE_PROMPT.format(topic=topic)


def generate_hero_image(
    prompt: str,
    model: str = DEFAULT_IMAGE_MODEL,
    client: OpenAI | None = None,
) -> str | None:
    """Return the generated image URL, or None when generation fails."""
    try:
        client = client or OpenAI(api_key=os.environ.get("OPENAI_API_KEY"))
        response = client.images.generate(model=model, prompt=prompt, size=IMAGE_SIZE, n=1)
    except OpenAIError as e:
        logger.warning("Hero image generation failed: %s", e)
        return None

    if not response.data:
        logger.warning("Hero image generation returned no data")
        return None
    return response.data[0].url
