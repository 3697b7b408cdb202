"""Article generation through the OpenAI chat completions API."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from openai import OpenAI, OpenAIError

from common.errors import GenerationCapabilityError, MalformedOutputError
from generate_articles.instructions import GENERATE_ARTICLE_INSTRUCTIONS
from generate_articles.models import FactsPack

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


def format_facts_pack_for_prompt(facts_pack: FactsPack) -> str:
    """Format a facts pack into the user message for the LLM prompt."""
    facts = facts_pack.key_facts
    lines = [
        "Analyze this release and create an analytical article:",
        "",
        f"Topic: {facts_pack.topic}",
        f"Date: {facts.date}",
        f"Version: {facts.version}",
        f"Highlights: {', '.join(facts.highlights)}",
        f"Risks: {', '.join(facts.risk)}",
        f"Ecosystem: {', '.join(facts.ecosystem)}",
        "",
        "Sources:",
    ]
    for source in facts_pack.sources:
        lines.append(f"- {source.title}: {source.url}")
    lines.append("")
    lines.append("Key Facts:")
    lines.append(json.dumps(facts_pack.to_dict()["key_facts"], indent=2, ensure_ascii=False))
    return "\n".join(lines)


def _balanced_object_end(text: str, start: int) -> int | None:
    """Index just past the brace closing the one at `start`, ignoring braces in strings."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return None


def extract_json_object(text: str | None) -> dict[str, Any]:
    """Return the first well-formed, balanced JSON object found in `text`.

    Tolerates prose or code fences around the object.

    Raises:
        MalformedOutputError: No parseable JSON object is present.
    """
    if not text:
        raise MalformedOutputError("Empty response from generation capability")

    start = text.find("{")
    while start != -1:
        end = _balanced_object_end(text, start)
        if end is None:
            start = text.find("{", start + 1)
            continue
        try:
            data = json.loads(text[start:end])
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(data, dict):
            return data
        start = text.find("{", end)

    raise MalformedOutputError("No JSON object found in generation response")


def generate_article_content(
    facts_pack: FactsPack,
    model: str = DEFAULT_MODEL,
    client: OpenAI | None = None,
) -> dict[str, Any]:
    """Ask the LLM for an article and return its parsed JSON document.

    Raises:
        GenerationCapabilityError: API failure, no JSON in the response, or
            the document lacks `headline` / `body_sections`.
    """
    client = client or OpenAI(api_key=os.environ.get("OPENAI_API_KEY"))
    instructions = GENERATE_ARTICLE_INSTRUCTIONS.format(
        language=facts_pack.language or "English",
        audience=facts_pack.audience,
    )

    try:
        response = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": instructions},
                {"role": "user", "content": format_facts_pack_for_prompt(facts_pack)},
            ],
            response_format={"type": "json_object"},
        )
    except OpenAIError as e:
        raise GenerationCapabilityError(f"Generation request failed: {e}") from e

    if not response.choices:
        raise MalformedOutputError("Generation response has no choices")

    data = extract_json_object(response.choices[0].message.content)

    if not data.get("headline") or not isinstance(data.get("body_sections"), dict):
        raise GenerationCapabilityError("Invalid article structure from generation capability")

    return data
