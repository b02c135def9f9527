"""Helpers for turning model output and tool results into text."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from grok_search.types import SearchResult

_logger = logging.getLogger(__name__)

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")


def parse_search_results(text: str) -> list[SearchResult]:
    """Extract the JSON array of hits from the model's answer.

    Prose or code fences around the array are ignored.  Elements that are
    not valid hits are skipped; an unparsable answer yields ``[]``.
    """
    match = _JSON_ARRAY.search(text)
    if not match:
        return []
    try:
        raw = json.loads(match.group(0))
    except json.JSONDecodeError:
        return []
    if not isinstance(raw, list):
        return []

    results: list[SearchResult] = []
    for item in raw:
        try:
            results.append(SearchResult.model_validate(item))
        except ValidationError:
            _logger.debug("Skipping malformed search result: %r", item)
    return results


def format_json(data: Any) -> str:
    """Pretty-print *data* the way every JSON tool response is rendered."""
    return json.dumps(data, indent=2, ensure_ascii=False)
