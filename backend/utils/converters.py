"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from utils.logger import logger

# Media ranges matching application/json, by specificity
JSON_MEDIA_RANGES = {"application/json": 2, "application/*": 1, "*/*": 0}


def safe_json_loads(value: Any, context: str, default: Any) -> Any:
    """
    Best-effort JSON loader that falls back to default on errors and logs context.
    """
    if not value:
        return default
    try:
        return json.loads(value)
    except (json.JSONDecodeError, UnicodeDecodeError):
        # The body may carry a password, so only its size is logged
        logger.warning("Could not parse {} JSON ({} bytes)", context, len(value))
        return default


def _quality(params: str) -> float:
    for param in params.split(";"):
        name, _, value = param.strip().partition("=")
        if name.strip().lower() == "q":
            try:
                return float(value)
            except ValueError:
                return 0.0
    return 1.0


def accepts_json(accept_header: Optional[str]) -> bool:
    """
    Return True when an Accept header admits a JSON response.

    The most specific matching range decides, so
    ``application/json;q=0, */*`` refuses JSON. A missing or empty header
    accepts anything.
    """
    if not accept_header or not accept_header.strip():
        return True
    best_specificity = -1
    best_quality = 0.0
    for media_range in accept_header.split(","):
        media, _, params = media_range.partition(";")
        specificity = JSON_MEDIA_RANGES.get(media.strip().lower(), -1)
        if specificity > best_specificity:
            best_specificity = specificity
            best_quality = _quality(params)
    return best_quality > 0


def add_query_params(url: str, params: Dict[str, str]) -> str:
    """Set params on url, keeping the rest of its query and its fragment."""
    parts = urlsplit(url)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in params
    ]
    query.extend(params.items())
    return urlunsplit(parts._replace(query=urlencode(query)))
