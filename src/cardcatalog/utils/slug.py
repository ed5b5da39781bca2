"""Slug generation for set titles."""

import re

MAX_SLUG_LENGTH = 80


def slugify(text: str) -> str:
    """Turn a set title into a URL- and key-safe slug.

    Args:
        text: Set title, e.g. "2020 Topps - Base Set"

    Returns:
        Lowercase slug, e.g. "2020-topps-base-set"
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return slug.strip("-")[:MAX_SLUG_LENGTH]
