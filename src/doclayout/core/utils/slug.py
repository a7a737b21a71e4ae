"""Slug generation for layout output file names"""

import re


def slugify(text: str, fallback: str = "") -> str:
    """Convert text to a lowercase, hyphen-separated slug; fallback when nothing survives."""
    text = re.sub(r'[^\w\s-]', '', text.lower())
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-') or fallback
