import re


def slugify(value: str) -> str:
    """Lower-case, hyphen-separated slug used in category and company URLs."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "item"
