import re
import secrets


def slugify(value: str) -> str:
    """Lower-case ``value`` and collapse anything that is not a letter or digit into single hyphens."""
    slug = re.sub(r"[^a-z0-9]+", "-", (value or "").lower()).strip("-")
    if not slug:
        raise ValueError("value must contain letters or digits")
    return slug


def unique_slug(value: str) -> str:
    """Slug with a short random suffix, for names that are not unique on their own."""
    return f"{slugify(value)}-{secrets.token_hex(3)}"


__all__ = ["slugify", "unique_slug"]
