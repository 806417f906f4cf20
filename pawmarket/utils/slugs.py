import re
import unicodedata
from uuid import uuid4

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str, fallback: str = "item") -> str:
    """Lower-case ASCII slug with runs of other characters collapsed to '-'."""
    normalized = (
        unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    )
    slug = _NON_ALNUM.sub("-", normalized.lower()).strip("-")
    return slug or fallback


def short_token(length: int = 8) -> str:
    return uuid4().hex[:length]
