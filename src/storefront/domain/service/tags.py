"""Tag id normalization.

``normalize_tag_id`` is the join key between the free-form tags authors
write on products and the tag metadata in ``tags.json``.
"""

from __future__ import annotations

import re

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")

# Tag ids rendered fully upper-case in display names.
ACRONYMS = frozenset({"pkm", "ai", "seo", "api", "ui", "ux", "it", "hr"})


def normalize_tag_id(tag: str) -> str:
    """Lower-case *tag* and collapse each run of other characters to ``-``.

    Idempotent: ``normalize_tag_id(normalize_tag_id(s)) == normalize_tag_id(s)``.
    Leading/trailing separators are kept as a single ``-``.
    """
    return _NON_ALNUM_RUN.sub("-", tag.lower())


def tag_display_name(tag_id: str) -> str:
    """Default display name for a tag id: ``"second-brain"`` -> ``"Second Brain"``."""
    if tag_id in ACRONYMS:
        return tag_id.upper()
    return " ".join(word[:1].upper() + word[1:] for word in tag_id.split("-"))
