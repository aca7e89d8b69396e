"""Heading slug generation for anchors and TOC links"""

import re

_DISALLOWED = re.compile(r"[^a-z0-9-]")


def slugify(text: str) -> str:
    """
    Lower-case, turn spaces into hyphens, then drop everything outside ``[a-z0-9-]``.

    Non-ASCII letters are dropped too, so a heading written entirely in another
    script yields an empty slug. Collisions are left as they are.
    """
    return _DISALLOWED.sub("", text.lower().replace(" ", "-"))
