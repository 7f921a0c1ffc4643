from __future__ import annotations

import re

_AROUND_COLON = re.compile(r"\s*:\s*")


def is_visible(style_text: str | None) -> bool:
    """Decide whether a collapsible panel is shown from its inline style.

    The panel is only hidden by an explicit ``display:none`` declaration; a
    missing style attribute or any other declaration leaves it visible.
    """
    if style_text is None:
        return True
    normalized = _AROUND_COLON.sub(":", style_text.lower())
    return "display:none" not in normalized
