"""
Presets Module
Named comparison options for common tolerance policies.
"""

from ..core.options import HTMLCompareOptions


def relaxed() -> HTMLCompareOptions:
    """Ignore all formatting differences: attributes, comments and sibling order."""
    return HTMLCompareOptions(
        ignore_whitespace=True,
        ignore_attributes=True,
        ignore_text=False,
        ignore_comments=True,
        ignore_sibling_order=True
    )


def strict() -> HTMLCompareOptions:
    """Strict about everything except whitespace between tags."""
    return HTMLCompareOptions(
        ignore_whitespace=True,
        ignore_attributes=False,
        ignore_text=False,
        ignore_comments=False,
        ignore_sibling_order=False
    )


def markdown() -> HTMLCompareOptions:
    """Suited to rendered markdown, where heading ids are generated."""
    return HTMLCompareOptions(
        ignore_whitespace=True,
        ignore_attributes=False,
        ignored_attributes={'id'},
        ignore_text=False,
        ignore_comments=True,
        ignore_sibling_order=False
    )


PRESETS = {
    'relaxed': relaxed,
    'strict': strict,
    'markdown': markdown
}


def get_preset(name: str) -> HTMLCompareOptions:
    try:
        return PRESETS[name]()
    except KeyError:
        raise ValueError(f"Unknown preset {name!r}; expected one of {sorted(PRESETS)}") from None
