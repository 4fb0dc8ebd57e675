"""
Comparison Options Module
Immutable settings that decide which differences are ignorable.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import FrozenSet, Iterable


@dataclass(frozen=True)
class HTMLCompareOptions:
    """Tolerance policy read by the comparator at every decision point.

    Attributes:
        ignore_whitespace: Drop whitespace-only text between tags and trim text runs.
        ignore_attributes: Skip attribute comparison for every element.
        ignored_attributes: Attribute names left out of comparison. A trailing
            ``*`` makes the entry a prefix pattern, e.g. ``data-*``.
        ignore_text: Skip comparing text content.
        ignore_comments: Remove comments from both trees before comparing.
        ignore_sibling_order: Match children as an unordered multiset.
    """
    ignore_whitespace: bool = True
    ignore_attributes: bool = False
    ignored_attributes: FrozenSet[str] = field(default_factory=frozenset)
    ignore_text: bool = False
    ignore_comments: bool = True
    ignore_sibling_order: bool = False

    def __post_init__(self):
        names = self.ignored_attributes
        if isinstance(names, str):
            names = [names]
        object.__setattr__(
            self, 'ignored_attributes', frozenset(name.lower() for name in names)
        )

    def should_ignore_attr(self, attr_name: str) -> bool:
        attr_name = attr_name.lower()
        for pattern in self.ignored_attributes:
            if pattern.endswith('*'):
                if attr_name.startswith(pattern[:-1]):
                    return True
            elif attr_name == pattern:
                return True
        return False

    def replace(self, **changes) -> 'HTMLCompareOptions':
        return replace(self, **changes)

    def with_ignored_attributes(self, names: Iterable[str]) -> 'HTMLCompareOptions':
        """Return a copy that additionally ignores ``names``."""
        return replace(self, ignored_attributes=self.ignored_attributes | set(names))

    def to_dict(self) -> dict:
        data = asdict(self)
        data['ignored_attributes'] = sorted(self.ignored_attributes)
        return data


DEFAULT_OPTIONS = HTMLCompareOptions()
