"""
Structure Comparator Module
Compares two HTML trees and reports the first structural difference.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

from .html_parser import HTMLParser
from .nodes import Attribute, Comment, Element, Node, Text
from .normalizer import Normalizer
from .options import DEFAULT_OPTIONS, HTMLCompareOptions

logger = logging.getLogger(__name__)


class MismatchKind(Enum):
    NODE_TYPE = 'node-type-differs'
    TAG = 'tag-differs'
    ATTRIBUTES = 'attribute-set-differs'
    TEXT = 'text-differs'
    COMMENT = 'comment-differs'
    CHILD_COUNT = 'child-count-differs'
    NO_SIBLING_MATCH = 'no-sibling-match'
    UNMATCHED_RIGHT_SIBLING = 'unmatched-right-sibling'


class PathSegment(NamedTuple):
    index: int
    name: str

    def __str__(self):
        return f'{self.name}[{self.index}]'


@dataclass(frozen=True)
class AttributeComparison:
    matching: Dict[str, str] = field(default_factory=dict)
    different: Dict[str, Tuple[str, str]] = field(default_factory=dict)
    missing: Dict[str, str] = field(default_factory=dict)
    extra: Dict[str, str] = field(default_factory=dict)

    @property
    def is_match(self) -> bool:
        return not (self.different or self.missing or self.extra)


@dataclass(frozen=True)
class Mismatch:
    kind: MismatchKind
    detail: str
    expected: str = ''
    actual: str = ''
    path: Tuple[PathSegment, ...] = ()
    attributes: Optional[AttributeComparison] = None

    @property
    def path_names(self) -> List[str]:
        return [segment.name for segment in self.path]

    def format_path(self) -> str:
        return ' > '.join(str(segment) for segment in self.path) or '(root)'

    def within(self, segment: PathSegment) -> 'Mismatch':
        """Return this mismatch with ``segment`` prepended to its path."""
        return replace(self, path=(segment,) + self.path)

    def to_dict(self) -> Dict:
        return {
            'kind': self.kind.value,
            'detail': self.detail,
            'path': [[segment.index, segment.name] for segment in self.path],
            'expected': self.expected,
            'actual': self.actual,
            'attributes': {
                'matching': self.attributes.matching,
                'different': {k: list(v) for k, v in self.attributes.different.items()},
                'missing': self.attributes.missing,
                'extra': self.attributes.extra
            } if self.attributes else None
        }


@dataclass(frozen=True)
class ComparisonResult:
    left: str
    right: str
    options: HTMLCompareOptions = DEFAULT_OPTIONS
    mismatch: Optional[Mismatch] = None

    @property
    def is_match(self) -> bool:
        return self.mismatch is None

    def __bool__(self):
        return self.is_match

    def to_dict(self) -> Dict:
        return {
            'match': self.is_match,
            'left': self.left,
            'right': self.right,
            'options': self.options.to_dict(),
            'mismatch': self.mismatch.to_dict() if self.mismatch else None
        }


class StructureComparator:
    """Depth-first comparison of two normalized trees.

    The comparator holds no state between calls; one instance can be shared
    across threads.
    """

    def __init__(self, options: Optional[HTMLCompareOptions] = None,
                 parser: Optional[HTMLParser] = None):
        self.options = options or DEFAULT_OPTIONS
        self.parser = parser or HTMLParser()
        self.normalizer = Normalizer(self.options)

    def compare(self, left: str, right: str) -> ComparisonResult:
        """Parse, normalize and compare two markup strings.

        Two documents are compared from their ``html`` elements; when either
        side is a fragment both are reduced to their body and head contents.
        """
        try:
            as_fragment = not (self.parser.is_document(left) and self.parser.is_document(right))
            left_tree = self.normalizer.normalize(self.parser.parse(left, as_fragment))
            right_tree = self.normalizer.normalize(self.parser.parse(right, as_fragment))
            mismatch = self.compare_trees(left_tree, right_tree)
            if mismatch:
                logger.debug(f"Mismatch {mismatch.kind.value} at {mismatch.format_path()}: {mismatch.detail}")
            return ComparisonResult(left, right, self.options, mismatch)

        except Exception as e:
            logger.error(f"Error during comparison: {str(e)}", exc_info=True)
            raise

    def compare_trees(self, left: Node, right: Node) -> Optional[Mismatch]:
        """Compare two already-normalized trees from their roots.

        Nodes are visited depth-first in document order from an explicit stack,
        so the first mismatch found is the first in the document.
        """
        stack = [(left, right, ())]
        while stack:
            left_node, right_node, path = stack.pop()
            mismatch = self._compare_node_pair(left_node, right_node)
            if mismatch is None and isinstance(left_node, Element):
                mismatch = self._compare_children(left_node, right_node, path, stack)
                if mismatch is not None:
                    return mismatch
            elif mismatch is not None:
                return replace(mismatch, path=path)
        return None

    def _compare_children(self, left: Element, right: Element, path, stack) -> Optional[Mismatch]:
        """Queue child pairs on ``stack``, or return a mismatch with a path from the tree root."""
        left_children = left.children
        right_children = right.children

        if self.options.ignore_sibling_order:
            if len(left_children) == 1 and len(right_children) == 1:
                # A single candidate on each side is compared in place.
                stack.append((left_children[0], right_children[0],
                              path + (PathSegment(0, left_children[0].name),)))
                return None
            mismatch = self._compare_unordered_children(left, right)
            return replace(mismatch, path=path + mismatch.path) if mismatch else None

        if len(left_children) != len(right_children):
            mismatch = self._mismatch(
                MismatchKind.CHILD_COUNT, left, right,
                f"Child count mismatch. Expected: {len(left_children)}, Actual: {len(right_children)}"
            )
            return replace(mismatch, path=path)

        for i in reversed(range(len(left_children))):
            left_child = left_children[i]
            stack.append((left_child, right_children[i],
                          path + (PathSegment(i, left_child.name),)))
        return None

    def _compare_node_pair(self, left: Node, right: Node) -> Optional[Mismatch]:
        """Compare two nodes without looking at their children."""
        if type(left) is not type(right):
            return self._mismatch(
                MismatchKind.NODE_TYPE, left, right,
                f"Node type mismatch. Expected type: {left.type_name}, Actual type: {right.type_name}"
            )
        if isinstance(left, Element):
            return self._compare_element(left, right)
        if isinstance(left, Text):
            return self._compare_text(left, right)
        return self._compare_comment(left, right)

    def _compare_element(self, left: Element, right: Element) -> Optional[Mismatch]:
        if left.name != right.name:
            return self._mismatch(
                MismatchKind.TAG, left, right,
                f"Tag name mismatch. Expected: {left.name}, Actual: {right.name}"
            )

        if not self.options.ignore_attributes:
            attr_comparison = self._compare_attributes(left.attrs, right.attrs)
            if not attr_comparison.is_match:
                mismatch = self._mismatch(
                    MismatchKind.ATTRIBUTES, left, right,
                    f"Attributes mismatch. Expected: {self._format_attrs(left.attrs)}, "
                    f"Actual: {self._format_attrs(right.attrs)}"
                )
                return replace(mismatch, attributes=attr_comparison)
        return None

    def _effective_attrs(self, attrs: Tuple[Attribute, ...]) -> Dict[str, str]:
        return {
            attr.key: attr.value for attr in attrs
            if not self.options.should_ignore_attr(attr.key)
        }

    def _compare_attributes(self, left_attrs, right_attrs) -> AttributeComparison:
        """Compare attributes as sets of name/value pairs."""
        left_f = self._effective_attrs(left_attrs)
        right_f = self._effective_attrs(right_attrs)

        matching = {}
        different = {}
        missing = {}
        extra = {}
        for name in sorted(set(left_f) | set(right_f)):
            left_value = left_f.get(name)
            right_value = right_f.get(name)
            if left_value is not None and right_value is not None:
                if left_value == right_value:
                    matching[name] = left_value
                else:
                    different[name] = (left_value, right_value)
            elif left_value is not None:
                missing[name] = left_value
            else:
                extra[name] = right_value

        return AttributeComparison(matching=matching, different=different,
                                   missing=missing, extra=extra)

    def _format_attrs(self, attrs: Tuple[Attribute, ...]) -> str:
        pairs = sorted(self._effective_attrs(attrs).items())
        return '{' + ', '.join(f'{name}={value!r}' for name, value in pairs) + '}'

    def _compare_unordered_children(self, left: Element, right: Element) -> Optional[Mismatch]:
        """Greedy matching: each left child takes the first unmatched equivalent right child."""
        unmatched = list(range(len(right.children)))

        for i, left_child in enumerate(left.children):
            for position, j in enumerate(unmatched):
                if self.compare_trees(left_child, right.children[j]) is None:
                    del unmatched[position]
                    break
            else:
                return self._no_sibling_match(
                    left_child, right, (PathSegment(i, left_child.name),)
                )

        if unmatched:
            j = unmatched[0]
            right_child = right.children[j]
            mismatch = Mismatch(
                MismatchKind.UNMATCHED_RIGHT_SIBLING,
                f"Extra node found: {self._describe(right_child)} at position {j}",
                expected=left.to_html(),
                actual=right_child.to_html()
            )
            return mismatch.within(PathSegment(j, right_child.name))
        return None

    def _no_sibling_match(self, left_child: Node, right: Element, path) -> Mismatch:
        return Mismatch(
            MismatchKind.NO_SIBLING_MATCH,
            f"No matching node found for {self._describe(left_child)}",
            expected=left_child.to_html(),
            actual=right.to_html(),
            path=path
        )

    def _compare_text(self, left: Text, right: Text) -> Optional[Mismatch]:
        if self.options.ignore_text or left.content == right.content:
            return None
        return self._mismatch(
            MismatchKind.TEXT, left, right,
            f"Text content mismatch. Expected: {left.content!r}, Actual: {right.content!r}"
        )

    def _compare_comment(self, left: Comment, right: Comment) -> Optional[Mismatch]:
        if left.content == right.content:
            return None
        return self._mismatch(
            MismatchKind.COMMENT, left, right,
            f"Comment content mismatch. Expected: {left.content!r}, Actual: {right.content!r}"
        )

    @staticmethod
    def _describe(node: Node) -> str:
        if isinstance(node, Element):
            return f'<{node.name}>'
        return f'{node.type_name} {node.content!r}'

    @staticmethod
    def _mismatch(kind: MismatchKind, left: Node, right: Node, detail: str) -> Mismatch:
        return Mismatch(kind, detail, expected=left.to_html(), actual=right.to_html())


def compare(left: str, right: str,
            options: Optional[HTMLCompareOptions] = None) -> ComparisonResult:
    """Compare two HTML strings under ``options`` (defaults when omitted)."""
    return StructureComparator(options).compare(left, right)


def html_equal(left: str, right: str,
               options: Optional[HTMLCompareOptions] = None) -> bool:
    return compare(left, right, options).is_match
