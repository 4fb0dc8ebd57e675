"""
Normalizer Module
Applies whitespace and comment rules to a parsed tree before comparison.
"""

import logging
import re
from typing import List

from .nodes import Comment, Element, Node, Text
from .options import HTMLCompareOptions

logger = logging.getLogger(__name__)

# HTML's ASCII whitespace; a no-break space is content.
WHITESPACE = re.compile(r'[ \t\n\r\f]+')

PRESERVE_WHITESPACE_TAGS = {'pre', 'textarea', 'listing', 'plaintext'}


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to one space and trim both ends."""
    return WHITESPACE.sub(' ', text).strip(' ')


def is_blank(text: str) -> bool:
    return WHITESPACE.fullmatch(text) is not None or text == ''


class Normalizer:
    """Conditions a tree so that equal renderings compare equal."""

    def __init__(self, options: HTMLCompareOptions):
        self.options = options

    def normalize(self, tree: Element) -> Element:
        """Return a normalized copy of ``tree``; the input is left untouched."""
        normalized = Element(tree.tag, tree.attrs)
        stack = [(tree, normalized, tree.name in PRESERVE_WHITESPACE_TAGS)]
        while stack:
            source, target, preserve = stack.pop()
            target.children = self._normalize_children(source.children, preserve, stack)
        logger.debug(f"Normalized tree {tree.tag} to {len(normalized.children)} top-level nodes")
        return normalized

    def _normalize_children(self, children: List[Node], preserve: bool, stack: list) -> List[Node]:
        """Normalize one child list; child elements are queued on ``stack`` to be filled."""
        kept = []
        for child in children:
            if isinstance(child, Comment):
                if not self.options.ignore_comments:
                    kept.append(Comment(child.content))
            elif isinstance(child, Text):
                if not self.options.ignore_text:
                    kept.append(Text(child.content))
            else:
                copy = Element(child.tag, child.attrs)
                stack.append((child, copy, preserve or child.name in PRESERVE_WHITESPACE_TAGS))
                kept.append(copy)

        result = []
        for node in self._merge_text(kept):
            if isinstance(node, Text):
                if is_blank(node.content):
                    if self.options.ignore_whitespace:
                        continue
                    node = Text('')
                elif not preserve:
                    node = Text(collapse_whitespace(node.content))
            result.append(node)
        return result

    @staticmethod
    def _merge_text(nodes: List[Node]) -> List[Node]:
        """Join text runs left adjacent by comment removal."""
        merged = []
        for node in nodes:
            if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
                merged[-1] = Text(merged[-1].content + node.content)
            else:
                merged.append(node)
        return merged


def normalize(tree: Element, options: HTMLCompareOptions) -> Element:
    return Normalizer(options).normalize(tree)
