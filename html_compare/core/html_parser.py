"""
HTML Parser Module
Parses HTML content into a node tree for comparison.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag
from bs4.element import (CData, Comment as SoupComment, Declaration, Doctype,
                         NavigableString, ProcessingInstruction)

from .nodes import Attribute, Comment, Element, Node, Text, root

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = 'html5lib'

# A document starts with a doctype or an <html>, <head> or <body> tag,
# optionally after comments.
DOCUMENT_START = re.compile(
    r'^\s*(?:<!--.*?-->\s*)*<(?:!doctype\b|(?:html|head|body)[\s>/])',
    re.IGNORECASE | re.DOTALL
)

SKIPPED_STRINGS = (Doctype, Declaration, ProcessingInstruction)


class HTMLParser:
    """Parser for HTML content."""

    def __init__(self, features: str = DEFAULT_FEATURES):
        """Initialize the HTML parser with a BeautifulSoup tree builder name."""
        self.features = features

    def parse_file(self, file_path: Union[str, Path]) -> Element:
        """Parse HTML file and return its tree."""
        try:
            logger.info(f"Starting to parse file: {file_path}")
            content = Path(file_path).read_text(encoding='utf-8')
            logger.debug(f"Successfully read file, content length: {len(content)}")
            return self.parse(content)

        except Exception as e:
            logger.error(f"Error parsing file {file_path}: {str(e)}", exc_info=True)
            raise

    def parse(self, html_content: str, as_fragment: Optional[bool] = None) -> Element:
        """Parse HTML content into a tree rooted at a synthetic container.

        Malformed markup is recovered the way browsers do it, so this never
        reports a parse error.

        Args:
            html_content: Markup to parse.
            as_fragment: Unwrap the html/head/body elements and keep only their
                contents. ``None`` decides from the markup: documents keep
                their ``html`` element, fragments are unwrapped.
        """
        if not isinstance(html_content, str):
            raise TypeError(f"HTML content must be str, not {type(html_content).__name__}")

        try:
            logger.debug(f"Input HTML content length: {len(html_content)}")
            soup = BeautifulSoup(html_content, self.features, multi_valued_attributes=None)

            if as_fragment is None:
                as_fragment = not self.is_document(html_content)

            if as_fragment:
                top_level = self._fragment_contents(soup)
            else:
                top_level = list(soup.contents)

            tree = self._build_tree(top_level)
            logger.debug(f"Parsed tree with {len(tree.children)} top-level nodes")
            return tree

        except Exception as e:
            logger.error(f"Error parsing HTML: {str(e)}", exc_info=True)
            raise

    @staticmethod
    def is_document(html_content: str) -> bool:
        """Whether the markup is a full document rather than a fragment."""
        return DOCUMENT_START.match(html_content) is not None

    def _fragment_contents(self, soup: BeautifulSoup) -> List:
        """Unwrap the html/head/body the tree builder puts around every input."""
        contents = []
        for child in soup.contents:
            if isinstance(child, Tag) and child.name == 'html':
                for section in child.contents:
                    if isinstance(section, Tag) and section.name in ('head', 'body'):
                        contents.extend(section.contents)
                    else:
                        contents.append(section)
            else:
                contents.append(child)
        return contents

    def _build_tree(self, top_level) -> Element:
        """Convert soup nodes using an explicit stack of open parents."""
        tree = root()
        stack = [(top_level, tree)]
        while stack:
            soup_nodes, parent = stack.pop()
            for child in soup_nodes:
                node = self._parse_node(child)
                if node is None:
                    continue
                parent.children.append(node)
                if isinstance(node, Element):
                    stack.append((child.contents, node))
        return tree

    def _parse_node(self, node) -> Optional[Node]:
        """Convert a single soup node; an element's children are filled in later."""
        if isinstance(node, SoupComment):
            return Comment(str(node))
        if isinstance(node, SKIPPED_STRINGS):
            return None
        if isinstance(node, (CData, NavigableString)):
            return Text(str(node))
        if not isinstance(node, Tag):
            return None

        return Element(node.name, self._parse_attributes(node))

    def _parse_attributes(self, node: Tag):
        """Parse HTML node attributes, keeping the first of any duplicate names."""
        attrs = []
        seen = set()
        for key, value in node.attrs.items():
            if isinstance(value, list):
                value = ' '.join(value)
            attribute = Attribute(key, value if value is not None else '')
            if attribute.key in seen:
                continue
            seen.add(attribute.key)
            attrs.append(attribute)
        return tuple(attrs)


def parse(html_content: str, features: str = DEFAULT_FEATURES,
          as_fragment: Optional[bool] = None) -> Element:
    return HTMLParser(features).parse(html_content, as_fragment)
