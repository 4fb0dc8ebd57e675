"""
Node Model
Parsed HTML tree: elements, text runs and comments.
"""

from dataclasses import dataclass, field
from html import escape
from typing import List, Tuple, Union

ROOT_TAG = '[document]'

VOID_ELEMENTS = {
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr'
}


@dataclass(frozen=True)
class Attribute:
    name: str
    value: str = ''

    @property
    def key(self) -> str:
        return self.name.lower()


@dataclass
class Element:
    tag: str
    attrs: Tuple[Attribute, ...] = ()
    children: List['Node'] = field(default_factory=list)

    type_name = 'Element'

    @property
    def name(self) -> str:
        """Lower-cased tag name used for identity."""
        return self.tag.lower()

    @property
    def is_root(self) -> bool:
        return self.tag == ROOT_TAG

    def start_tag(self) -> str:
        attrs = ''.join(
            f' {attr.name}="{escape(attr.value, quote=True)}"' for attr in self.attrs
        )
        return f'<{self.tag}{attrs}>'

    def to_html(self) -> str:
        """Serialize the element and its subtree back to markup, without recursion."""
        parts = []
        stack = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif not isinstance(item, Element):
                parts.append(item.to_html())
            elif item.is_root:
                stack.extend(reversed(item.children))
            elif item.name in VOID_ELEMENTS and not item.children:
                parts.append(item.start_tag())
            else:
                parts.append(item.start_tag())
                stack.append(f'</{item.tag}>')
                stack.extend(reversed(item.children))
        return ''.join(parts)


@dataclass
class Text:
    content: str

    type_name = 'Text'
    name = '#text'

    def to_html(self) -> str:
        return escape(self.content, quote=False)


@dataclass
class Comment:
    content: str

    type_name = 'Comment'
    name = '#comment'

    def to_html(self) -> str:
        return f'<!--{self.content}-->'


Node = Union[Element, Text, Comment]


def root(children=None) -> Element:
    """Create the synthetic container every tree hangs from."""
    return Element(ROOT_TAG, (), list(children or []))
