"""Element tree produced by the markdown renderer, and its HTML serializer"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Union


VOID_TAGS = frozenset({"br", "hr", "img", "input"})


@dataclass
class Text:
    value: str


@dataclass
class Element:
    tag:      str
    attrs:    dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)


@dataclass
class CodeBlock:
    """A fenced or indented code block, handed to the code block renderer as one unit."""
    code:       str                  # raw text, unescaped
    language:   Optional[str] = None  # e.g. "python"
    class_name: Optional[str] = None  # e.g. "language-python"


Node = Union[Element, Text, CodeBlock]
CodeBlockRenderer = Callable[[CodeBlock], str]


def text_content(node: Node | list[Node]) -> str:
    """Concatenated text of a node or node list, ignoring markup."""
    if isinstance(node, list):
        return "".join(text_content(n) for n in node)
    if isinstance(node, Text):
        return node.value
    if isinstance(node, CodeBlock):
        return node.code
    return "".join(text_content(c) for c in node.children)


def walk(nodes: list[Node]) -> Iterator[Node]:
    """Yield every node depth-first, parents before children."""
    for node in nodes:
        yield node
        if isinstance(node, Element):
            yield from walk(node.children)


def _attrs_html(attrs: dict[str, str]) -> str:
    return "".join(f' {name}="{html.escape(value, quote=True)}"' for name, value in attrs.items())


def default_code_block(block: CodeBlock) -> str:
    """Plain container markup; presentation layers pass their own renderer."""
    cls = f' class="{html.escape(block.class_name, quote=True)}"' if block.class_name else ""
    return (
        '<div class="code-block-container">'
        f"<pre><code{cls}>{html.escape(block.code, quote=False)}</code></pre>"
        "</div>"
    )


def to_html(nodes: list[Node], code_block: CodeBlockRenderer = default_code_block) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(html.escape(node.value, quote=False))
        elif isinstance(node, CodeBlock):
            parts.append(code_block(node))
        elif node.tag in VOID_TAGS:
            parts.append(f"<{node.tag}{_attrs_html(node.attrs)}>")
        else:
            inner = to_html(node.children, code_block)
            parts.append(f"<{node.tag}{_attrs_html(node.attrs)}>{inner}</{node.tag}>")
    return "".join(parts)
