"""Markdown to sanitized element tree: parse -> convert -> sanitize -> slug -> code blocks"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import structlog
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.front_matter import front_matter_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from mdblog.core.sanitize import DEFAULT_SCHEMA, HEADINGS, SanitizeSchema, sanitize
from mdblog.core.tree import (
    CodeBlock,
    CodeBlockRenderer,
    Element,
    Node,
    Text,
    default_code_block,
    text_content,
    to_html,
    walk,
)
from mdblog.core.utils.slug import Slugger
from mdblog.errors import RenderError


logger = structlog.get_logger(__name__)

# Raw HTML and frontmatter never reach the element tree.
DROPPED_NODES = frozenset({"html_block", "html_inline", "front_matter"})
LANGUAGE_PREFIX = "language-"
# markdown-it emits <s> for ~~strike~~; GFM renders it as <del>.
TAG_MAP = {"s": "del"}


@dataclass(frozen=True)
class RenderedContent:
    """Sanitized renderable output of one markdown body.

    Instances may be shared through the render cache; do not mutate nodes.
    """
    nodes: list[Node]

    @property
    def code_blocks(self) -> list[CodeBlock]:
        return [n for n in walk(self.nodes) if isinstance(n, CodeBlock)]

    def to_html(self, code_block: CodeBlockRenderer = default_code_block) -> str:
        return to_html(self.nodes, code_block)

    @property
    def html(self) -> str:
        return self.to_html()


def make_parser() -> MarkdownIt:
    """GFM-like MarkdownIt (tables, strikethrough, autolinks) with task lists and frontmatter."""
    return (
        MarkdownIt("gfm-like", options_update={"linkify": True})
        .use(tasklists_plugin)
        .use(front_matter_plugin)
    )


def _code_element(code: str, info: str) -> Element:
    language = info.strip().split()[0] if info.strip() else None
    attrs = {"class": f"{LANGUAGE_PREFIX}{language}"} if language else {}
    return Element("pre", children=[Element("code", attrs, [Text(code)])])


def _convert(node: SyntaxTreeNode) -> list[Node]:
    """Map one markdown-it syntax tree node to zero or more element tree nodes."""
    kind = node.type
    if kind in DROPPED_NODES:
        return []
    if kind == "text":
        return [Text(node.content)]
    if kind == "softbreak":
        return [Text("\n")]
    if kind == "hardbreak":
        return [Element("br")]
    if kind == "code_inline":
        return [Element("code", children=[Text(node.content)])]
    if kind in ("fence", "code_block"):
        return [_code_element(node.content, node.info or "")]
    if kind == "hr":
        return [Element("hr")]

    children = [out for child in node.children for out in _convert(child)]
    # Paragraphs in tight lists are hidden; inline containers are transparent.
    if kind == "inline" or (kind == "paragraph" and node.hidden):
        return children
    if kind == "image":
        attrs = {"src": str(node.attrs.get("src", "")), "alt": text_content(children)}
        return [Element("img", attrs)]

    attrs = {str(k): str(v) for k, v in node.attrs.items()}
    return [Element(TAG_MAP.get(node.tag, node.tag), attrs, children)]


def to_element_tree(md: MarkdownIt, markdown: str) -> list[Node]:
    root = SyntaxTreeNode(md.parse(markdown))
    return [out for child in root.children for out in _convert(child)]


def add_heading_ids(nodes: list[Node], slugger: Optional[Slugger] = None) -> None:
    """Give every heading without an id a unique slug id, in document order."""
    slugger = slugger or Slugger()
    for node in walk(nodes):
        if isinstance(node, Element) and node.tag in HEADINGS and "id" not in node.attrs:
            node.attrs["id"] = slugger.slug(text_content(node))


def extract_code_blocks(nodes: list[Node]) -> list[Node]:
    """Replace each <pre> element with a CodeBlock carrying its raw text and language class."""
    out: list[Node] = []
    for node in nodes:
        if isinstance(node, Element) and node.tag == "pre":
            class_name = node.attrs.get("class")
            for child in node.children:
                if isinstance(child, Element) and child.tag == "code" and child.attrs.get("class"):
                    class_name = child.attrs["class"]
                    break
            language = None
            if class_name and class_name.startswith(LANGUAGE_PREFIX):
                language = class_name[len(LANGUAGE_PREFIX):]
            out.append(CodeBlock(text_content(node), language, class_name))
        elif isinstance(node, Element):
            out.append(Element(node.tag, node.attrs, extract_code_blocks(node.children)))
        else:
            out.append(node)
    return out


class MarkdownRenderer:
    """Sanitizing markdown renderer; the parser is built on first use and reused."""

    def __init__(self, schema: SanitizeSchema = DEFAULT_SCHEMA) -> None:
        self.schema = schema
        self._parser: Optional[MarkdownIt] = None

    @property
    def parser(self) -> MarkdownIt:
        if self._parser is None:
            self._parser = make_parser()
        return self._parser

    def render(self, markdown: str) -> RenderedContent:
        """Render markdown; any failure raises RenderError and no partial tree escapes."""
        try:
            nodes = sanitize(to_element_tree(self.parser, markdown), self.schema)
            add_heading_ids(nodes)
            return RenderedContent(extract_code_blocks(nodes))
        except Exception as e:
            logger.error("render_failed", error=str(e), error_type=type(e).__name__)
            raise RenderError(e) from e
