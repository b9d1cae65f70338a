"""Allow-list sanitizer for rendered element trees.

Every element that is not explicitly allowed is unwrapped (its children
are kept), except for the strip list whose elements are dropped together
with everything inside them. Attributes are filtered per tag, and URL
attributes must be relative or use an allowed protocol.
"""

from dataclasses import dataclass, field

from mdblog.core.tree import CodeBlock, Element, Node, Text


HEADINGS = ("h1", "h2", "h3", "h4", "h5", "h6")


def _default_tags() -> frozenset[str]:
    return frozenset({
        "p", "div", "span", "br", *HEADINGS,
        "ul", "ol", "li", "blockquote", "pre", "code",
        "strong", "em", "del", "a", "hr",
        "table", "thead", "tbody", "tr", "th", "td",
    })


def _default_attributes() -> dict[str, frozenset[str]]:
    attrs = {
        "*":    frozenset({"class", "id", "lang"}),
        "a":    frozenset({"href", "title", "rel"}),
        "code": frozenset({"class"}),
        "pre":  frozenset({"class"}),
    }
    attrs.update({h: frozenset({"id"}) for h in HEADINGS})
    return attrs


@dataclass(frozen=True)
class SanitizeSchema:
    tag_names:  frozenset[str] = field(default_factory=_default_tags)
    attributes: dict[str, frozenset[str]] = field(default_factory=_default_attributes)
    protocols:  dict[str, frozenset[str]] = field(
        default_factory=lambda: {"href": frozenset({"http", "https", "mailto"})}
    )
    strip: frozenset[str] = frozenset({
        "script", "style", "iframe", "object", "embed", "form", "input", "img",
    })

    def allowed_attributes(self, tag: str) -> frozenset[str]:
        return self.attributes.get(tag, frozenset()) | self.attributes.get("*", frozenset())


DEFAULT_SCHEMA = SanitizeSchema()


def is_safe_url(value: str, protocols: frozenset[str]) -> bool:
    """True for relative URLs and for absolute URLs whose scheme is in protocols."""
    colon = value.find(":")
    if colon < 0:
        return True
    # A colon after the first '/', '?' or '#' belongs to the path, query or fragment.
    for marker in ("/", "?", "#"):
        idx = value.find(marker)
        if -1 < idx < colon:
            return True
    return value[:colon].lower() in protocols


def _clean_attrs(element: Element, schema: SanitizeSchema) -> dict[str, str]:
    allowed = schema.allowed_attributes(element.tag)
    out = {}
    for name, value in element.attrs.items():
        if name not in allowed:
            continue
        protocols = schema.protocols.get(name)
        if protocols is not None and not is_safe_url(value, protocols):
            continue
        out[name] = value
    return out


def sanitize(nodes: list[Node], schema: SanitizeSchema = DEFAULT_SCHEMA) -> list[Node]:
    """Return a new node list restricted to schema; the input is not modified."""
    out: list[Node] = []
    for node in nodes:
        if isinstance(node, Text):
            out.append(Text(node.value))
        elif isinstance(node, CodeBlock):
            out.append(CodeBlock(node.code, node.language, node.class_name))
        elif node.tag in schema.strip:
            continue
        elif node.tag not in schema.tag_names:
            out.extend(sanitize(node.children, schema))
        else:
            out.append(Element(node.tag, _clean_attrs(node, schema), sanitize(node.children, schema)))
    return out
