"""Convert problem description HTML into the markdown-like text the block
parser understands (``**bold**``, ``*italic*``, backtick code, fenced code,
``•`` bullets, numbered items and blank-line separated paragraphs)."""
import re

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

_BLOCK_TAGS = {"p", "div", "section", "article", "blockquote", "h1", "h2", "h3", "h4", "h5", "h6"}
_SKIP_TAGS = {"img", "script", "style", "svg", "button"}


def _text(node: NavigableString) -> str:
    return re.sub(r"\s+", " ", str(node).replace("\xa0", " "))


def _wrap(marker: str, inner: str) -> str:
    """Wrap the text in ``marker`` and keep surrounding spaces outside it."""
    core = inner.strip()
    if not core:
        return " " if inner else ""
    lead = inner[:len(inner) - len(inner.lstrip())]
    trail = inner[len(inner.rstrip()):]
    return f"{lead}{marker}{core}{marker}{trail}"


def _render_literal(node) -> str:
    """Text of a ``code``/``pre`` element: markup flattened except sup/sub."""
    if isinstance(node, PreformattedString):
        return ""
    if isinstance(node, NavigableString):
        return str(node).replace("\xa0", " ")
    if not isinstance(node, Tag):
        return ""
    if node.name == "br":
        return "\n"
    inner = "".join(_render_literal(child) for child in node.children)
    if node.name == "sup":
        return "^" + inner.strip()
    if node.name == "sub":
        return "_" + inner.strip()
    return inner


def _flatten(text: str) -> str:
    return re.sub(r"\s*\n\s*", " ", text).strip()


def _render_children(tag: Tag) -> str:
    return "".join(_render(child) for child in tag.children)


def _render_list(tag: Tag, ordered: bool) -> str:
    lines = []
    number = 1
    for item in tag.find_all("li", recursive=False):
        content = _flatten(_render_children(item))
        if not content:
            continue
        marker = f"{number}. " if ordered else "• "
        lines.append(marker + content)
        number += 1
    return "\n\n" + "\n".join(lines) + "\n\n"


def _render(node) -> str:
    if isinstance(node, PreformattedString):
        return ""
    if isinstance(node, NavigableString):
        return _text(node)
    if not isinstance(node, Tag):
        return ""

    name = node.name
    if name in _SKIP_TAGS:
        return ""
    if name == "br":
        return "\n"
    if name == "pre":
        code = _render_literal(node).strip("\n")
        return f"\n\n```\n{code}\n```\n\n"
    if name in ("strong", "b"):
        return _wrap("**", _render_children(node))
    if name in ("em", "i"):
        return _wrap("*", _render_children(node))
    if name == "code":
        return _wrap("`", _render_literal(node))
    if name == "sup":
        return "^" + _render_children(node).strip()
    if name == "sub":
        return "_" + _render_children(node).strip()
    if name == "ul":
        return _render_list(node, ordered=False)
    if name == "ol":
        return _render_list(node, ordered=True)
    if name in _BLOCK_TAGS:
        return "\n\n" + _render_children(node) + "\n\n"
    return _render_children(node)


def _tidy(text: str) -> str:
    lines = []
    in_code = False
    for line in text.split("\n"):
        if line.strip().startswith("```"):
            in_code = not in_code
            lines.append(line.strip())
        elif in_code:
            lines.append(line.rstrip())
        else:
            lines.append(re.sub(r" {2,}", " ", line).strip())
    return re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()


def format_description(html: str) -> str:
    if not html or not html.strip():
        return ""
    soup = BeautifulSoup(html, "html.parser")
    return _tidy(_render_children(soup))
