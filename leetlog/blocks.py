"""Turn the markdown-like description text into Notion blocks."""
import logging
import re

logger = logging.getLogger(__name__)

# Notion caps a single rich text object at 2000 characters
MAX_TEXT_LENGTH = 2000

DESCRIPTION_HEADING = "Problem Description"

_INLINE_RE = re.compile(r"\*\*(.+?)\*\*|\*(.+?)\*|`(.+?)`")
_FENCE_RE = re.compile(r"^```\S*$")
_NUMBERED_RE = re.compile(r"^\d+\.\s+")
_BULLET = "• "


def _chunks(text: str, size: int = MAX_TEXT_LENGTH):
    return [text[i:i + size] for i in range(0, len(text), size)] or [""]


def text_segment(content: str, **annotations):
    segments = []
    for chunk in _chunks(content):
        segment = {"type": "text", "text": {"content": chunk}}
        if annotations:
            segment["annotations"] = annotations
        segments.append(segment)
    return segments


def parse_rich_text(text: str):
    """Split ``text`` into plain, bold, italic and inline-code segments."""
    rich_text = []
    position = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > position:
            rich_text.extend(text_segment(text[position:match.start()]))
        bold, italic, code = match.groups()
        if bold is not None:
            rich_text.extend(text_segment(bold, bold=True))
        elif italic is not None:
            rich_text.extend(text_segment(italic, italic=True))
        else:
            rich_text.extend(text_segment(code, code=True))
        position = match.end()
    if position < len(text):
        rich_text.extend(text_segment(text[position:]))
    return rich_text


def heading_block(level: int, text: str):
    kind = f"heading_{level}"
    return {"object": "block", "type": kind, kind: {"rich_text": text_segment(text)}}


def paragraph_block(text: str):
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {"rich_text": parse_rich_text(text)},
    }


def list_item_block(text: str, numbered: bool = False):
    kind = "numbered_list_item" if numbered else "bulleted_list_item"
    return {"object": "block", "type": kind, kind: {"rich_text": parse_rich_text(text)}}


def code_block(content: str, language: str = "plain text"):
    return {
        "object": "block",
        "type": "code",
        "code": {
            "rich_text": text_segment(content),
            "language": language,
            "caption": [],
        },
    }


def code_blocks(code: str, language: str = "python"):
    """One code block per 2000-character chunk of ``code``."""
    if not code or not code.strip():
        return []
    return [code_block(chunk, language) for chunk in _chunks(code)]


def parse_description_to_blocks(description: str):
    blocks = []
    paragraph = []
    code_lines = []
    in_code = False

    def flush_paragraph():
        if paragraph:
            blocks.append(paragraph_block(" ".join(paragraph)))
            paragraph.clear()

    lines = description.split("\n")
    logger.debug("Parsing description with %d lines", len(lines))

    for raw in lines:
        line = raw.strip()

        if _FENCE_RE.match(line):
            if in_code:
                content = "\n".join(code_lines).strip("\n")
                if content.strip():
                    blocks.append(code_block(content))
                else:
                    logger.debug("Skipping empty code block")
                code_lines = []
                in_code = False
            else:
                flush_paragraph()
                in_code = True
            continue

        if in_code:
            code_lines.append(raw.rstrip())
            continue

        if line.startswith("**") and line.endswith("**") and len(line) > 4:
            flush_paragraph()
            blocks.append(heading_block(3, line[2:-2]))
            continue

        if line.startswith(_BULLET):
            flush_paragraph()
            blocks.append(list_item_block(line[len(_BULLET):].strip()))
            continue

        numbered = _NUMBERED_RE.match(line)
        if numbered:
            flush_paragraph()
            blocks.append(list_item_block(line[numbered.end():], numbered=True))
            continue

        if not line:
            flush_paragraph()
            continue

        paragraph.append(line)

    # an unterminated fence still keeps its content
    if in_code and any(l.strip() for l in code_lines):
        blocks.append(code_block("\n".join(code_lines).strip("\n")))
    flush_paragraph()

    logger.debug("Created %d blocks: %s", len(blocks), [b["type"] for b in blocks])
    return blocks


def description_blocks(description: str):
    """Heading plus the parsed description, ready to append to a new page."""
    return [heading_block(2, DESCRIPTION_HEADING)] + parse_description_to_blocks(description)
