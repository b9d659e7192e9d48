"""
Minimal markdown for AI-written text (match reasoning, cover letters).

Only the subset the prompts ask for is understood: h2-h4 headings, bullet and
numbered lists, horizontal rules, paragraphs, and inline **bold**, *italic*
and `code` spans. Spans do not nest.
"""
import html
import re
from dataclasses import dataclass

_H4 = "#### "
_H3 = "### "
_HEADING_RE = re.compile(r"^#{1,2} ")
_ANY_HEADING_RE = re.compile(r"^#{1,4} ")
_HR_RE = re.compile(r"^---+$")
_BULLET_RE = re.compile(r"^[-*•] ")
_NUMBERED_RE = re.compile(r"^\d+[.)]\s")
_INLINE_RE = re.compile(r"(\*\*[^*]+\*\*|\*[^*]+\*|`[^`]+`)")


@dataclass(frozen=True)
class Token:
    type: str  # h2 | h3 | h4 | ul | ol | hr | p
    text: str = ""
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class Span:
    kind: str  # text | strong | em | code
    text: str


def _is_block_start(line: str) -> bool:
    return bool(
        _ANY_HEADING_RE.match(line)
        or _BULLET_RE.match(line)
        or _NUMBERED_RE.match(line)
        or _HR_RE.match(line.strip())
    )


def tokenize(markdown: str) -> list[Token]:
    lines = markdown.split("\n")
    tokens: list[Token] = []
    i = 0

    while i < len(lines):
        line = lines[i]

        if line.startswith(_H4):
            tokens.append(Token("h4", line[len(_H4):]))
            i += 1
        elif line.startswith(_H3):
            tokens.append(Token("h3", line[len(_H3):]))
            i += 1
        elif _HEADING_RE.match(line):
            tokens.append(Token("h2", _HEADING_RE.sub("", line, count=1)))
            i += 1
        elif _HR_RE.match(line.strip()):
            tokens.append(Token("hr"))
            i += 1
        elif _BULLET_RE.match(line) or _NUMBERED_RE.match(line):
            pattern = _BULLET_RE if _BULLET_RE.match(line) else _NUMBERED_RE
            items = []
            while i < len(lines) and pattern.match(lines[i]):
                items.append(pattern.sub("", lines[i], count=1))
                i += 1
            tokens.append(Token("ul" if pattern is _BULLET_RE else "ol", items=tuple(items)))
        elif not line.strip():
            i += 1
        else:
            parts = [line.strip()]
            i += 1
            while i < len(lines) and lines[i].strip() and not _is_block_start(lines[i]):
                parts.append(lines[i].strip())
                i += 1
            tokens.append(Token("p", " ".join(parts)))

    return tokens


def parse_inline(text: str) -> list[Span]:
    spans = []
    for part in _INLINE_RE.split(text):
        if not part:
            continue
        if part.startswith("**") and part.endswith("**") and len(part) > 4:
            spans.append(Span("strong", part[2:-2]))
        elif part.startswith("`") and part.endswith("`") and len(part) > 2:
            spans.append(Span("code", part[1:-1]))
        elif part.startswith("*") and part.endswith("*") and len(part) > 2:
            spans.append(Span("em", part[1:-1]))
        else:
            spans.append(Span("text", part))
    return spans


_SPAN_TAGS = {"strong": "strong", "em": "em", "code": "code"}


def render_inline(text: str) -> str:
    out = []
    for span in parse_inline(text):
        escaped = html.escape(span.text)
        tag = _SPAN_TAGS.get(span.kind)
        out.append(f"<{tag}>{escaped}</{tag}>" if tag else escaped)
    return "".join(out)


def render_html(markdown: str | None) -> str:
    if not markdown:
        return ""
    blocks = []
    for token in tokenize(markdown):
        if token.type == "hr":
            blocks.append("<hr>")
        elif token.type in ("ul", "ol"):
            items = "".join(f"<li>{render_inline(item)}</li>" for item in token.items)
            blocks.append(f"<{token.type}>{items}</{token.type}>")
        else:
            blocks.append(f"<{token.type}>{render_inline(token.text)}</{token.type}>")
    return "\n".join(blocks)
