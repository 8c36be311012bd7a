import re
from dataclasses import dataclass
from typing import Optional

from markupsafe import Markup, escape

# -----------------------------
# TOKENS
# -----------------------------

# {tag}body{/tag}, closing tag must repeat the opening name
TOKEN_RE = re.compile(r"\{([^}]+)\}(.*?)\{/\1\}")

# target|display, split on the first pipe only
LINK_RE = re.compile(r"^([^|]+)\|(.+)$")

LINK_TAGS = frozenset({"a_link", "d_link", "dxt", "et_link", "i_link", "mat", "sx"})


@dataclass(frozen=True)
class Token:
    kind: str
    content: str
    link: Optional[str] = None


def tokenize(text: str) -> list[Token]:
    """
    Split dictionary markup into a flat list of tokens.
    Plain stretches become "text" tokens; each {tag}...{/tag} span becomes
    one token of that kind. Span bodies are never re-scanned, so nested
    markup stays literal content of the outer span.
    """
    tokens = []
    pos = 0

    for match in TOKEN_RE.finditer(text):
        if match.start() > pos:
            tokens.append(Token("text", text[pos:match.start()]))

        kind, body = match.group(1), match.group(2)
        link = None

        if kind in LINK_TAGS:
            link_match = LINK_RE.match(body)
            if link_match:
                link, body = link_match.group(1), link_match.group(2)

        tokens.append(Token(kind, body, link))
        pos = match.end()

    if pos < len(text):
        tokens.append(Token("text", text[pos:]))

    return tokens


# -----------------------------
# PRESENTATION
# -----------------------------

LEFT_QUOTE = "“"
RIGHT_QUOTE = "”"
PLACEHOLDER_HREF = "#"

TAG_STYLES = {
    "b": "bold",
    "bc": "bold",
    "parahw": "bold",
    "phrase": "bold",
    "it": "italic",
    "gloss": "italic",
    "qword": "italic",
    "wi": "italic",
    "ds": "italic",
    "inf": "subscript",
    "sup": "superscript",
    "sc": "small_caps",
    "ldquo": "literal",
    "rdquo": "literal",
    "p_br": "line_break",
    "dx": "group",
    "dx_def": "group",
    "dx_ety": "group",
    "ma": "group",
    "a_link": "link",
    "d_link": "link",
    "dxt": "link",
    "et_link": "link",
    "i_link": "link",
    "mat": "link",
    "sx": "link",
    "text": "plain",
}

LITERALS = {
    "ldquo": LEFT_QUOTE,
    "rdquo": RIGHT_QUOTE,
}


@dataclass(frozen=True)
class Instruction:
    style: str
    text: str = ""
    href: Optional[str] = None


def render(token: Token) -> Instruction:
    """
    Map a token to a presentation instruction.
    Unknown kinds come back as plain text.
    """
    style = TAG_STYLES.get(token.kind, "plain")

    if style == "literal":
        return Instruction("literal", LITERALS[token.kind])
    if style == "line_break":
        return Instruction("line_break")
    if style == "link":
        return Instruction("link", token.content, token.link or PLACEHOLDER_HREF)

    return Instruction(style, token.content)


def render_all(text: str) -> list[Instruction]:
    return [render(token) for token in tokenize(text)]


# -----------------------------
# HTML OUTPUT
# -----------------------------

HTML_WRAPPERS = {
    "bold": ("<strong>", "</strong>"),
    "italic": ("<em>", "</em>"),
    "subscript": ("<sub>", "</sub>"),
    "superscript": ("<sup>", "</sup>"),
    "small_caps": ('<span style="font-variant: small-caps">', "</span>"),
    "group": ("<span>", "</span>"),
}

HTML_LITERALS = {
    LEFT_QUOTE: "&ldquo;",
    RIGHT_QUOTE: "&rdquo;",
}


def instruction_to_html(instruction: Instruction) -> str:
    style = instruction.style

    if style == "line_break":
        return "<br>"
    if style == "literal":
        return HTML_LITERALS.get(instruction.text, str(escape(instruction.text)))
    if style == "link":
        return f'<a href="{escape(instruction.href)}">{escape(instruction.text)}</a>'
    if style in HTML_WRAPPERS:
        open_tag, close_tag = HTML_WRAPPERS[style]
        return f"{open_tag}{escape(instruction.text)}{close_tag}"

    return str(escape(instruction.text))


def to_html(instructions) -> Markup:
    """
    Serialize instructions to an HTML fragment, in order, with nothing
    inserted between them.
    """
    return Markup("".join(instruction_to_html(i) for i in instructions))
