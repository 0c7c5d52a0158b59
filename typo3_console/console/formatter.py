"""Translation of console style tags into Rich markup."""

import re

from rich.markup import escape
from rich.theme import Theme

# Styles available as <name>...</name> tags in console output
STYLES: dict[str, str] = {
    "b": "bold",
    "i": "black on white",
    "u": "underline",
    "em": "reverse",
    "strike": "conceal",
    "success": "green",
    "warning": "black on yellow",
    "ins": "green",
    "del": "red",
    "code": "bold",
    "info": "green",
    "comment": "yellow",
    "question": "black on cyan",
    "error": "white on red",
}

_TAG_PATTERN = re.compile(r"<(/?)([a-z][a-z0-9_-]*)?>")


def create_theme() -> Theme:
    """Build the Rich theme holding every console style."""
    return Theme(STYLES)


def to_markup(text: str) -> str:
    """Convert style tags to Rich markup.

    Known tags become markup, "</>" closes the innermost open tag. Everything
    else, including literal square brackets, unknown tags and closing tags
    without a matching opening tag, is escaped so it prints as written.
    """
    parts: list[str] = []
    open_tags: list[str] = []
    position = 0

    for match in _TAG_PATTERN.finditer(text):
        closing, name = match.group(1), match.group(2)
        if not closing:
            if name is None or name not in STYLES:
                continue
            markup = f"[{name}]"
            open_tags.append(name)
        elif name is None:
            if not open_tags:
                continue
            markup = f"[/{open_tags.pop()}]"
        else:
            if name not in open_tags:
                continue
            del open_tags[len(open_tags) - 1 - open_tags[::-1].index(name)]
            markup = f"[/{name}]"

        parts.append(escape(text[position : match.start()]))
        parts.append(markup)
        position = match.end()

    parts.append(escape(text[position:]))
    return "".join(parts)
