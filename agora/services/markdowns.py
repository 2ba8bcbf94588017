import markdown
import nh3

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]

# Relaxed allow-list for "thought" articles, which are stored as HTML
THOUGHT_TAGS = {
    "a", "audio", "b", "blockquote", "br", "caption", "cite", "code", "col",
    "colgroup", "dd", "div", "dl", "dt", "em", "h1", "h2", "h3", "h4", "h5",
    "h6", "hr", "i", "iframe", "img", "li", "ol", "p", "pre", "q", "small",
    "span", "strike", "strong", "sub", "sup", "table", "tbody", "td", "tfoot",
    "th", "thead", "tr", "u", "ul",
}
THOUGHT_ATTRIBUTES = {
    "*": {"id", "target", "class"},
    "a": {"href", "title"},
    "audio": {"controls", "src"},
    "blockquote": {"cite"},
    "col": {"span", "width"},
    "colgroup": {"span", "width"},
    "iframe": {"src", "width", "height"},
    "img": {"align", "alt", "height", "src", "title", "width"},
    "ol": {"start", "type"},
    "q": {"cite"},
    "table": {"summary", "width"},
    "td": {"abbr", "axis", "colspan", "rowspan", "width"},
    "th": {"abbr", "axis", "colspan", "rowspan", "scope", "width"},
    "ul": {"type"},
}


# Backslash must stay first
SCRIPT_STRING_ESCAPES = [
    ("\\", "\\\\"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("'", "\\'"),
    ('"', '\\"'),
    ("</", "<\\/"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
]


def to_html(text: str) -> str:
    if not text:
        return ""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def clean(html: str) -> str:
    """Strip scripts, event handlers and unsafe links from rendered HTML."""
    if not html:
        return ""
    return nh3.clean(html)


def clean_text(text: str) -> str:
    """Drop every tag, keeping escaped text only."""
    if not text:
        return ""
    return nh3.clean(text, tags=set())


def clean_thought(html: str) -> str:
    """Sanitize thought HTML and escape it for embedding in a quoted script string."""
    if not html:
        return ""
    html = nh3.clean(html, tags=THOUGHT_TAGS, attributes=THOUGHT_ATTRIBUTES)
    for raw, escaped in SCRIPT_STRING_ESCAPES:
        html = html.replace(raw, escaped)
    return html
