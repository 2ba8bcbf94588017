import emoji


def convert(text: str) -> str:
    """Replace :shortcode: emoji aliases with their unicode characters."""
    if not text:
        return text
    return emoji.emojize(text, language="alias")
