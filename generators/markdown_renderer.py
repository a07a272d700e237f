"""
markdown_renderer.py
Markdown to HTML conversion for documentation comments.
"""
import markdown


# Markdown processor with extensions
md = markdown.Markdown(
    extensions=[
        "tables",
        "fenced_code",
    ],
)


def render_markdown(text: str) -> str:
    # Reset markdown processor state between comments
    md.reset()
    return md.convert(text)
