"""
comment_transform_pipeline.py
Defines the pipeline that turns one documentation comment into HTML: a fixed sequence of line
transforms followed by Markdown rendering.
"""
from typing import List, Optional, Protocol

from proto_model import LocationDescriptor
from generators.doc_context import Diagnostics, DocumentContext
from generators.markdown_renderer import render_markdown
from comment_transforms.normalize_indent_transform import NormalizeIndentTransform
from comment_transforms.promote_headings_transform import PromoteHeadingsTransform
from comment_transforms.elide_html_comments_transform import ElideHtmlCommentsTransform
from comment_transforms.type_link_transform import TypeLinkTransform
from comment_transforms.strip_field_prefix_transform import StripFieldPrefixTransform
from comment_transforms.drop_directive_lines_transform import DropDirectiveLinesTransform
from comment_transforms.spell_check_transform import SpellCheckTransform


class CommentTransform(Protocol):
    def transform(self, lines: List[str]) -> List[str]:
        ...


def run_comment_transform_pipeline(lines: List[str], transforms: List[CommentTransform]) -> List[str]:
    """
    Applies a sequence of CommentTransform objects to the lines of a comment.
    Each transform takes a list of lines and returns a new list.
    """
    for transform in transforms:
        lines = transform.transform(lines)
    return lines


def select_comment_text(loc: LocationDescriptor, name: str, diagnostics: Diagnostics) -> Optional[str]:
    """Leading comment, else trailing comment. None (and a warning) when there is neither."""
    text = loc.leading_comments or loc.trailing_comments
    if not text:
        diagnostics.warn(loc, 0, f"no comment found for {name}")
        return None
    return text


def build_comment_transforms(ctx: DocumentContext, loc: LocationDescriptor) -> List[CommentTransform]:
    # order matters: links are substituted after headings are promoted and HTML comments are gone
    transforms = [
        NormalizeIndentTransform(),
        PromoteHeadingsTransform(ctx.grouping),
        ElideHtmlCommentsTransform(),
        TypeLinkTransform(ctx, loc),
        StripFieldPrefixTransform(),
        DropDirectiveLinesTransform(),
    ]
    if ctx.speller is not None:
        transforms.append(SpellCheckTransform(ctx.speller, ctx.diagnostics, loc))
    return transforms


def comment_lines(text: str) -> List[str]:
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def render_comment(ctx: DocumentContext, loc: LocationDescriptor, name: str):
    """Render the comment at loc into the document, followed by a newline."""
    text = select_comment_text(loc, name, ctx.diagnostics)
    if text is None:
        return
    lines = run_comment_transform_pipeline(comment_lines(text), build_comment_transforms(ctx, loc))
    ctx.write(render_markdown("\n".join(lines)) + "\n")
