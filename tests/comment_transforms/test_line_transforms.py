import pytest
from comment_transforms.normalize_indent_transform import NormalizeIndentTransform, leading_whitespace
from comment_transforms.promote_headings_transform import PromoteHeadingsTransform
from comment_transforms.elide_html_comments_transform import ElideHtmlCommentsTransform
from comment_transforms.strip_field_prefix_transform import StripFieldPrefixTransform
from comment_transforms.drop_directive_lines_transform import DropDirectiveLinesTransform


@pytest.mark.parametrize("lines,expected", [
    ([" Hello", " world"], ["Hello", "world"]),
    (["  code:", "      indented", "  back"], ["code:", "    indented", "back"]),
    (["   a", " b", "", "c"], ["a", "b", "", "c"]),
    (["none", "  kept"], ["none", "  kept"]),
    (["    ", "  x"], ["    ", "  x"]),
    ([], []),
])
def test_normalize_indent(lines, expected):
    assert NormalizeIndentTransform().transform(lines) == expected


def test_normalize_indent_round_trip():
    original = [
        "   Summary line.",
        "",
        "   ```",
        "   block:",
        "       nested: true",
        "   ```",
    ]
    normalized = NormalizeIndentTransform()(original)
    pad = leading_whitespace(original[0])
    restored = [" " * pad + line if line else line for line in normalized]
    assert restored == original


@pytest.mark.parametrize("grouping,expected", [
    (False, ["### Title", "text", "#### Sub"]),
    (True, ["#### Title", "text", "##### Sub"]),
])
def test_promote_headings(grouping, expected):
    assert PromoteHeadingsTransform(grouping).transform(["# Title", "text", "## Sub"]) == expected


@pytest.mark.parametrize("lines,expected", [
    (["before <!-- hidden --> after"], ["before  after"]),
    (["a<!-- x -->b<!-- y -->c"], ["abc"]),
    (["start <!-- open", "inside", "still inside", "close --> end", "next"], ["start ", "", "", " end", "next"]),
    (["<!-- one line -->"], [""]),
    (["x <!-- never closed", "gone"], ["x ", ""]),
    (["a <!-- x", "y --> b <!-- z --> c"], ["a ", " b  c"]),
    (["no comments here"], ["no comments here"]),
])
def test_elide_html_comments(lines, expected):
    assert ElideHtmlCommentsTransform().transform(lines) == expected


@pytest.mark.parametrize("lines", [
    ["before <!-- hidden --> after"],
    ["start <!-- open", "inside", "close --> end"],
    ["<!<!-- nested -->-- tricky -->", "after"],
    ["plain"],
])
def test_elide_html_comments_is_idempotent(lines):
    transform = ElideHtmlCommentsTransform()
    once = transform.transform(lines)
    assert transform.transform(once) == once


@pytest.mark.parametrize("line,expected", [
    ("Required. The name.", "The name."),
    ("Optional. The name.", "The name."),
    ("Required: not stripped", "Required: not stripped"),
    ("RequiredX The name.", "RequiredX The name."),
    (" Required. indented", " Required. indented"),
])
def test_strip_field_prefix(line, expected):
    assert StripFieldPrefixTransform().transform([line]) == [expected]


def test_drop_directive_lines():
    lines = ["keep", "+kubebuilder:validation:Required", " +indented is kept", "also keep", "+"]
    assert DropDirectiveLinesTransform()(lines) == ["keep", " +indented is kept", "also keep"]


if __name__ == "__main__":
    pytest.main([__file__])
