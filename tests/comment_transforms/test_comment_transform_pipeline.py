import pytest
from proto_model import LocationDescriptor, ProtoFile
from comment_transforms.comment_transform_pipeline import build_comment_transforms, comment_lines, \
    render_comment, run_comment_transform_pipeline, select_comment_text
from comment_transforms.spell_check_transform import SpellCheckTransform, sanitize
from comment_transforms.type_link_transform import TypeLinkTransform
from speller import WordListSpeller
from test_utils import build_model, make_context


SOURCES = {
    "pkg.proto": '''
        syntax = "proto3";
        package pkg;
        message Bar {}
        // $hide_from_docs
        message Secret {}
    ''',
    "other.proto": '''
        syntax = "proto3";
        // $location: https://example.com/other.html
        package other;
        message Remote {}
    ''',
}


@pytest.fixture
def model():
    return build_model(SOURCES)


def make_loc(text="", trailing="", span=None):
    return LocationDescriptor(file=ProtoFile("pkg.proto"), span=span if span is not None else [9, 2, 9, 20],
                              leading_comments=text, trailing_comments=trailing)


def test_type_link_resolves_known_type(model):
    ctx = make_context(model, "pkg")
    lines = TypeLinkTransform(ctx, make_loc()).transform(["See [Foo][pkg.Bar] for details."])
    assert lines == ['See <a href="#Bar">Foo</a> for details.']
    assert ctx.diagnostics.num_warnings == 0


def test_type_link_to_external_home(model):
    ctx = make_context(model, "pkg")
    lines = TypeLinkTransform(ctx, make_loc()).transform(["[the remote][other.Remote]"])
    assert lines == ['<a href="https://example.com/other.html#Remote">the remote</a>']


def test_type_link_to_well_known_type(model):
    ctx = make_context(model, "pkg")
    lines = TypeLinkTransform(ctx, make_loc()).transform(["[ts][google.protobuf.Timestamp]"])
    assert lines == ['<a href="https://developers.google.com/protocol-buffers/docs/reference/'
                     'google.protobuf#timestamp">ts</a>']


def test_unresolved_type_link_warns_and_italicizes(model):
    ctx = make_context(model, "pkg", gen_warnings=True)
    lines = TypeLinkTransform(ctx, make_loc()).transform(["first", "[Foo][pkg.Missing] and [a][pkg.Bar]"])
    assert lines == ["first", '*Foo* and <a href="#Bar">a</a>']
    assert ctx.diagnostics.num_warnings == 1
    # span line 9 (0-based), offset -(2 - 1) -> reported line 9
    assert ctx.diagnostics.stream.getvalue() == "pkg.proto:9: unresolved type link [Foo][pkg.Missing]\n"


def test_hidden_type_links_locally(model):
    ctx = make_context(model, "pkg")
    lines = TypeLinkTransform(ctx, make_loc()).transform(["[s][pkg.Secret]"])
    assert lines == ['<a href="#Secret">s</a>']


def test_select_comment_text(model):
    ctx = make_context(model, "pkg")
    assert select_comment_text(make_loc("lead\n", "trail\n"), "X", ctx.diagnostics) == "lead\n"
    assert select_comment_text(make_loc("", "trail\n"), "X", ctx.diagnostics) == "trail\n"
    assert ctx.diagnostics.num_warnings == 0
    assert select_comment_text(make_loc(), "X", ctx.diagnostics) is None
    assert ctx.diagnostics.num_warnings == 1
    assert ctx.diagnostics.messages == ["pkg.proto:10:3: no comment found for X"]


def test_warnings_counted_even_when_not_printed(model):
    ctx = make_context(model, "pkg", gen_warnings=False)
    select_comment_text(make_loc(), "X", ctx.diagnostics)
    assert ctx.diagnostics.num_warnings == 1
    assert ctx.diagnostics.stream.getvalue() == ""


def test_comment_lines_trims_one_newline():
    assert comment_lines(" a\n b\n") == [" a", " b"]
    assert comment_lines(" a\n\n") == [" a", ""]


def test_heading_scenario(model):
    ctx = make_context(model, "pkg", grouping=False)
    render_comment(ctx, make_loc("  # Title\n  body text"), "X")
    assert ctx.content() == "<h3>Title</h3>\n<p>body text</p>\n"


def test_heading_scenario_with_grouping(model):
    ctx = make_context(model, "pkg", grouping=True)
    render_comment(ctx, make_loc(" # Title\n body text\n"), "X")
    assert ctx.content().startswith("<h4>Title</h4>")


def test_full_pipeline(model):
    ctx = make_context(model, "pkg")
    text = (" Required. The [bar][pkg.Bar] value.\n"
            " <!-- internal note -->\n"
            " +kubebuilder:validation:Optional\n"
            " ```\n"
            " code  here\n"
            " ```\n")
    render_comment(ctx, make_loc(text), "field")
    html = ctx.content()
    assert html.startswith('<p>The <a href="#Bar">bar</a> value.</p>')
    assert "internal note" not in html
    assert "kubebuilder" not in html
    assert "<pre><code>code  here\n</code></pre>" in html
    assert html.endswith("\n")


def test_missing_comment_emits_nothing(model):
    ctx = make_context(model, "pkg")
    render_comment(ctx, make_loc(), "field")
    assert ctx.content() == ""
    assert ctx.diagnostics.num_warnings == 1


def test_spell_check_only_with_speller(model):
    ctx = make_context(model, "pkg")
    assert not any(isinstance(t, SpellCheckTransform) for t in build_comment_transforms(ctx, make_loc()))
    ctx = make_context(model, "pkg", speller=WordListSpeller(["a"]))
    assert isinstance(build_comment_transforms(ctx, make_loc())[-1], SpellCheckTransform)


def test_spell_check_reports_and_never_mutates(model):
    speller = WordListSpeller(["the", "is", "spelled", "right"])
    ctx = make_context(model, "pkg", speller=speller, gen_warnings=True)
    lines = ["The nmae is `codez` [lnk](http://x.io)", "```", "wrongg inside fence", "```", "spelled right"]
    result = SpellCheckTransform(speller, ctx.diagnostics, make_loc()).transform(list(lines))
    assert result == lines
    assert ctx.diagnostics.num_warnings == 1
    assert ctx.diagnostics.messages == ["pkg.proto:5: nmae is misspelled"]


def test_sanitize():
    assert sanitize('see `code` and [text](http://u) and <a href="x">y') == "see  and  and y"


def test_run_pipeline_applies_in_order():
    class Upper:
        def transform(self, lines):
            return [line.upper() for line in lines]

    class Suffix:
        def transform(self, lines):
            return [line + "!" for line in lines]

    assert run_comment_transform_pipeline(["a"], [Upper(), Suffix()]) == ["A!"]


if __name__ == "__main__":
    pytest.main([__file__])
