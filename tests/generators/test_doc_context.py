import io

import pytest
from proto_model import LocationDescriptor, ProtoFile
from generators.doc_context import Diagnostics, DocumentContext
from test_utils import build_model


def make_loc(span):
    return LocationDescriptor(file=ProtoFile("dir/x.proto"), span=span)


@pytest.mark.parametrize("span,offset,expected", [
    ([4, 2, 4, 10], 0, "dir/x.proto:5:3: "),
    ([4, 2, 4, 10], -2, "dir/x.proto:3: "),
    ([], 0, ""),
])
def test_place(span, offset, expected):
    assert Diagnostics.place(make_loc(span), offset) == expected


def test_place_without_file():
    assert Diagnostics.place(LocationDescriptor(span=[1, 1, 1, 1])) == ""


def test_warnings_printed_only_when_enabled():
    stream = io.StringIO()
    quiet = Diagnostics(False, stream)
    quiet.warn(make_loc([0, 0, 0, 1]), 0, "first")
    assert quiet.num_warnings == 1
    assert stream.getvalue() == ""

    loud = Diagnostics(True, stream)
    loud.warn(make_loc([0, 0, 0, 1]), 0, "second")
    loud.warn(make_loc([2, 4, 2, 9]), 0, "third")
    assert loud.num_warnings == 2
    assert stream.getvalue() == "dir/x.proto:1:1: second\ndir/x.proto:3:5: third\n"
    assert loud.messages == ["dir/x.proto:1:1: second", "dir/x.proto:3:5: third"]


def test_document_buffer():
    model = build_model({"p.proto": 'syntax = "proto3";\n// $location: https://p.example.com/\npackage p;\n'})
    pkg = model.get_package("p")
    ctx = DocumentContext(model, pkg, pkg.file_desc(), Diagnostics())
    ctx.emit("<p>", "one", "</p>")
    ctx.write("raw")
    ctx.emit()
    assert ctx.content() == "<p>one</p>\nraw\n"
    assert ctx.home_location == "https://p.example.com/"
    assert DocumentContext(model, pkg, None, Diagnostics()).home_location == ""


if __name__ == "__main__":
    pytest.main([__file__])
