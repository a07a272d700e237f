import pytest
from proto_model import ProtoMessage
from generators.cross_reference import home_location, linkify
from test_utils import build_model, find_message, make_context


SOURCES = {
    "app.proto": '''
        syntax = "proto3";
        // App package.
        package app;
        import "lib.proto";
        import "google/protobuf/wrappers.proto";
        message Local {
          map<string, string> tags = 1;
          message Inner {}
        }
    ''',
    "lib.proto": '''
        syntax = "proto3";
        // $location: https://lib.example.com/lib.html
        package lib.v1;
        message Shared {
          message Part {}
        }
        // $hide_from_docs
        message Secret {}
    ''',
    "lib_extra.proto": '''
        syntax = "proto3";
        package lib.v1;
        message Extra {}
    ''',
}


@pytest.fixture
def model():
    return build_model(SOURCES)


def test_nil_descriptor_returns_name(model):
    assert linkify(make_context(model, "app"), None, "int32", True) == "int32"


def test_map_entry_returns_name(model):
    entry = find_message(model, "app.Local.TagsEntry")
    assert linkify(make_context(model, "app"), entry, "map&lt;string,&nbsp;string&gt;", True) == \
        "map&lt;string,&nbsp;string&gt;"


def test_local_link(model):
    ctx = make_context(model, "app")
    assert linkify(ctx, find_message(model, "app.Local.Inner"), "Local.Inner", False) == \
        '<a href="#Local-Inner">Local.Inner</a>'


def test_abbreviation(model):
    ctx = make_context(model, "app")
    inner = find_message(model, "app.Local.Inner")
    assert linkify(ctx, inner, "Local.Inner", True) == '<a href="#Local-Inner">Inner</a>'
    assert linkify(ctx, inner, "Inner.", True) == '<a href="#Local-Inner">Inner.</a>'


def test_well_known_type(model):
    ctx = make_context(model, "app")
    desc = find_message(model, "google.protobuf.UInt32Value")
    assert linkify(ctx, desc, "google.protobuf.UInt32Value", True) == \
        '<a href="https://developers.google.com/protocol-buffers/docs/reference/google.protobuf#uint32value">' \
        'UInt32Value</a>'


def test_external_home_location(model):
    ctx = make_context(model, "app")
    part = find_message(model, "lib.v1.Shared.Part")
    assert linkify(ctx, part, "lib.v1.Shared.Part", False) == \
        '<a href="https://lib.example.com/lib.html#Shared-Part">lib.v1.Shared.Part</a>'


def test_package_wide_home_location(model):
    extra = find_message(model, "lib.v1.Extra")
    assert home_location(extra) == "https://lib.example.com/lib.html"
    assert home_location(find_message(model, "app.Local")) == ""


def test_same_home_links_locally(model):
    ctx = make_context(model, "lib.v1")
    assert linkify(ctx, find_message(model, "lib.v1.Extra"), "Extra", True) == '<a href="#Extra">Extra</a>'


def test_external_home_without_provider(model):
    ctx = make_context(model, "lib.v1")
    ctx.provider = None
    assert linkify(ctx, find_message(model, "lib.v1.Extra"), "Extra", True) == \
        '<a href="https://lib.example.com/lib.html#Extra">Extra</a>'


def test_hidden_type_never_links_externally(model):
    ctx = make_context(model, "app")
    assert linkify(ctx, find_message(model, "lib.v1.Secret"), "lib.v1.Secret", True) == \
        '<a href="#lib-v1-Secret">Secret</a>'


def test_home_location_without_file():
    assert home_location(ProtoMessage("Orphan")) == ""


if __name__ == "__main__":
    pytest.main([__file__])
