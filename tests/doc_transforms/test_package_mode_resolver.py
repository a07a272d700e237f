import pytest
from proto_model import FrontMatter, Mode, ProtoFile, ProtoPackage
from doc_transforms.package_mode_resolver import ModeConflictError, files_to_render, resolve_package_mode
from generators.doc_context import GenerationError


def make_package(*modes):
    pkg = ProtoPackage("p")
    for i, mode in enumerate(modes):
        f = ProtoFile(f"f{i}.proto", package=pkg, matter=FrontMatter(mode=mode))
        pkg.files.append(f)
    return pkg


@pytest.mark.parametrize("modes,expected", [
    ((Mode.UNSET, Mode.UNSET), Mode.UNSET),
    ((Mode.PACKAGE, Mode.UNSET), Mode.PACKAGE),
    ((Mode.UNSET, Mode.FILE), Mode.FILE),
    ((Mode.FILE, Mode.NONE, Mode.FILE), Mode.FILE),
    ((Mode.NONE, Mode.PACKAGE), Mode.PACKAGE),
    ((Mode.NONE, Mode.UNSET), Mode.NONE),
    ((Mode.PACKAGE, Mode.NONE), Mode.PACKAGE),
])
def test_resolve_package_mode(modes, expected):
    assert resolve_package_mode(make_package(*modes)) == expected


def test_conflict_names_both_files_and_modes():
    pkg = make_package(Mode.PACKAGE, Mode.UNSET, Mode.FILE)
    with pytest.raises(ModeConflictError) as e:
        resolve_package_mode(pkg)
    message = str(e.value)
    assert "f0.proto" in message and "f2.proto" in message
    assert "'package'" in message and "'file'" in message
    assert isinstance(e.value, GenerationError)
    assert e.value.outputs == []


def test_files_to_render_skips_suppressed_and_unrequested():
    pkg = make_package(Mode.PACKAGE, Mode.NONE, Mode.UNSET, Mode.UNSET)
    mode = resolve_package_mode(pkg)
    selected = pkg.files[:3]
    assert [f.name for f in files_to_render(pkg, mode, selected)] == ["f0.proto", "f2.proto"]


def test_suppressed_package_renders_nothing():
    pkg = make_package(Mode.NONE, Mode.UNSET)
    assert files_to_render(pkg, resolve_package_mode(pkg), pkg.files) == []


if __name__ == "__main__":
    pytest.main([__file__])
