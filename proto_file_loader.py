# proto_file_loader.py
# Reads .proto files and their imports, parses them and builds the ProtoModel for a run.
import os
from typing import Dict, List, Optional

from lark.exceptions import UnexpectedInput

from proto_model import ProtoModel
from proto_model_builder import build_proto_model
from proto_parser import parse_proto


class ProtoLoadError(Exception):
    pass


# Well-known types declared by the google/protobuf files, used when those files are not on the include path.
WELL_KNOWN_STUBS = {
    "google/protobuf/any.proto": (["Any"], []),
    "google/protobuf/duration.proto": (["Duration"], []),
    "google/protobuf/timestamp.proto": (["Timestamp"], []),
    "google/protobuf/empty.proto": (["Empty"], []),
    "google/protobuf/field_mask.proto": (["FieldMask"], []),
    "google/protobuf/struct.proto": (["Struct", "Value", "ListValue"], ["NullValue"]),
    "google/protobuf/type.proto": (["Type", "Field", "Enum", "EnumValue", "Option"], ["Syntax"]),
    "google/protobuf/wrappers.proto": ([
        "DoubleValue", "FloatValue", "Int64Value", "UInt64Value", "Int32Value", "UInt32Value",
        "BoolValue", "StringValue", "BytesValue",
    ], []),
}


def well_known_stub(path: str) -> Optional[str]:
    """
    Source text standing in for a missing google/ import. google/protobuf files declare their
    well-known types without fields; google/api annotation files declare nothing.
    """
    if path.startswith("google/protobuf/"):
        messages, enums = WELL_KNOWN_STUBS.get(path, ([], []))
        lines = ['syntax = "proto3";', "package google.protobuf;"]
        lines.extend(f"message {name} {{}}" for name in messages)
        lines.extend(f"enum {name} {{ {name.upper()}_UNSPECIFIED = 0; }}" for name in enums)
        return "\n".join(lines) + "\n"
    if path.startswith("google/api/"):
        return 'syntax = "proto3";\npackage google.api;\n'
    return None


class ProtoFileLoader:
    """
    Loads .proto files by import path. Files are looked up in the in-memory sources first, then in each
    include directory in order. Imports are loaded depth first so every file follows its dependencies.
    """

    def __init__(self, include_dirs: Optional[List[str]] = None, sources: Optional[Dict[str, str]] = None,
                 verbose: bool = False):
        self.include_dirs = include_dirs if include_dirs is not None else ["."]
        self.sources = sources or {}
        self.verbose = verbose
        self._parsed = {}
        self._order = []

    def debug_print(self, msg: str):
        if self.verbose:
            print(f"[DEBUG] {msg}")

    def read_source(self, path: str) -> str:
        if path in self.sources:
            return self.sources[path]
        for include_dir in self.include_dirs:
            candidate = os.path.join(include_dir, path)
            if os.path.isfile(candidate):
                self.debug_print(f"Reading {candidate}")
                try:
                    with open(candidate, 'r', encoding='utf-8') as f:
                        return f.read()
                except (OSError, UnicodeDecodeError) as e:
                    raise ProtoLoadError(f"{path}: cannot read file: {e}")
        stub = well_known_stub(path)
        if stub is not None:
            self.debug_print(f"Using stub for {path}")
            return stub
        raise ProtoLoadError(f"{path}: file not found (include paths: {', '.join(self.include_dirs)})")

    def _load(self, path: str, importer: Optional[str], stack: List[str]):
        if path in self._parsed:
            return
        if path in stack:
            cycle = " -> ".join(stack[stack.index(path):] + [path])
            raise ProtoLoadError(f"import cycle detected: {cycle}")
        try:
            text = self.read_source(path)
        except ProtoLoadError as e:
            if importer is not None:
                raise ProtoLoadError(f"{importer}: import \"{path}\" failed: {e}")
            raise
        try:
            tree, comments = parse_proto(text)
        except UnexpectedInput as e:
            raise ProtoLoadError(f"{path}:{e.line}:{e.column}: syntax error: {e.get_context(text).strip()}")

        stack.append(path)
        for node in tree.children:
            if getattr(node, 'data', None) != 'import_stmt':
                continue
            dep = [t for t in node.children if getattr(t, 'type', None) == 'STRING'][0]
            self._load(str(dep)[1:-1], path, stack)
        stack.pop()

        self._parsed[path] = (path, text, tree, comments)
        self._order.append(path)

    def load(self, paths: List[str]) -> ProtoModel:
        for path in paths:
            self._load(path, None, [])
        return build_proto_model([self._parsed[p] for p in self._order])


def load_proto_files(paths: List[str], include_dirs: Optional[List[str]] = None, verbose: bool = False) -> ProtoModel:
    """Load the given import paths (relative to the include dirs) and everything they import."""
    return ProtoFileLoader(include_dirs, verbose=verbose).load(paths)


def load_proto_sources(sources: Dict[str, str], paths: Optional[List[str]] = None) -> ProtoModel:
    """Build a model from in-memory sources keyed by import path."""
    return ProtoFileLoader([], sources).load(paths if paths is not None else list(sources))
