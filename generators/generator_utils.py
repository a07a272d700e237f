"""
Shared utilities for the documentation generators.
Handles anchor ids, display names, scalar type names, well-known types and output file naming.
"""
import os
from typing import Any, Optional

from proto_model import FieldType


# well-known types whose documentation lives on the protobuf site
WKT_BASE_URL = "https://developers.google.com/protocol-buffers/docs/reference/google.protobuf#"

WELL_KNOWN_TYPES = {
    f"google.protobuf.{name}": WKT_BASE_URL + name.lower()
    for name in (
        "Duration", "Timestamp", "Any", "BytesValue", "StringValue", "BoolValue", "Int32Value", "Int64Value",
        "UInt32Value", "UInt64Value", "FloatValue", "DoubleValue", "Empty", "EnumValue", "ListValue",
        "NullValue", "Struct",
    )
}

# --- Type Mapping ---
SCALAR_DISPLAY_NAMES = {
    FieldType.DOUBLE: "double",
    FieldType.FLOAT: "float",
    FieldType.INT32: "int32",
    FieldType.SINT32: "int32",
    FieldType.SFIXED32: "int32",
    FieldType.INT64: "int64",
    FieldType.SINT64: "int64",
    FieldType.SFIXED64: "int64",
    FieldType.UINT64: "uint64",
    FieldType.FIXED64: "uint64",
    FieldType.UINT32: "uint32",
    FieldType.FIXED32: "uint32",
    FieldType.BOOL: "bool",
    FieldType.STRING: "string",
    FieldType.BYTES: "bytes",
}


def normalize_id(name: str) -> str:
    """Anchor id for a dotted name: spaces and dots become dashes."""
    return name.replace(" ", "-").replace(".", "-")


def camel_case(name: str) -> str:
    """my_field_name -> myFieldName"""
    result = []
    next_upper = False
    for ch in name:
        if ch == "_":
            next_upper = True
        elif next_upper:
            next_upper = False
            result.append(ch.upper())
        else:
            result.append(ch)
    return "".join(result)


# --- Name Resolution ---
def absolute_name(desc: Any) -> str:
    pkg = desc.package
    return (pkg.name if pkg is not None else "") + "." + desc.dotted_name


def relative_name(desc: Any, current_package: Optional[Any]) -> str:
    """Dotted name, package qualified only when desc lives outside the current package."""
    if desc.package is current_package:
        return desc.dotted_name
    return absolute_name(desc)


def is_well_known(desc: Any) -> bool:
    return absolute_name(desc) in WELL_KNOWN_TYPES


# --- Output Naming ---
def per_file_name(file: Any) -> str:
    return os.path.splitext(file.name)[0] + ".pb.html"


def per_package_name(package_name: str, file: Any) -> str:
    return os.path.join(os.path.dirname(file.name), package_name + ".pb.html")
