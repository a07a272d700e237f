"""
proto_model.py
Read-only descriptor graph for a set of parsed .proto files. Packages own files, files own messages, enums and
services, and every node carries the source comments attached to it. Built once per run by proto_model_builder
and never mutated by the generators.
"""
from enum import Enum
from typing import List, Dict, Optional, Union


class Mode(Enum):
    """Per-package choice between one document per file and one document per package."""
    UNSET = ""
    FILE = "file"
    PACKAGE = "package"
    NONE = "none"


class FieldType(Enum):
    DOUBLE = "double"
    FLOAT = "float"
    INT64 = "int64"
    UINT64 = "uint64"
    INT32 = "int32"
    FIXED64 = "fixed64"
    FIXED32 = "fixed32"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"
    UINT32 = "uint32"
    SFIXED32 = "sfixed32"
    SFIXED64 = "sfixed64"
    SINT32 = "sint32"
    SINT64 = "sint64"
    MESSAGE = "message"
    ENUM = "enum"


SCALAR_TYPES = {ft.value: ft for ft in FieldType if ft not in (FieldType.MESSAGE, FieldType.ENUM)}


class LocationDescriptor:
    """
    Source position and comments of one declaration.
    span is protoc style: [start_line, start_column, end_line, end_column], all 0-based.
    """
    def __init__(self, file: Optional['ProtoFile'] = None, span: Optional[List[int]] = None,
                 leading_comments: str = "", trailing_comments: str = "",
                 leading_detached_comments: Optional[List[str]] = None):
        self.file = file
        self.span = span or []
        self.leading_comments = leading_comments
        self.trailing_comments = trailing_comments
        self.leading_detached_comments = leading_detached_comments or []

    def __repr__(self):
        file_name = self.file.name if self.file is not None else None
        return f"LocationDescriptor(file={file_name!r}, span={self.span!r})"


class CoreDesc:
    """
    Common state of every named node: its enclosing node, owning file, comments and the
    $hide_from_docs / $class annotations found in those comments.
    """
    def __init__(self, name: str, file: Optional['ProtoFile'] = None, parent: Optional['CoreDesc'] = None,
                 location: Optional[LocationDescriptor] = None, hidden: bool = False, css_class: str = ""):
        self.name = name
        self.file = file
        self.parent = parent
        self.location = location or LocationDescriptor(file=file)
        self.hidden = hidden
        self.css_class = css_class

    @property
    def dotted_name(self) -> str:
        """Name path through the enclosing types, e.g. Outer.Inner.field."""
        if self.parent is not None:
            return self.parent.dotted_name + "." + self.name
        return self.name

    @property
    def package(self) -> Optional['ProtoPackage']:
        return self.file.package if self.file is not None else None

    @property
    def full_name(self) -> str:
        """Package-qualified dotted name without a leading dot."""
        pkg = self.package
        if pkg is not None and pkg.name:
            return pkg.name + "." + self.dotted_name
        return self.dotted_name

    def __repr__(self):
        return f"{type(self).__name__}({self.full_name!r})"


class ProtoField(CoreDesc):
    def __init__(self, name: str, number: int, field_type: FieldType, type_name: str = "",
                 type_ref: Optional[Union['ProtoMessage', 'ProtoEnum']] = None, label: Optional[str] = None,
                 oneof_index: Optional[int] = None, deprecated: bool = False, required: bool = False, **kwargs):
        super().__init__(name, **kwargs)
        self.number = number
        self.field_type = field_type
        self.type_name = type_name  # raw name as written, for named types
        self.type_ref = type_ref  # None for scalars
        self.label = label  # 'optional', 'repeated', 'required' or None
        self.oneof_index = oneof_index
        self.deprecated = deprecated
        self.required = required  # google.api.field_behavior = REQUIRED

    @property
    def is_repeated(self) -> bool:
        return self.label == "repeated"


class ProtoMessage(CoreDesc):
    def __init__(self, name: str, fields: Optional[List[ProtoField]] = None,
                 messages: Optional[List['ProtoMessage']] = None, enums: Optional[List['ProtoEnum']] = None,
                 map_entry: bool = False, oneofs: Optional[List[str]] = None, **kwargs):
        super().__init__(name, **kwargs)
        self.fields = fields or []
        self.messages = messages or []
        self.enums = enums or []
        self.map_entry = map_entry
        self.oneofs = oneofs or []


class ProtoEnumValue(CoreDesc):
    def __init__(self, name: str, number: int, deprecated: bool = False, **kwargs):
        super().__init__(name, **kwargs)
        self.number = number
        self.deprecated = deprecated


class ProtoEnum(CoreDesc):
    def __init__(self, name: str, values: Optional[List[ProtoEnumValue]] = None, **kwargs):
        super().__init__(name, **kwargs)
        self.values = values or []


class ProtoMethod(CoreDesc):
    def __init__(self, name: str, input_type: str, output_type: str,
                 input_ref: Optional['ProtoMessage'] = None, output_ref: Optional['ProtoMessage'] = None,
                 client_streaming: bool = False, server_streaming: bool = False, deprecated: bool = False,
                 **kwargs):
        super().__init__(name, **kwargs)
        self.input_type = input_type
        self.output_type = output_type
        self.input_ref = input_ref
        self.output_ref = output_ref
        self.client_streaming = client_streaming
        self.server_streaming = server_streaming
        self.deprecated = deprecated


class ProtoService(CoreDesc):
    def __init__(self, name: str, methods: Optional[List[ProtoMethod]] = None, **kwargs):
        super().__init__(name, **kwargs)
        self.methods = methods or []


class FrontMatter:
    """Document metadata read from the $-directives in the comments above a file's package statement."""
    def __init__(self, mode: Mode = Mode.UNSET, title: str = "", overview: str = "", description: str = "",
                 home_location: str = "", extra: Optional[List[str]] = None,
                 location: Optional[LocationDescriptor] = None):
        self.mode = mode
        self.title = title
        self.overview = overview
        self.description = description
        self.home_location = home_location
        self.extra = extra or []
        self.location = location or LocationDescriptor()


class ProtoFile:
    def __init__(self, name: str, package: Optional['ProtoPackage'] = None, syntax: str = "proto2",
                 matter: Optional[FrontMatter] = None, messages: Optional[List[ProtoMessage]] = None,
                 enums: Optional[List[ProtoEnum]] = None, services: Optional[List[ProtoService]] = None,
                 dependencies: Optional[List[str]] = None):
        self.name = name
        self.package = package
        self.syntax = syntax
        self.matter = matter or FrontMatter()
        self.messages = messages or []
        self.enums = enums or []
        self.services = services or []
        self.dependencies = dependencies or []

    @property
    def all_messages(self) -> List[ProtoMessage]:
        """Every message declared in this file, nested ones included, in pre-order."""
        result = []
        def walk(msg):
            result.append(msg)
            for nested in msg.messages:
                walk(nested)
        for msg in self.messages:
            walk(msg)
        return result

    @property
    def all_enums(self) -> List[ProtoEnum]:
        result = list(self.enums)
        for msg in self.all_messages:
            result.extend(msg.enums)
        return result

    def __repr__(self):
        return f"ProtoFile({self.name!r})"


class ProtoPackage:
    def __init__(self, name: str, files: Optional[List[ProtoFile]] = None):
        self.name = name
        self.files = files or []
        self.file: Optional[ProtoFile] = None  # representative file, see file_desc()

    def file_desc(self) -> Optional[ProtoFile]:
        """
        The file that speaks for the whole package: the first file whose package statement carries
        a comment, else the first file.
        """
        if self.file is not None:
            return self.file
        return self.files[0] if self.files else None

    @property
    def location(self) -> LocationDescriptor:
        top = self.file_desc()
        if top is None:
            return LocationDescriptor()
        return top.matter.location

    def __repr__(self):
        return f"ProtoPackage({self.name!r})"


class ProtoModel:
    def __init__(self, files: List[ProtoFile], packages: List[ProtoPackage]):
        self.files = files
        self.packages = packages
        self.all_desc_by_name = self._build_desc_lookup()

    def _build_desc_lookup(self) -> Dict[str, CoreDesc]:
        """Map '.'-prefixed absolute names to messages, enums and services across all packages."""
        lookup = {}
        for f in self.files:
            for msg in f.all_messages:
                lookup["." + msg.full_name] = msg
            for enum in f.all_enums:
                lookup["." + enum.full_name] = enum
            for svc in f.services:
                lookup["." + svc.full_name] = svc
        return lookup

    def get_file(self, name: str) -> Optional[ProtoFile]:
        for f in self.files:
            if f.name == name:
                return f
        return None

    def get_package(self, name: str) -> Optional[ProtoPackage]:
        for pkg in self.packages:
            if pkg.name == name:
                return pkg
        return None
