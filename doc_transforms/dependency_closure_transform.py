"""
dependency_closure_transform.py
Extends the types of one document with every type they reference that is not documented anywhere else,
so that each local link in the document has a target.
"""
from typing import List, Optional

from proto_model import ProtoEnum, ProtoFile, ProtoMessage, ProtoPackage, ProtoService
from generators.cross_reference import home_location
from generators.generator_utils import relative_name


class DocumentContents:
    """The messages, enums and services that go into one output document, in discovery order."""

    def __init__(self, messages: Optional[List[ProtoMessage]] = None, enums: Optional[List[ProtoEnum]] = None,
                 services: Optional[List[ProtoService]] = None):
        self.messages = messages if messages is not None else []
        self.enums = enums if enums is not None else []
        self.services = services if services is not None else []


class DependencyClosureTransform:
    """
    Walks the fields of the seed messages and of every message pulled in along the way. A referenced
    message or enum is appended when it has no home location and its display name is not present yet.
    Method input and output types are not followed.
    """

    def __init__(self, package: Optional[ProtoPackage], seed: Optional[List[ProtoMessage]] = None):
        self.package = package
        self.seed = seed

    def transform(self, contents: DocumentContents) -> DocumentContents:
        message_names = {relative_name(m, self.package) for m in contents.messages}
        enum_names = {relative_name(e, self.package) for e in contents.enums}
        worklist = list(self.seed if self.seed is not None else contents.messages)
        visited = set()
        while worklist:
            msg = worklist.pop(0)
            if id(msg) in visited:
                continue
            visited.add(id(msg))
            for field in msg.fields:
                ref = field.type_ref
                if ref is None or home_location(ref):
                    continue
                name = relative_name(ref, self.package)
                if isinstance(ref, ProtoMessage):
                    if name not in message_names:
                        message_names.add(name)
                        contents.messages.append(ref)
                        worklist.append(ref)
                elif isinstance(ref, ProtoEnum):
                    if name not in enum_names:
                        enum_names.add(name)
                        contents.enums.append(ref)
        return contents

    def __call__(self, contents: DocumentContents) -> DocumentContents:
        return self.transform(contents)


def collect_file_contents(file: ProtoFile, contents: DocumentContents,
                          package: Optional[ProtoPackage]) -> DocumentContents:
    """Append a file's own types, then the unsituated types they depend on."""
    contents.messages.extend(file.all_messages)
    contents.enums.extend(file.all_enums)
    contents.services.extend(file.services)
    return DependencyClosureTransform(package, seed=file.all_messages).transform(contents)
