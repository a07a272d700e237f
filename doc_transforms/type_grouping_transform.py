"""
type_grouping_transform.py
Turns the contents of a document into its render order: filtered, de-duplicated, with nested and
related type names kept next to each other.
"""
from typing import Dict, List, Optional, Tuple

from proto_model import ProtoEnum, ProtoMessage, ProtoPackage, ProtoService
from doc_transforms.dependency_closure_transform import DocumentContents
from generators.generator_utils import is_well_known, relative_name


class DocumentLayout:
    def __init__(self, types: List[str], services: List[str], messages_by_name: Dict[str, ProtoMessage],
                 enums_by_name: Dict[str, ProtoEnum], services_by_name: Dict[str, ProtoService]):
        self.types = types
        self.services = services
        self.messages_by_name = messages_by_name
        self.enums_by_name = enums_by_name
        self.services_by_name = services_by_name

    @property
    def grouping(self) -> bool:
        """True when the document has both a Services and a Types section."""
        return bool(self.types) and bool(self.services)

    @property
    def num_entries(self) -> int:
        return len(self.types) + len(self.services)

    def type_desc(self, name: str):
        # enums win when a message and an enum share a display name
        if name in self.enums_by_name:
            return self.enums_by_name[name]
        return self.messages_by_name.get(name)


def sort_hierarchically(names: List[str]) -> List[str]:
    """
    Stable pre-order sort: each name is followed by the names nested under it (those starting with
    name + '.'), before the next unplaced name in the original order.
    """
    seen = set()
    result = []

    def add_key(key):
        if key in seen:
            return
        seen.add(key)
        result.append(key)
        for name in names:
            if name.startswith(key + "."):
                add_key(name)

    for name in names:
        add_key(name)
    return result


def heading_depth(name: str, grouping: bool) -> int:
    depth = 2 + min(4, name.count("."))
    if grouping:
        depth += 1
    return depth


def active_then_deprecated(entries) -> Tuple[list, list]:
    """Split visible entries of a container into (non-deprecated, deprecated), each in declaration order."""
    visible = [e for e in entries if not e.hidden]
    active = [e for e in visible if not getattr(e, 'deprecated', False)]
    deprecated = [e for e in visible if getattr(e, 'deprecated', False)]
    return active, deprecated


class TypeGroupingTransform:
    def __init__(self, package: Optional[ProtoPackage]):
        self.package = package

    def transform(self, contents: DocumentContents) -> DocumentLayout:
        type_list = []
        messages_by_name = {}
        for msg in contents.messages:
            # map entries are rendered inline as map<K, V>
            if msg.map_entry or msg.hidden or is_well_known(msg):
                continue
            name = relative_name(msg, self.package)
            if name in messages_by_name:
                continue
            type_list.append(name)
            messages_by_name[name] = msg

        enums_by_name = {}
        for enum in contents.enums:
            if enum.hidden or is_well_known(enum):
                continue
            name = relative_name(enum, self.package)
            if name in enums_by_name:
                continue
            type_list.append(name)
            enums_by_name[name] = enum

        service_list = []
        services_by_name = {}
        for svc in contents.services:
            if svc.hidden:
                continue
            name = relative_name(svc, self.package)
            service_list.append(name)
            services_by_name[name] = svc

        return DocumentLayout(sort_hierarchically(type_list), service_list, messages_by_name, enums_by_name,
                              services_by_name)

    def __call__(self, contents: DocumentContents) -> DocumentLayout:
        return self.transform(contents)
