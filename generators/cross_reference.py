"""
cross_reference.py
Turns a reference to a message, enum or service into HTML: an external link for well-known types and for
types documented on another site, otherwise a link to the anchor in the current document.
"""
from typing import Optional

from proto_model import CoreDesc, ProtoMessage
from generators.doc_context import DocumentContext
from generators.generator_utils import WELL_KNOWN_TYPES, absolute_name, normalize_id, relative_name


def home_location(desc: CoreDesc) -> str:
    """Where desc is documented: the owning file's $location, else the package-wide one, else ''."""
    loc = desc.file.matter.home_location if desc.file is not None else ""
    if not loc and desc.package is not None:
        top = desc.package.file_desc()
        if top is not None:
            loc = top.matter.home_location
    return loc


def linkify(ctx: DocumentContext, desc: Optional[CoreDesc], name: str, abbreviate: bool) -> str:
    if desc is None:
        return name

    if isinstance(desc, ProtoMessage) and desc.map_entry:
        return name

    display_name = name
    if abbreviate:
        index = name.rfind(".")
        if 0 < index < len(name) - 1:
            display_name = name[index + 1:]

    known = WELL_KNOWN_TYPES.get(absolute_name(desc))
    if known:
        return f'<a href="{known}">{display_name}</a>'

    if not desc.hidden:
        loc = home_location(desc)
        if loc and (ctx.provider is None or loc != ctx.home_location):
            return f'<a href="{loc}#{normalize_id(desc.dotted_name)}">{display_name}</a>'

    return f'<a href="#{normalize_id(relative_name(desc, ctx.package))}">{display_name}</a>'
