"""
type_link_transform.py
Replaces [display][package.Type] references in a comment with links to the referenced type.
"""
import re
from typing import List

from proto_model import LocationDescriptor
from generators.cross_reference import linkify
from generators.doc_context import DocumentContext
from generators.generator_utils import WELL_KNOWN_TYPES

TYPE_LINK_PATTERN = re.compile(r'\[([^\]]*)\]\[([^\]]*)\]')


class TypeLinkTransform:
    """
    Names are looked up as absolute names across every loaded package first, then among the well-known
    types. Anything else is rendered in italics and reported.
    """

    def __init__(self, ctx: DocumentContext, loc: LocationDescriptor):
        self.ctx = ctx
        self.loc = loc

    def transform(self, lines: List[str]) -> List[str]:
        result = list(lines)
        for i, line in enumerate(result):
            def replace(match, i=i):
                link_name, type_name = match.group(1), match.group(2)
                desc = self.ctx.model.all_desc_by_name.get("." + type_name)
                if desc is not None:
                    return linkify(self.ctx, desc, link_name, False)
                url = WELL_KNOWN_TYPES.get(type_name)
                if url is not None:
                    return f'<a href="{url}">{link_name}</a>'
                self.ctx.diagnostics.warn(self.loc, -(len(result) - i),
                                          f"unresolved type link [{link_name}][{type_name}]")
                return f"*{link_name}*"
            result[i] = TYPE_LINK_PATTERN.sub(replace, line)
        return result

    def __call__(self, lines: List[str]) -> List[str]:
        return self.transform(lines)
