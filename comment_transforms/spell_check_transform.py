"""
spell_check_transform.py
Reports misspelled words in a comment. Fenced code blocks, inline code, link targets and HTML anchors
are not checked. The lines are returned unchanged.
"""
import re
from typing import List

from proto_model import LocationDescriptor
from generators.doc_context import Diagnostics

STRIP_CODE_BLOCKS = re.compile(r'(`.*`)')
STRIP_MARKDOWN_URLS = re.compile(r'\[.*\]\((.*)\)')
STRIP_HTML_URLS = re.compile(r'(<a href=".*">)')


def sanitize(line: str) -> str:
    line = STRIP_MARKDOWN_URLS.sub("", line)
    line = STRIP_HTML_URLS.sub("", line)
    return STRIP_CODE_BLOCKS.sub("", line)


class SpellCheckTransform:
    def __init__(self, speller, diagnostics: Diagnostics, loc: LocationDescriptor):
        self.speller = speller
        self.diagnostics = diagnostics
        self.loc = loc

    def transform(self, lines: List[str]) -> List[str]:
        pre_block = False
        for linenum, line in enumerate(lines):
            if line.strip(" ").startswith("```"):
                pre_block = not pre_block
                continue
            if pre_block:
                continue
            for word in self.speller.split(sanitize(line)):
                if not self.speller.spell(word):
                    self.diagnostics.warn(self.loc, -(len(lines) - linenum), f"{word} is misspelled")
        return lines

    def __call__(self, lines: List[str]) -> List[str]:
        return self.transform(lines)
