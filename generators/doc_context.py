"""
doc_context.py
Run-scoped diagnostics and the per-document state shared by the linker, the comment pipeline and the
HTML generator.
"""
import sys
from typing import List, Optional, TextIO

from proto_model import LocationDescriptor, ProtoFile, ProtoModel, ProtoPackage


class GenerationError(Exception):
    pass


class Diagnostics:
    """
    Warning sink for a whole run. Every warning is counted; it is only printed when warnings are enabled.
    """

    def __init__(self, gen_warnings: bool = False, stream: Optional[TextIO] = None):
        self.gen_warnings = gen_warnings
        self.stream = stream
        self.num_warnings = 0
        self.messages: List[str] = []

    @staticmethod
    def place(loc: LocationDescriptor, line_offset: int = 0) -> str:
        """protoc style position prefix; a negative offset reports a line relative to the declaration."""
        if loc is None or loc.file is None or len(loc.span) < 2:
            return ""
        if line_offset < 0:
            return f"{loc.file.name}:{loc.span[0] + line_offset + 1}: "
        return f"{loc.file.name}:{loc.span[0] + 1}:{loc.span[1] + 1}: "

    def warn(self, loc: LocationDescriptor, line_offset: int, message: str):
        self.num_warnings += 1
        text = self.place(loc, line_offset) + message
        self.messages.append(text)
        if self.gen_warnings:
            print(text, file=self.stream if self.stream is not None else sys.stderr)


class DocumentContext:
    """
    Everything that is specific to the document being rendered: the package and front matter provider
    used to resolve names and home locations, the grouping flag, and the output buffer.
    """

    def __init__(self, model: ProtoModel, package: Optional[ProtoPackage], provider: Optional[ProtoFile],
                 diagnostics: Diagnostics, speller=None, grouping: bool = False):
        self.model = model
        self.package = package
        self.provider = provider
        self.diagnostics = diagnostics
        self.speller = speller
        self.grouping = grouping
        self._buffer: List[str] = []

    @property
    def home_location(self) -> str:
        return self.provider.matter.home_location if self.provider is not None else ""

    def emit(self, *parts: str):
        self._buffer.append("".join(parts) + "\n")

    def write(self, text: str):
        self._buffer.append(text)

    def content(self) -> str:
        return "".join(self._buffer)
