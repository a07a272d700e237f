"""
package_mode_resolver.py
Decides whether a package is documented one page per file or one page for the whole package, and which
of its files take part.
"""
from typing import Collection, List, Optional

from proto_model import Mode, ProtoFile, ProtoPackage
from generators.doc_context import GenerationError


class ModeConflictError(GenerationError):
    """Two files of one package ask for different output modes. outputs holds the documents already made."""

    def __init__(self, message: str, outputs: Optional[list] = None):
        super().__init__(message)
        self.outputs = outputs or []


def resolve_package_mode(package: ProtoPackage) -> Mode:
    """
    The first file with a mode sets it for the package; files without a mode follow it. A package whose
    mode is NONE may still be switched by a later explicit mode, so a single file can opt out.
    """
    mode = Mode.UNSET
    mode_file = None
    for file in package.files:
        file_mode = file.matter.mode
        if mode == Mode.UNSET:
            mode = file_mode
            mode_file = file if file_mode != Mode.UNSET else None
        elif mode == Mode.NONE and file_mode != Mode.UNSET:
            mode = file_mode
            mode_file = file
        elif file_mode != Mode.UNSET and file_mode != mode and file_mode != Mode.NONE:
            raise ModeConflictError(
                f"all files in a package must have the same mode; {mode_file.name} has '{mode.value}' "
                f"but {file.name} has '{file_mode.value}' (package '{package.name}')")
    return mode


def files_to_render(package: ProtoPackage, mode: Mode, files_to_gen: Collection[ProtoFile]) -> List[ProtoFile]:
    """Requested files of the package whose effective mode is not NONE, in package order."""
    result = []
    for file in package.files:
        file_mode = file.matter.mode
        if file_mode == Mode.UNSET:
            file_mode = mode
        if file_mode == Mode.NONE:
            continue
        if file in files_to_gen:
            result.append(file)
    return result
