"""
drop_directive_lines_transform.py
Removes +annotation lines (e.g. +kubebuilder markers) that are meant for tools, not readers.
"""
from typing import List


class DropDirectiveLinesTransform:
    def transform(self, lines: List[str]) -> List[str]:
        return [line for line in lines if not line.startswith("+")]

    def __call__(self, lines: List[str]) -> List[str]:
        return self.transform(lines)
