"""
normalize_indent_transform.py
Removes the left margin of a comment, measured on its first line, from every line.
"""
from typing import List


def leading_whitespace(line: str) -> int:
    count = 0
    for ch in line:
        if not ch.isspace():
            break
        count += 1
    return count


class NormalizeIndentTransform:
    """
    Each line loses at most as many leading whitespace characters as the first line has, so indentation
    inside preformatted blocks survives relative to the margin.
    """

    def transform(self, lines: List[str]) -> List[str]:
        if not lines:
            return lines
        first = lines[0]
        pad = leading_whitespace(first) if first.strip() else 0
        return [line[min(pad, leading_whitespace(line)):] for line in lines]

    def __call__(self, lines: List[str]) -> List[str]:
        return self.transform(lines)
