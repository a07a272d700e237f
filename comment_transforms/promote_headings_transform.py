"""
promote_headings_transform.py
Pushes Markdown headings in a comment below the heading of the entity that owns the comment.
"""
from typing import List


class PromoteHeadingsTransform:
    def __init__(self, grouping: bool):
        # one more level when the document has Services and Types sections
        self.prefix = "###" if grouping else "##"

    def transform(self, lines: List[str]) -> List[str]:
        return [self.prefix + line if line.startswith("#") else line for line in lines]

    def __call__(self, lines: List[str]) -> List[str]:
        return self.transform(lines)
