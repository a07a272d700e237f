"""
elide_html_comments_transform.py
Drops <!-- ... --> spans from a comment, including spans that cover several lines.
"""
from typing import List

COMMENT_START = "<!--"
COMMENT_END = "-->"


class ElideHtmlCommentsTransform:
    """
    Lines inside a multi-line span become empty rather than disappearing, so line positions used for
    warnings stay valid. After each removal the line is scanned again from the start.
    """

    def transform(self, lines: List[str]) -> List[str]:
        result = []
        in_comment = False
        for line in lines:
            while True:
                if in_comment:
                    end = line.find(COMMENT_END)
                    if end < 0:
                        line = ""
                        break
                    line = line[end + len(COMMENT_END):]
                    in_comment = False
                    continue
                start = line.find(COMMENT_START)
                if start < 0:
                    break
                end = line.find(COMMENT_END, start + len(COMMENT_START))
                if end >= 0:
                    line = line[:start] + line[end + len(COMMENT_END):]
                    continue
                line = line[:start]
                in_comment = True
                break
            result.append(line)
        return result

    def __call__(self, lines: List[str]) -> List[str]:
        return self.transform(lines)
