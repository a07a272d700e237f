"""
strip_field_prefix_transform.py
Removes the "Required. " and "Optional. " markers that API comments often start a line with.
"""
from typing import List

PREFIXES = ("Required. ", "Optional. ")


class StripFieldPrefixTransform:
    def transform(self, lines: List[str]) -> List[str]:
        result = []
        for line in lines:
            for prefix in PREFIXES:
                if line.startswith(prefix):
                    line = line[len(prefix):]
            result.append(line)
        return result

    def __call__(self, lines: List[str]) -> List[str]:
        return self.transform(lines)
