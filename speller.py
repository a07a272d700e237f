"""
speller.py
Word-list spelling dictionary used to check documentation comments.
Accepts plain word lists, one word per line.
"""
import re
from typing import Iterable, List, Optional

WORD_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9'_]*")


class SpellerError(Exception):
    pass


class WordListSpeller:
    def __init__(self, words: Optional[Iterable[str]] = None):
        self.words = set()
        if words:
            self.add_words(words)

    def add_words(self, words: Iterable[str]):
        for word in words:
            word = word.strip()
            if word:
                self.words.add(word)
                self.words.add(word.lower())

    def split(self, line: str) -> List[str]:
        """Words of a line; trailing possessives and quotes are dropped."""
        result = []
        for word in WORD_PATTERN.findall(line):
            word = word.strip("'_")
            if word.endswith("'s"):
                word = word[:-2]
            if word:
                result.append(word)
        return result

    def spell(self, word: str) -> bool:
        if any(ch.isdigit() for ch in word):
            return True
        if word.isupper():
            return True
        if word in self.words or word.lower() in self.words:
            return True
        # identifiers such as camelCase or snake_case are not prose
        if "_" in word or re.search(r'[a-z][A-Z]', word):
            return True
        return False


def read_word_list(path: str) -> List[str]:
    """
    Words of a plain word list, one per line; blank lines and '#' lines are skipped. Inflected forms
    must be listed themselves. Hunspell .dic files need their affix rules and are rejected.
    """
    words = []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for i, line in enumerate(f):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if (i == 0 and line.isdigit()) or "/" in line:
                    raise SpellerError(f"{path}:{i + 1}: hunspell dictionaries are not supported, "
                                       f"use a plain word list")
                words.append(line)
    except (OSError, UnicodeDecodeError) as e:
        raise SpellerError(f"{path}: cannot read word list: {e}")
    return words


def load_speller(dictionary: str = "", custom_word_list: str = "") -> Optional[WordListSpeller]:
    """A speller built from the given files, or None when no dictionary is configured."""
    if not dictionary:
        return None
    speller = WordListSpeller(read_word_list(dictionary))
    if custom_word_list:
        speller.add_words(read_word_list(custom_word_list))
    return speller
