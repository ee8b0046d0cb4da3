"""
Pinyin transliteration for search.

Lets a latin query such as "yunfuwu" or "yfw" find the name "云服务器".
Characters pypinyin does not recognise are kept as they are.
"""

from typing import List

from pypinyin import Style, lazy_pinyin


def _units(text: str, style: Style = Style.NORMAL) -> List[str]:
    return lazy_pinyin(text, style=style)


def transliterate(text: str) -> str:
    """
    Continuous pinyin reading of the text, lowercase, without separators.

    Examples:
    - "云服务器" -> "yunfuwuqi"
    - "阿里云ECS" -> "aliyunecs"
    """
    if not text:
        return ""
    return "".join(_units(text)).lower()


def initials(text: str) -> str:
    """
    First letter of each pinyin syllable, lowercase.

    Runs of unrecognised characters are kept whole, so "云服务器abc"
    becomes "yfwqabc".
    """
    if not text:
        return ""
    return "".join(_units(text, Style.FIRST_LETTER)).lower()


def phonetic_contains(candidate: str, query: str) -> bool:
    """True if the query appears in the candidate's pinyin or its initials."""
    if not query:
        return True
    needle = query.lower()
    return needle in transliterate(candidate) or needle in initials(candidate)
