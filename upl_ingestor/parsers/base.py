import re
from typing import Optional, Tuple

# Frames of the .upl result stream. Loose on purpose: the instruments emit
# ragged segments, so nothing here is anchored.
REQUEST_ID = r"P\|1\|\|(.*?)\|"
SEND_TIME = r"H\|.*\|\|(\d{14})"
RESULT_TIME = r"O\|1\|\|.*?\|.*?\|.*?\|(\d{14})"
AB_SCREENING_TEST = r"Result\^(\w+)\^Ab\.screening"
AB_SCREENING_RESULT = r"Result\^CN15B\^.*?\|\^\^(.+?)\^"
BLOODGROUP_TEST = r"Result\^(\w+)\^Bloodgr"
BLOODGROUP_RESULT = r"Result\^MO31X\^.*?\|(.*?)\^(.+?)\^"


def _search(text: str, pattern: str) -> Optional[re.Match]:
    return re.search(pattern, text or "", re.DOTALL)


def extract(text: str, pattern: str) -> str:
    """First capture group of the first match, or "" when absent."""
    m = _search(text, pattern)
    if not m or m.re.groups < 1:
        return ""
    return m.group(1) or ""


def extract_groups(text: str, pattern: str) -> Optional[Tuple[str, ...]]:
    m = _search(text, pattern)
    if not m:
        return None
    return tuple(g or "" for g in m.groups())
