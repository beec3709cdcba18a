"""Parsing of pipe-delimited choice lists.

Choice lists look like ``"1, Male | 2, Female | 3, Other"``. Each pair is
split on its first comma, so labels may contain commas.
"""

import re

CHOICE_SEPARATOR = re.compile(r"\s*\|\s*")


def parse_choices(raw: str | None, malformed: list[str] | None = None) -> dict[str, str]:
    """Parse a choice list into an ordered ``key -> label`` mapping.

    Parsing is lenient: a pair without a comma or with an empty key is
    skipped rather than failing the whole list.

    Args:
        raw: The raw ``select_choices_or_calculations`` value.
        malformed: Optional list that receives every skipped pair.

    Returns:
        Ordered mapping of choice key to label. Empty if ``raw`` is empty.
    """
    choices: dict[str, str] = {}
    if not raw or not raw.strip():
        return choices

    for pair in CHOICE_SEPARATOR.split(raw.strip()):
        if not pair:
            continue
        key, comma, label = pair.partition(",")
        key = key.strip()
        if not comma or not key:
            if malformed is not None:
                malformed.append(pair)
            continue
        choices[key] = label.strip()

    return choices
