"""Finding translation keys in source text and grouping them per module."""

import logging
import re
from pathlib import Path
from typing import Iterable, Union

KeyPattern = Union[str, re.Pattern]


def extract_keys(content: str, key_patterns: Iterable[KeyPattern]) -> list[str]:
    """Returns the first capturing group of every match, in order of appearance.

    Patterns are applied one after the other. Duplicates are kept.
    Every call matches with a fresh iterator, no position is carried over
    from earlier files.

    Args:
        content (str): The text of one source file
        key_patterns (Iterable[KeyPattern]): Patterns with exactly one capturing group

    Returns:
        list[str]: The keys found
    """
    keys = []
    for key_pattern in key_patterns:
        keys.extend(match.group(1) for match in re.finditer(key_pattern, content))
    return keys


def normalize_keys(raw_keys: Iterable[str]) -> list[str]:
    # Deduplicated and in code point order, for stable diffs
    return sorted(set(raw_keys))


def collect_module_keys(
    sources: Iterable[tuple[Path, str]], key_patterns: Iterable[KeyPattern]
) -> dict[Path, list[str]]:
    """Scans (module_path, file_content) pairs and returns the normalized keys per module.

    Args:
        sources (Iterable[tuple[Path, str]]): One pair per source file
        key_patterns (Iterable[KeyPattern]): Patterns with exactly one capturing group

    Returns:
        dict[Path, list[str]]: Sorted, unique keys for every module that had files
    """
    key_patterns = list(key_patterns)
    raw_keys: dict[Path, list[str]] = {}
    for module_path, content in sources:
        found = extract_keys(content, key_patterns)
        logging.debug("%s keys found in a file of %s", len(found), module_path)
        raw_keys.setdefault(module_path, []).extend(found)
    return {module_path: normalize_keys(keys) for module_path, keys in raw_keys.items()}
