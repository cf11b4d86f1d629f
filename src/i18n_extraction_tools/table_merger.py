"""Reconciling the keys found in a module with its existing translation tables.

The merge is the only place where keys leave a table. A key survives if it is
still found in the source or if it matches a keep key rule; every other key is
pruned, together with its translation. There is no undo.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Union

from i18n_extraction_tools.logging_config import get_logger

logger = get_logger(__name__)

KeepKeyRule = Union[str, re.Pattern, Callable[[str], bool]]


@dataclass
class MergeResult:
    table: dict[str, str]
    added: list[str] = field(default_factory=list)
    pruned: list[str] = field(default_factory=list)
    retained: list[str] = field(default_factory=list)
    to_translate: list[str] = field(default_factory=list)


def matches_keep_rule(key: str, keep_key_rules: Iterable[KeepKeyRule]) -> bool:
    for rule in keep_key_rules:
        if isinstance(rule, str):
            if key == rule:
                return True
        elif isinstance(rule, re.Pattern):
            if rule.search(key):
                return True
        elif rule(key):
            return True
    return False


def filter_by_keep_rules(
    table: dict[str, Any], keep_key_rules: Iterable[KeepKeyRule]
) -> dict[str, Any]:
    keep_key_rules = list(keep_key_rules)
    return {k: v for k, v in table.items() if matches_keep_rule(k, keep_key_rules)}


def should_translate(
    language: str,
    base_language: str,
    translate: bool,
    translate_languages: Iterable[str] = (),
) -> bool:
    """Tells if a table in this language is to be machine translated.

    The base language is never translated. An empty language subset means
    every other language is translated.
    """
    if language == base_language or not translate:
        return False
    translate_languages = list(translate_languages)
    return not translate_languages or language in translate_languages


def merge_table(
    observed_keys: Iterable[str],
    old_table: Optional[dict[str, str]],
    keep_key_rules: Iterable[KeepKeyRule],
    language: str,
    base_language: str,
    translate: bool = False,
    force_translate: bool = False,
    translate_languages: Iterable[str] = (),
) -> MergeResult:
    """Builds the new translation table for one module and language.

    Args:
        observed_keys (Iterable[str]): Keys found in the module source
        old_table (Optional[dict[str, str]]): The persisted table, None if there is none
        keep_key_rules (Iterable[KeepKeyRule]): Rules protecting keys from pruning
        language (str): Language of the table
        base_language (str): Language that is never machine translated
        translate (bool): Translate newly added keys
        force_translate (bool): Translate every key in the new table
        translate_languages (Iterable[str]): Only translate these languages. Empty means all

    Returns:
        MergeResult: The new table, sorted by key, and the keys added, pruned,
        retained and to be translated
    """
    old_table = old_table or {}
    observed_keys = sorted(set(observed_keys))
    new_table = filter_by_keep_rules(old_table, keep_key_rules)
    observed = set(observed_keys)
    retained = sorted(k for k in new_table if k not in observed)

    added = []
    for key in observed_keys:
        if key in old_table:
            new_table[key] = old_table[key]
        else:
            new_table[key] = key
            added.append(key)

    pruned = [k for k in old_table if k not in new_table]
    for key in pruned:
        logger.data_issues("KEY PRUNED\t%s\t%s", language, key)

    new_table = {k: new_table[k] for k in sorted(new_table)}
    result = MergeResult(new_table, added=added, pruned=pruned, retained=retained)
    if should_translate(language, base_language, translate, translate_languages):
        result.to_translate = list(new_table) if force_translate else list(added)
    return result
