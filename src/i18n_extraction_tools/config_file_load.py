import json
import logging
from pathlib import Path
from typing import Optional

from i18n_extraction_tools.custom_exceptions import ConfigurationError

CONFIG_FILE_NAME = "i18n-extract.config.json"


def deep_merge(target_dict, source_dict):
    # deep_merge
    #
    # Merges source_dict on top of target_dict. Nested dictionaries are merged
    # key by key, lists are concatenated without duplicates (so chained config
    # files can add file globs, languages and keep rules).
    # **Mutates the target_dict with the changes**, and returns it.
    #
    # Deletes any keys with value None in the source.

    for k in source_dict:
        if isinstance(target_dict.get(k, None), dict) and isinstance(source_dict[k], dict):
            target_dict[k] = deep_merge(target_dict[k], source_dict[k])
        elif isinstance(target_dict.get(k, None), list) and isinstance(source_dict[k], list):
            for merging_list_item in source_dict[k]:
                if merging_list_item not in target_dict[k]:
                    target_dict[k].append(merging_list_item)
        elif source_dict[k] is None:
            target_dict.pop(k, None)
        else:
            target_dict[k] = source_dict[k]
    return target_dict


def merge_load(config_path_str, parsed_config=None):
    # Recursively load JSON files from a configuration file
    #
    # If a configuration file has a "source" key, either a string or list,
    # the file(s) will be loaded in the order presented, relative to the
    # including file, and the config file will be merged on top.
    #
    # To delete a key, set it to `null` in the json source file.

    parsed_config = parsed_config or {}
    config_path = Path(config_path_str)
    with open(config_path, encoding="utf-8") as config_file:
        single_config = json.load(config_file)
    if not isinstance(single_config, dict):
        raise ConfigurationError("Configuration file must hold a JSON object", str(config_path))
    sources = single_config.pop("source", [])
    if isinstance(sources, str):
        sources = [sources]
    for source in sources:
        parsed_config = merge_load(config_path.parent / source, parsed_config)
    return deep_merge(parsed_config, single_config)


def find_config_upwards(start_dir) -> Optional[Path]:
    """Walks from start_dir towards the file system root looking for the config file.

    Args:
        start_dir: Directory to start the search in

    Returns:
        Optional[Path]: Path to the first config file found, or None
    """
    dirname = Path(start_dir).resolve()
    for candidate_dir in [dirname, *dirname.parents]:
        candidate = candidate_dir / CONFIG_FILE_NAME
        if candidate.is_file():
            logging.debug("Found config %s in %s", CONFIG_FILE_NAME, candidate_dir)
            return candidate
    return None
