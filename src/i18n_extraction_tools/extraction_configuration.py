import json
import re
from pathlib import Path
from re import Pattern
from typing import Annotated, Any, Optional

import humps
from humps import camelize
from pydantic import BaseModel, ConfigDict, Field, field_validator

from i18n_extraction_tools.config_file_load import deep_merge, find_config_upwards, merge_load
from i18n_extraction_tools.custom_exceptions import ConfigurationError

DEFAULT_KEY_PATTERN = r"(?:\$)?t\(['\"](.+?)['\"]"
DEFAULT_KEEP_KEY_RULE = re.compile(r"^G/+")


def to_camel(string):
    return camelize(string)


def parse_keep_key_rule(rule: Any):
    """Turns a keep key rule from a config file into a matcher.

    Strings written as /pattern/ become regular expressions, other strings
    are exact keys. Compiled patterns and callables are used as they are.
    """
    if isinstance(rule, str):
        if len(rule) > 1 and rule.startswith("/") and rule.endswith("/"):
            return re.compile(rule[1:-1])
        return rule
    if isinstance(rule, Pattern) or callable(rule):
        return rule
    raise ValueError(f"Keep key rule {rule!r} must be a string, a pattern or a callable")


class ExtractionConfiguration(BaseModel):
    cwd: Annotated[
        Path,
        Field(
            title="Working directory",
            description="Directory that relative paths (root dir, report file) resolve against",
        ),
    ] = Path(".")
    root_dir: Annotated[
        str,
        Field(
            title="Root directory",
            description="Root of the source tree to scan, relative to the working directory",
        ),
    ] = "src"
    module_index_rules: Annotated[
        list[str],
        Field(
            title="Module index rules",
            description=(
                "Glob rules, relative to the root directory, matching the index file of a "
                "module. The directory holding a matching file is a module"
            ),
        ),
    ] = ["main.js"]
    files: Annotated[
        list[str],
        Field(
            title="File rules",
            description="Glob rules, relative to each module, of the files to scan for keys",
        ),
    ] = ["**/*.vue", "**/*.js"]
    regulars: Annotated[
        list[Pattern],
        Field(
            title="Key patterns",
            description=(
                "Regular expressions finding translation keys. "
                "The first capturing group of each match is the key"
            ),
        ),
    ] = [re.compile(DEFAULT_KEY_PATTERN)]
    out_dir: Annotated[
        str,
        Field(
            title="Output directory",
            description="Directory, relative to each module, holding the <language>.json tables",
        ),
    ] = "lang"
    languages: Annotated[
        list[str],
        Field(title="Languages", description="Languages to generate a translation table for"),
    ] = ["zh", "en"]
    base_language: Annotated[
        str,
        Field(
            title="Base language",
            description=(
                "Language whose values are written by hand and used as the source "
                "when translating. Never machine translated"
            ),
        ),
    ] = "zh"
    keep_key_rules: Annotated[
        list[Any],
        Field(
            title="Keep key rules",
            description=(
                "Keys matching any of these rules are kept in the tables even when no longer "
                "found in the source. Exact keys, /regular expressions/ or callables"
            ),
        ),
    ] = [DEFAULT_KEEP_KEY_RULE]
    translate: Annotated[
        bool,
        Field(title="Translate", description="Machine translate newly added keys"),
    ] = False
    force_translate: Annotated[
        bool,
        Field(
            title="Force translate",
            description="Machine translate every key, not only the newly added ones",
        ),
    ] = False
    translate_languages: Annotated[
        list[str],
        Field(
            title="Languages to translate",
            description="Limit machine translation to these languages. Empty means all",
        ),
    ] = []
    modules: Annotated[
        list[str],
        Field(
            title="Modules",
            description="Only process modules whose directory has one of these names",
        ),
    ] = []
    copy_index: Annotated[
        bool,
        Field(
            title="Copy index",
            description="Copy the index.js loader into the output directory if it is missing",
        ),
    ] = False
    force_copy_index: Annotated[
        bool,
        Field(title="Force copy index", description="Always overwrite the index.js loader"),
    ] = False
    translator_url: Annotated[
        str,
        Field(
            title="Translator URL",
            description="URL of a LibreTranslate compatible /translate endpoint",
        ),
    ] = "http://localhost:5000/translate"
    translator_api_key: Annotated[str, Field(title="Translator API key")] = ""
    translator_timeout: Annotated[
        float, Field(title="Translator timeout", description="Seconds per translation request")
    ] = 30.0
    translator_language_map: Annotated[
        dict[str, str],
        Field(
            title="Translator language map",
            description="Language codes to send to the translator instead of the table codes",
        ),
    ] = {}
    report_file: Annotated[
        Optional[Path],
        Field(title="Report file", description="Write a Markdown run report to this file"),
    ] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    @field_validator("regulars")
    @classmethod
    def check_single_capturing_group(cls, regulars: list[Pattern]) -> list[Pattern]:
        for regular in regulars:
            if regular.groups != 1:
                raise ValueError(
                    f"Key pattern {regular.pattern!r} must have exactly one capturing group, "
                    f"it has {regular.groups}"
                )
        return regulars

    @field_validator("keep_key_rules", mode="before")
    @classmethod
    def parse_keep_key_rules(cls, rules: Any) -> list:
        if not isinstance(rules, (list, tuple)):
            raise ValueError("Keep key rules must be a list")
        return [parse_keep_key_rule(rule) for rule in rules]

    @property
    def absolute_root_dir(self) -> Path:
        return (self.cwd / self.root_dir).resolve()


def resolve_configuration(
    cli_options: dict,
    config_path=None,
    no_config: bool = False,
    cwd=".",
) -> ExtractionConfiguration:
    """Builds the configuration from defaults, the config file and command line flags.

    Precedence is defaults < config file < command line flags. Flags that are
    None were not given and do not override anything.

    Args:
        cli_options (dict): Snake cased options from the command line
        config_path (optional): Explicit config file. Looked up from cwd upwards if not given
        no_config (bool): Ignore config files altogether
        cwd (optional): Working directory of the run

    Raises:
        ConfigurationError: If the config file is missing, not valid JSON or not an object
        ValidationError: If a value does not fit the configuration model

    Returns:
        ExtractionConfiguration: The resolved, immutable configuration
    """
    layered: dict = {"cwd": Path(cwd)}
    if not no_config:
        if config_path:
            file_path = Path(config_path)
            if not file_path.is_file():
                raise ConfigurationError("Configuration file not found", str(file_path))
        else:
            file_path = find_config_upwards(cwd)
        if file_path:
            try:
                file_config = merge_load(file_path)
            except json.JSONDecodeError as json_error:
                raise ConfigurationError(
                    f"Invalid JSON in configuration file: {json_error}", str(file_path)
                ) from json_error
            except FileNotFoundError as fnf_error:
                raise ConfigurationError(
                    "Configuration file source not found", str(fnf_error.filename)
                ) from fnf_error
            deep_merge(layered, {humps.decamelize(k): v for k, v in file_config.items()})
    layered.update({k: v for k, v in cli_options.items() if v is not None})
    return ExtractionConfiguration(**layered)
