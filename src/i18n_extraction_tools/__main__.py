from importlib import metadata
import json
import logging
import sys
from os import environ
from pathlib import Path

import humps
from argparse_prompt import PromptParser
from pydantic import ValidationError

from i18n_extraction_tools.custom_exceptions import ConfigurationError
from i18n_extraction_tools.extraction_configuration import resolve_configuration
from i18n_extraction_tools.extraction_task import ExtractionTask
from i18n_extraction_tools.i18n_config import setup_i18n
from i18n_extraction_tools.logging_config import setup_logging
from i18n_extraction_tools.translation import LibreTranslateTranslator

# Command line options that override the configuration file when given
CONFIGURATION_OPTIONS = (
    "root_dir",
    "files",
    "regulars",
    "out_dir",
    "languages",
    "base_language",
    "translate",
    "force_translate",
    "translate_languages",
    "modules",
    "copy_index",
    "force_copy_index",
    "translator_url",
    "translator_api_key",
    "report_file",
)


def comma_separated_list(value, split=","):
    return [item for item in value.split(split) if item]


def parse_args(args):
    parser = PromptParser(
        description="Extracts translation keys from a source tree into per module JSON tables"
    )
    parser.add_argument(
        "--cwd",
        help="Working directory. Relative paths resolve against it",
        default=environ.get("I18N_EXTRACT_CWD", "."),
        prompt=False,
    )
    parser.add_argument(
        "--root-dir",
        help="Root directory of the source tree to extract keys from",
        prompt=False,
    )
    parser.add_argument(
        "--files",
        help="Comma separated glob rules of the files to scan in each module",
        type=comma_separated_list,
        prompt=False,
    )
    parser.add_argument(
        "--regulars",
        help=(
            "Comma separated regular expressions finding the keys. "
            "The first capturing group is the key"
        ),
        type=comma_separated_list,
        prompt=False,
    )
    parser.add_argument(
        "--out-dir",
        help="Output directory of the tables, relative to each module",
        prompt=False,
    )
    parser.add_argument(
        "--languages",
        help="Comma separated languages to generate tables for",
        type=comma_separated_list,
        prompt=False,
    )
    parser.add_argument(
        "--base-language",
        help="Language that is written by hand and translated from",
        prompt=False,
    )
    parser.add_argument(
        "--config",
        help="Path to the configuration file",
        default=environ.get("I18N_EXTRACT_CONFIGURATION_PATH"),
        prompt=False,
    )
    parser.add_argument(
        "--no-config",
        help="Ignore configuration files",
        action="store_true",
        prompt=False,
    )
    parser.add_argument(
        "-t",
        "--translate",
        help="Machine translate the newly added keys",
        action="store_true",
        default=None,
        prompt=False,
    )
    parser.add_argument(
        "-F",
        "--force-translate",
        help="Machine translate all keys",
        action="store_true",
        default=None,
        prompt=False,
    )
    parser.add_argument(
        "-L",
        "--translate-language",
        dest="translate_languages",
        help="Comma separated languages to translate. Defaults to all",
        type=comma_separated_list,
        prompt=False,
    )
    parser.add_argument(
        "-m",
        "--module",
        dest="modules",
        help="Comma separated module directory names. Only these modules are extracted",
        type=comma_separated_list,
        prompt=False,
    )
    parser.add_argument(
        "--copy-index",
        help="Copy index.js into the output directory of modules where it is missing",
        action="store_true",
        default=None,
        prompt=False,
    )
    parser.add_argument(
        "--force-copy-index",
        help="Always copy the latest index.js",
        action="store_true",
        default=None,
        prompt=False,
    )
    parser.add_argument(
        "--translator-url",
        help="LibreTranslate compatible /translate endpoint",
        default=environ.get("I18N_EXTRACT_TRANSLATOR_URL"),
        prompt=False,
    )
    parser.add_argument(
        "--translator-api-key",
        help="API key for the translator",
        default=environ.get("I18N_EXTRACT_TRANSLATOR_API_KEY"),
        prompt=False,
    )
    parser.add_argument(
        "--report-file",
        help="Write a Markdown report of the run to this file",
        prompt=False,
    )
    parser.add_argument(
        "--log-file",
        help="Write the log to this file",
        prompt=False,
    )
    parser.add_argument(
        "--data-issues-file",
        help="Write failed translations and pruned keys to this file",
        prompt=False,
    )
    parser.add_argument(
        "--debug",
        help="Debug logging",
        action="store_true",
        prompt=False,
    )
    parser.add_argument(
        "--version",
        "-V",
        help="Show the version of the i18n extraction tools",
        action="store_true",
        prompt=False,
    )
    return parser.parse_args(args)


def print_version(args):
    if "-V" in args or "--version" in args:
        print(f"i18n extraction tools: {metadata.version('i18n_extraction_tools')}")
        sys.exit(0)
    return None


def main():
    try:
        print_version(sys.argv)
        args = parse_args(sys.argv[1:])
        setup_logging(
            debug=args.debug,
            log_file=Path(args.log_file) if args.log_file else None,
            data_issues_file=Path(args.data_issues_file) if args.data_issues_file else None,
        )
        setup_i18n()
        configuration = resolve_configuration(
            {option: getattr(args, option) for option in CONFIGURATION_OPTIONS},
            config_path=args.config,
            no_config=args.no_config,
            cwd=args.cwd,
        )
        translator = None
        if configuration.translate:
            translator = LibreTranslateTranslator(
                configuration.translator_url,
                configuration.translator_api_key,
                configuration.translator_timeout,
                configuration.translator_language_map,
            )
        try:
            task = ExtractionTask(configuration, translator)
            task.do_work()
            task.wrap_up()
        finally:
            if translator:
                translator.close()
        logging.info("Work done. Shutting down")
    except ConfigurationError as configuration_error:
        logging.critical(configuration_error.message)
        print(f"\n{configuration_error.message}: {configuration_error.data_value}")
        print("Halting.")
        sys.exit("Configuration Error")
    except ValidationError as e:
        print("Validation errors in configuration:")
        print("==========================================")
        for validation_message in json.loads(e.json()):
            print(
                f"{validation_message['msg']}\t"
                f"{', '.join(humps.camelize(str(x)) for x in validation_message['loc'])}"
            )
        print("Halting")
        sys.exit("Configuration Not Matching Spec")
    except Exception as ee:
        logging.exception("Unhandled exception")
        print(f"\n{ee}")
        sys.exit(ee.__class__.__name__)
    sys.exit(0)


if __name__ == "__main__":
    main()
