import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from i18n_extraction_tools.custom_exceptions import PersistenceError
from i18n_extraction_tools.extraction_configuration import ExtractionConfiguration
from i18n_extraction_tools.extraction_report import ExtractionReport
from i18n_extraction_tools.key_extractor import collect_module_keys
from i18n_extraction_tools.source_files import iter_sources
from i18n_extraction_tools.table_merger import merge_table
from i18n_extraction_tools.table_store import TableStore
from i18n_extraction_tools.translation import Translator, backfill


class ExtractionTask:
    """Extracts the keys of a source tree and updates the tables of every module.

    Modules are processed one at a time, and the languages of a module one at
    a time, so a table is only ever touched by one step of the run.
    """

    def __init__(
        self,
        configuration: ExtractionConfiguration,
        translator: Optional[Translator] = None,
        store: Optional[TableStore] = None,
    ):
        logging.info("ExtractionTask init")
        self.start_datetime = datetime.now(timezone.utc)
        self.configuration = configuration
        self.translator = translator
        self.store = store or TableStore(
            configuration.out_dir,
            copy_index=configuration.copy_index,
            force_copy_index=configuration.force_copy_index,
        )
        self.report = ExtractionReport()
        self.written_tables: list[Path] = []
        self.failed_tables: list[Path] = []
        if configuration.translate and not translator:
            logging.warning("Translation is on but no translator is set up. Not translating")
        logging.info("Root directory is %s", configuration.absolute_root_dir)
        logging.info(
            "Languages: %s (base %s)",
            ", ".join(configuration.languages),
            configuration.base_language,
        )

    def do_work(self):
        logging.info("Starting....")
        module_keys = collect_module_keys(
            iter_sources(
                self.configuration.absolute_root_dir,
                self.configuration.module_index_rules,
                self.configuration.files,
                self.configuration.modules,
                self.report,
            ),
            self.configuration.regulars,
        )
        for module_path, observed_keys in module_keys.items():
            self.process_module(module_path, observed_keys)
        logging.info("Done extracting %s modules", len(module_keys))

    def process_module(self, module_path: Path, observed_keys: list[str]):
        if self.store.copy_index_enabled or self.store.force_copy_index:
            try:
                self.store.copy_index(module_path)
            except PersistenceError as persistence_error:
                logging.error(persistence_error)
        for language in self.configuration.languages:
            self.process_table(module_path, language, observed_keys)

    def process_table(self, module_path: Path, language: str, observed_keys: list[str]):
        section = f"{self.section_name(module_path)}/{language}"
        table_path = self.store.table_path(module_path, language)
        try:
            old_table = self.store.read_table(module_path, language)
        except PersistenceError as persistence_error:
            logging.error("Extraction failed for %s: %s", table_path, persistence_error.message)
            self.report.add_general_statistics("Tables failed")
            self.failed_tables.append(table_path)
            return
        result = merge_table(
            observed_keys,
            old_table,
            self.configuration.keep_key_rules,
            language,
            self.configuration.base_language,
            translate=self.configuration.translate and self.translator is not None,
            force_translate=self.configuration.force_translate,
            translate_languages=self.configuration.translate_languages,
        )
        self.report.set(section, "Keys observed", len(observed_keys))
        self.report.set(section, "Keys added", len(result.added))
        self.report.set(section, "Keys pruned", len(result.pruned))
        self.report.set(section, "Keys retained", len(result.retained))
        if result.to_translate:
            logging.info(
                "Translating %s keys from %s to %s",
                len(result.to_translate),
                self.configuration.base_language,
                language,
            )
            result.table.update(
                backfill(
                    self.translator,
                    self.configuration.base_language,
                    language,
                    result.to_translate,
                    self.report,
                    section,
                )
            )
        try:
            self.store.write_table(module_path, language, result.table)
        except PersistenceError as persistence_error:
            logging.error("Extraction failed for %s: %s", table_path, persistence_error.message)
            self.report.add_general_statistics("Tables failed")
            self.failed_tables.append(table_path)
            return
        logging.info("Extraction done for %s", table_path)
        self.report.add_general_statistics("Tables written")
        self.written_tables.append(table_path)

    def section_name(self, module_path: Path) -> str:
        try:
            return str(module_path.relative_to(self.configuration.absolute_root_dir)) or "."
        except ValueError:
            return str(module_path)

    def wrap_up(self):
        logging.info("Done. Wrapping up")
        self.report.log_me()
        if self.configuration.report_file:
            report_path = self.configuration.cwd / self.configuration.report_file
            report_path.parent.mkdir(parents=True, exist_ok=True)
            with open(report_path, "w", encoding="utf-8") as report_file:
                self.report.write_report(
                    "i18n extraction report", report_file, self.start_datetime
                )
            logging.info("Report written to %s", report_path)
        if self.failed_tables:
            logging.warning("%s tables could not be updated", len(self.failed_tables))
