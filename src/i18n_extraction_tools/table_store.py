import json
import logging
import shutil
from pathlib import Path

from i18n_extraction_tools.custom_exceptions import PersistenceError

INDEX_TEMPLATE_PATH = Path(__file__).parent / "res" / "index.js"


class TableStore:
    """Reads and writes the <out_dir>/<language>.json table of each module"""

    def __init__(
        self,
        out_dir: str = "lang",
        copy_index: bool = False,
        force_copy_index: bool = False,
    ):
        self.out_dir = out_dir
        self.copy_index_enabled = copy_index
        self.force_copy_index = force_copy_index

    def table_dir(self, module_path) -> Path:
        return Path(module_path) / self.out_dir

    def table_path(self, module_path, language: str) -> Path:
        return self.table_dir(module_path) / f"{language}.json"

    def read_table(self, module_path, language: str) -> dict[str, str]:
        """Loads a persisted table. A table that does not exist yet is empty.

        Raises:
            PersistenceError: If the file can not be read or is not a JSON object
        """
        table_path = self.table_path(module_path, language)
        if not table_path.is_file():
            return {}
        try:
            with open(table_path, encoding="utf-8") as table_file:
                table = json.load(table_file)
        except (OSError, json.JSONDecodeError) as read_error:
            raise PersistenceError(table_path, str(read_error)) from read_error
        if not isinstance(table, dict):
            raise PersistenceError(table_path, "Translation table is not a JSON object")
        return table

    def write_table(self, module_path, language: str, table: dict[str, str]) -> Path:
        """Writes a table with two space indentation and a trailing newline.

        Keys are written in the order of the mapping.

        Raises:
            PersistenceError: If the directory or the file can not be written
        """
        table_path = self.table_path(module_path, language)
        try:
            table_path.parent.mkdir(parents=True, exist_ok=True)
            with open(table_path, "w", encoding="utf-8", newline="\n") as table_file:
                json.dump(table, table_file, indent=2, ensure_ascii=False)
                table_file.write("\n")
        except OSError as write_error:
            raise PersistenceError(table_path, str(write_error)) from write_error
        return table_path

    def copy_index(self, module_path) -> bool:
        """Copies the bundled index.js loader next to the tables.

        Only copies when it is missing, unless forced. Returns True if copied.
        """
        index_path = self.table_dir(module_path) / "index.js"
        if not (self.force_copy_index or (self.copy_index_enabled and not index_path.exists())):
            return False
        try:
            index_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(INDEX_TEMPLATE_PATH, index_path)
        except OSError as copy_error:
            raise PersistenceError(index_path, str(copy_error)) from copy_error
        logging.info("Copied index loader to %s", index_path)
        return True
