import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

if TYPE_CHECKING:
    from i18n_extraction_tools.extraction_report import ExtractionReport


def is_hidden(path: Path, base_dir: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(base_dir).parts)


def glob_files(base_dir: Path, rules: Iterable[str]) -> list[Path]:
    """Files under base_dir matching any of the glob rules, once each, sorted. No dotfiles."""
    found = set()
    for rule in rules:
        found.update(
            path
            for path in base_dir.glob(rule)
            if path.is_file() and not is_hidden(path, base_dir)
        )
    return sorted(found)


def find_module_paths(
    root_dir: Path, module_index_rules: Iterable[str], module_names: Iterable[str] = ()
) -> list[Path]:
    """Every directory holding a file that matches a module index rule is a module.

    Args:
        root_dir (Path): Root of the source tree
        module_index_rules (Iterable[str]): Glob rules relative to root_dir
        module_names (Iterable[str]): Only keep modules with one of these directory names

    Returns:
        list[Path]: Absolute module paths, sorted
    """
    root_dir = Path(root_dir).resolve()
    module_names = set(module_names)
    module_paths = {index_file.parent for index_file in glob_files(root_dir, module_index_rules)}
    if module_names:
        module_paths = {p for p in module_paths if p.name in module_names}
    return sorted(module_paths)


def iter_module_sources(
    module_path: Path,
    file_rules: Iterable[str],
    report: Optional["ExtractionReport"] = None,
) -> Iterator[tuple[Path, str]]:
    """Yields (module_path, content) for each readable file of the module.

    Files that can not be read or decoded are skipped with a warning.
    """
    for file_path in glob_files(module_path, file_rules):
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as read_error:
            logging.warning("Skipping %s: %s", file_path, read_error)
            if report:
                report.add_general_statistics("Files skipped")
            continue
        if report:
            report.add_general_statistics("Files scanned")
        yield module_path, content


def iter_sources(
    root_dir: Path,
    module_index_rules: Iterable[str],
    file_rules: Iterable[str],
    module_names: Iterable[str] = (),
    report: Optional["ExtractionReport"] = None,
) -> Iterator[tuple[Path, str]]:
    file_rules = list(file_rules)
    module_paths = find_module_paths(root_dir, module_index_rules, module_names)
    logging.info("%s modules found under %s", len(module_paths), root_dir)
    if report:
        report.add_general_statistics("Modules found", len(module_paths))
    for module_path in module_paths:
        logging.info("Scanning module %s", module_path)
        yield from iter_module_sources(module_path, file_rules, report)
