from pathlib import Path

from i18n_extraction_tools.extraction_report import ExtractionReport
from i18n_extraction_tools.source_files import (
    find_module_paths,
    glob_files,
    iter_module_sources,
    iter_sources,
)


def make_tree(root: Path):
    files = {
        "main.js": "$t('root')",
        "settings/main.js": "$t('settings.title')",
        "settings/views/Page.vue": "<p>{{ $t('settings.page') }}</p>",
        "settings/.cache/Hidden.vue": "$t('hidden')",
        "settings/README.md": "$t('docs')",
        "users/main.js": "$t('users.title')",
        "users/lang/en.json": "{}",
        "shared/util.js": "$t('no.module')",
    }
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def test_glob_files_skips_hidden_and_dedupes(tmp_path):
    make_tree(tmp_path)
    found = glob_files(tmp_path / "settings", ["**/*.vue", "**/*.vue", "**/*.js"])
    assert found == [
        tmp_path / "settings" / "main.js",
        tmp_path / "settings" / "views" / "Page.vue",
    ]


def test_find_module_paths(tmp_path):
    make_tree(tmp_path)
    assert find_module_paths(tmp_path, ["**/main.js"]) == [
        tmp_path.resolve(),
        (tmp_path / "settings").resolve(),
        (tmp_path / "users").resolve(),
    ]
    assert find_module_paths(tmp_path, ["main.js"]) == [tmp_path.resolve()]


def test_find_module_paths_filtered_by_name(tmp_path):
    make_tree(tmp_path)
    assert find_module_paths(tmp_path, ["**/main.js"], ["users"]) == [
        (tmp_path / "users").resolve()
    ]


def test_iter_module_sources_skips_unreadable(tmp_path):
    make_tree(tmp_path)
    (tmp_path / "users" / "broken.js").write_bytes(b"\xff\xfe\xfa")
    report = ExtractionReport()
    sources = list(iter_module_sources(tmp_path / "users", ["**/*.js"], report))
    assert sources == [(tmp_path / "users", "$t('users.title')")]
    assert report.get("GeneralStatistics", "Files skipped") == 1
    assert report.get("GeneralStatistics", "Files scanned") == 1


def test_iter_sources(tmp_path):
    make_tree(tmp_path)
    report = ExtractionReport()
    sources = list(iter_sources(tmp_path, ["*/main.js"], ["**/*.js", "**/*.vue"], report=report))
    assert sources == [
        ((tmp_path / "settings").resolve(), "$t('settings.title')"),
        ((tmp_path / "settings").resolve(), "<p>{{ $t('settings.page') }}</p>"),
        ((tmp_path / "users").resolve(), "$t('users.title')"),
    ]
    assert report.get("GeneralStatistics", "Modules found") == 2
