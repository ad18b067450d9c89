import logging

import pytest

from conftest import SAMPLE_XML, FakePoEditor
from poeditor_importer.exceptions import ApiError, ParseError
from poeditor_importer.importer import ERROR_MESSAGE, PoEditorStringsImporter

SPANISH_XML = """<resources>
    <string name="app_name">Ejemplo</string>
    <string name="welcome_title_tablet">Bienvenido {{user}}</string>
</resources>"""


@pytest.fixture
def run_import(make_http_client, tmp_path):
    def run(fake: FakePoEditor, default_lang: str = "en"):
        importer = PoEditorStringsImporter(http_client=make_http_client(fake.handler))
        return importer.import_poeditor_strings("token", 42, default_lang, tmp_path)
    return run


def test_imports_every_language(run_import, tmp_path):
    fake = FakePoEditor({"en": SAMPLE_XML, "es": SPANISH_XML})

    result = run_import(fake)

    assert result.languages == ["en", "es"]
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "values", "values-es", "values-tablet", "values-tablet-es"]

    spanish_tablet = (tmp_path / "values-tablet-es" / "strings.xml").read_text(encoding='utf-8')
    assert '<string name="welcome_title">Bienvenido %1$s</string>' in spanish_tablet


def test_languages_are_processed_sequentially_in_api_order(run_import):
    fake = FakePoEditor({"fr": SPANISH_XML, "en": SAMPLE_XML, "de": SPANISH_XML})

    run_import(fake)

    hosts_and_paths = [(r.url.host, r.url.path) for r in fake.requests]
    assert hosts_and_paths == [
        ("api.poeditor.com", "/v2/languages/list"),
        ("api.poeditor.com", "/v2/projects/export"),
        ("cdn.poeditor.test", "/export/fr.xml"),
        ("api.poeditor.com", "/v2/projects/export"),
        ("cdn.poeditor.test", "/export/en.xml"),
        ("api.poeditor.com", "/v2/projects/export"),
        ("cdn.poeditor.test", "/export/de.xml"),
    ]


def test_language_list_failure_writes_nothing(run_import, tmp_path, caplog):
    fake = FakePoEditor({"en": SAMPLE_XML}, language_list_error={
        "status": "fail", "code": "4012", "message": "Invalid project ID"})

    with caplog.at_level(logging.ERROR, logger="poeditor_importer.importer"):
        with pytest.raises(ApiError) as exc_info:
            run_import(fake)

    assert exc_info.value.code == "4012"
    assert list(tmp_path.iterdir()) == []
    assert [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR] == [ERROR_MESSAGE]


def test_failure_stops_remaining_languages(run_import, tmp_path):
    fake = FakePoEditor({
        "en": SAMPLE_XML,
        "es": SPANISH_XML,
        "fr": "<resources><string name='broken'>",
        "de": SPANISH_XML,
        "it": SPANISH_XML,
    })

    with pytest.raises(ParseError):
        run_import(fake)

    assert (tmp_path / "values" / "strings.xml").is_file()
    assert (tmp_path / "values-es" / "strings.xml").is_file()
    for code in ("fr", "de", "it"):
        assert not (tmp_path / f"values-{code}").exists()
        assert not (tmp_path / f"values-tablet-{code}").exists()
    assert "/export/de.xml" not in fake.paths()


def test_rerun_produces_identical_files(run_import, tmp_path):
    files = {"en": SAMPLE_XML, "es": SPANISH_XML}

    first = run_import(FakePoEditor(files))
    first_contents = {path: path.read_bytes() for paths in first.written_files.values() for path in paths}

    second = run_import(FakePoEditor(files))
    second_contents = {path: path.read_bytes() for paths in second.written_files.values() for path in paths}

    assert first_contents == second_contents


def test_custom_qualifier_patterns(make_http_client, tmp_path):
    from poeditor_importer.resources.post_processor import QualifierPattern

    fake = FakePoEditor({"es": '<resources><string name="title_land">Horizontal</string></resources>'})
    importer = PoEditorStringsImporter(http_client=make_http_client(fake.handler))

    importer.import_poeditor_strings("token", 42, "en", tmp_path,
                                     qualifier_patterns=[QualifierPattern(r"_land$", "land")])

    assert (tmp_path / "values-land-es" / "strings.xml").is_file()
    assert (tmp_path / "values-es" / "strings.xml").is_file()


def test_injected_http_client_is_not_closed(make_http_client):
    client = make_http_client(FakePoEditor({}).handler)

    with PoEditorStringsImporter(http_client=client):
        pass

    assert not client.is_closed
