from pathlib import Path

import pytest

from mex.config import Settings, parse_bool
from mex.exporters.export_pipeline import ExportConfig


def test_defaults_without_environment():
    settings = Settings.from_env(environ={}, dotenv=False)

    assert settings == Settings()
    assert settings.export_config() == ExportConfig(
        compress_book=False,
        compress_volumes=True,
        page_template="page_{{Index}}{{Ext}}",
        volume_template="vol_{{Index}}",
        book_template="{{Name}}",
        workers=4,
    )


def test_environment_overrides():
    settings = Settings.from_env(
        environ={
            "MEX_ZIP_BOOK": "yes",
            "MEX_ZIP_VOLUME": "0",
            "MEX_LABEL_PAGE": "{{Index}}{{Ext}}",
            "MEX_LABEL_VOLUME": "Volume {{Index}}",
            "MEX_LABEL_BOOK": "{{Name}} (normalized)",
            "MEX_WORKERS": "8",
            "MEX_TEMP_DIR": "/var/tmp/mex",
        },
        dotenv=False,
    )

    assert settings.zip_book is True
    assert settings.zip_volume is False
    assert settings.label_page == "{{Index}}{{Ext}}"
    assert settings.label_volume == "Volume {{Index}}"
    assert settings.label_book == "{{Name}} (normalized)"
    assert settings.workers == 8
    assert settings.temp_dir == Path("/var/tmp/mex")


@pytest.mark.parametrize(
    "environ, message",
    [
        ({"MEX_WORKERS": "many"}, "MEX_WORKERS"),
        ({"MEX_WORKERS": "0"}, "at least 1"),
        ({"MEX_ZIP_BOOK": "maybe"}, "MEX_ZIP_BOOK"),
    ],
)
def test_invalid_values_name_the_variable(environ, message):
    with pytest.raises(ValueError, match=message):
        Settings.from_env(environ=environ, dotenv=False)


def test_dotenv_file_is_read_from_working_directory(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("MEX_WORKERS=2\nMEX_LABEL_BOOK={{Name}}-x\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MEX_WORKERS", raising=False)
    monkeypatch.setenv("MEX_LABEL_BOOK", "from-env")

    settings = Settings.from_env()

    assert settings.workers == 2
    assert settings.label_book == "from-env"


@pytest.mark.parametrize("value", ["1", "true", "TRUE", " on ", "yes"])
def test_parse_bool_true(value):
    assert parse_bool(value) is True


@pytest.mark.parametrize("value", ["0", "false", "Off", "no"])
def test_parse_bool_false(value):
    assert parse_bool(value) is False
