import zipfile

import pytest
from rich.console import Console

from mex.errors import NoVolumesFound
from mex.exporters.export_pipeline import ExportConfig
from mex.processors.book_processor import BookProcessor
from tests.conftest import write_pages, write_zip


@pytest.fixture
def quiet_console():
    return Console(quiet=True)


def make_processor(tmp_path, collaborator, console, **config):
    return BookProcessor(
        config=ExportConfig(**config),
        console=console,
        collaborator=collaborator,
        temp_root=tmp_path / "tmp",
    )


def test_process_archive_input_end_to_end(tmp_path, collaborator, quiet_console):
    inner = write_zip(tmp_path / "build" / "Saga v02.zip", {"001.jpg": b"v2p1"})
    source = tmp_path / "in" / "Saga.cbz"
    source.parent.mkdir(parents=True)
    with zipfile.ZipFile(source, "w") as zf:
        zf.writestr("Saga v01/001.jpg", b"v1p1")
        zf.writestr("Saga v01/002.jpg", b"v1p2")
        zf.writestr("Saga v02.zip", inner.read_bytes())
        zf.writestr("bonus/001.jpg", b"bonus")
    processor = make_processor(tmp_path, collaborator, quiet_console, compress_volumes=False)

    result = processor.process(source, tmp_path / "out")

    assert result == tmp_path / "out" / "Saga"
    assert (result / "vol_1" / "page_1.jpg").read_bytes() == b"v1p1"
    assert (result / "vol_1" / "page_2.jpg").read_bytes() == b"v1p2"
    assert (result / "vol_2" / "page_1.jpg").read_bytes() == b"v2p1"
    assert (result / "vol_3" / "page_1.jpg").read_bytes() == b"bonus"
    assert list((tmp_path / "tmp").iterdir()) == []


def test_dry_run_writes_nothing(tmp_path, collaborator, quiet_console):
    write_pages(tmp_path / "in" / "Book" / "Vol 1", {"p.jpg": b"p"})
    processor = make_processor(tmp_path, collaborator, quiet_console)

    result = processor.process(tmp_path / "in" / "Book", tmp_path / "out", dry_run=True)

    assert result is None
    assert not (tmp_path / "out").exists()
    assert collaborator.compressed == []


def test_output_defaults_to_working_directory(tmp_path, collaborator, quiet_console, monkeypatch):
    write_pages(tmp_path / "in" / "Book" / "Vol 1", {"p.jpg": b"p"})
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    processor = make_processor(tmp_path, collaborator, quiet_console)

    result = processor.process(tmp_path / "in" / "Book")

    assert result.resolve() == (work / "Book").resolve()
    assert (work / "Book" / "vol_1.cbz").is_file()


def test_temp_dirs_removed_on_failure(tmp_path, collaborator, quiet_console):
    source = write_zip(tmp_path / "in" / "Empty.cbz", {"readme.txt": b"nothing here"})
    processor = make_processor(tmp_path, collaborator, quiet_console)

    with pytest.raises(NoVolumesFound):
        processor.process(source, tmp_path / "out")

    assert list((tmp_path / "tmp").iterdir()) == []


def test_summary_lists_resolved_volumes(tmp_path, collaborator):
    write_pages(tmp_path / "Book" / "Vol 3", {"p.jpg": b"page"})
    console = Console(record=True, width=120)
    processor = make_processor(tmp_path, collaborator, console)

    processor.process(tmp_path / "Book", tmp_path / "out", dry_run=True)

    text = console.export_text()
    assert "Volumes of Book" in text
    assert "Vol 3" in text


def test_default_collaborator_prints_through_processor_console(quiet_console):
    processor = BookProcessor(console=quiet_console)

    assert processor.collaborator.console is quiet_console
