import json
import sys
from pathlib import Path

import pytest
from PyPDF2 import PdfWriter

# Add the project root to sys.path so the flat modules import
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())


def page_width(index: int) -> int:
    """Width given to 1-based page `index` of generated PDFs."""
    return 100 + index


@pytest.fixture
def make_pdf(tmp_path: Path):
    """Create a PDF whose pages have distinct widths, so copies can be identified."""
    def _make(name: str = "source.pdf", pages: int = 10) -> Path:
        writer = PdfWriter()
        for i in range(1, pages + 1):
            writer.add_blank_page(width=page_width(i), height=200)
        path = tmp_path / name
        with open(path, "wb") as outfile:
            writer.write(outfile)
        return path
    return _make


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a configuration dict as JSON and return its path."""
    def _write(conf: dict, name: str = "conf.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(conf), encoding="utf-8")
        return path
    return _write
