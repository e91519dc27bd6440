import pytest
from pathlib import Path

from imagecat.core import Cataloger
from imagecat.metadata.dates import DateResolver


class FakeExtractor:
    """Creation dates keyed by file name; anything else has no metadata."""

    def __init__(self, dates=None):
        self.dates = dict(dates or {})
        self.calls = []

    def get_creation_date(self, path: Path):
        self.calls.append(path)
        return self.dates.get(path.name)


@pytest.fixture
def extractor():
    return FakeExtractor()


@pytest.fixture
def src(tmp_path):
    d = tmp_path / "src"
    d.mkdir()
    return d


@pytest.fixture
def dest(tmp_path):
    return tmp_path / "catalog"


@pytest.fixture
def make_cataloger(dest, extractor):
    """Returns a factory building a Cataloger wired to the fake extractor."""
    def _make(**kwargs):
        return Cataloger(dest, date_resolver=DateResolver(extractor=extractor), **kwargs)
    return _make


def snapshot(root: Path) -> dict:
    """Relative path -> bytes for every file below root."""
    if not root.exists():
        return {}
    return {str(p.relative_to(root)): p.read_bytes() for p in root.rglob("*") if p.is_file()}
