from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import config


@dataclass(frozen=True)
class SourceFile:
    """
    A file found in the source tree.

    The extension starts at the first dot of the file name (so 'a.b.jpg' is
    name 'a', ext '.b.jpg'); a leading dot is part of the name.
    """
    path: Path
    name: str
    ext: str

    @classmethod
    def from_path(cls, path: Path) -> "SourceFile":
        filename = path.name
        dot = filename.find('.', 1)
        if dot == -1:
            return cls(path, filename, '')
        return cls(path, filename[:dot], filename[dot:])

    @property
    def filename(self) -> str:
        return self.name + self.ext


@dataclass(frozen=True)
class DestinationCandidate:
    directory: Path
    name: str
    ext: str

    def path_for(self, counter: int) -> Path:
        if counter == 0:
            return self.directory / f"{self.name}{self.ext}"
        return self.directory / config.RENAME_PATTERN.format(name=self.name, counter=counter, ext=self.ext)


@dataclass(frozen=True)
class AlreadyPresent:
    """
    Identical content is already stored in the catalog at `existing`.
    `in_place` means `existing` is the source file itself.
    """
    existing: Path
    in_place: bool = False


@dataclass(frozen=True)
class Place:
    """Store the source at `destination`; counter > 0 means it was renamed."""
    destination: Path
    counter: int = 0

    @property
    def renamed(self) -> bool:
        return self.counter > 0


@dataclass
class CatalogStats:
    total: int = 0
    skipped: int = 0
    already_present: int = 0
    copied: int = 0
    moved: int = 0
    renamed: int = 0

    def summary_lines(self) -> list[str]:
        return [
            f"Total number of files: {self.total}",
            f"Skipped files: {self.skipped}",
            f"Already present files: {self.already_present}",
            f"Copied files: {self.copied}",
            f"Moved files: {self.moved}",
            f"Requiring renaming: {self.renamed}",
        ]


@dataclass
class FileOutcome:
    """
    What happened to one examined file (one row of the CSV report).
    """
    source: Path
    status: str             # Skipped/Already Present/Copied/Moved (+ " (Renamed)")
    destination: Optional[Path] = None
