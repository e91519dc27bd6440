import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional, List

from .. import config
from .extract import MetadataExtractor

# strptime directive -> fixed-width digit field
_DIRECTIVES = {
    'Y': r'\d{4}',
    'm': r'\d{2}',
    'd': r'\d{2}',
    'H': r'\d{2}',
    'M': r'\d{2}',
    'S': r'\d{2}',
}


class DatePattern:
    """
    A strptime format applied in strict mode.

    The format must occur in the text delimited by word boundaries, with each
    field at its full width, and must describe a real calendar date. Only the
    first occurrence is considered; anything else is "no match".
    """

    def __init__(self, fmt: str):
        self.fmt = fmt
        self.regex = re.compile(r'(?<!\w)' + self._translate(fmt) + r'(?!\w)')

    def parse(self, text: str) -> Optional[datetime]:
        m = self.regex.search(text)
        if not m:
            return None
        try:
            return datetime.strptime(m.group(0), self.fmt)
        except ValueError:
            return None

    @staticmethod
    def _translate(fmt: str) -> str:
        parts = []
        i = 0
        while i < len(fmt):
            if fmt[i] == '%':
                directive = fmt[i + 1:i + 2]
                if directive not in _DIRECTIVES:
                    raise ValueError(f"Unsupported directive %{directive} in {fmt!r}")
                parts.append(_DIRECTIVES[directive])
                i += 2
            else:
                parts.append(re.escape(fmt[i]))
                i += 1
        return ''.join(parts)

    def __repr__(self):
        return f"DatePattern({self.fmt!r})"


class DateResolver:
    """
    Best-effort capture date for a file.

    Embedded metadata is authoritative; the filename patterns are only a
    fallback for files without it (screenshots, downloads, re-encoded video).
    """

    def __init__(self,
                 extractor=None,
                 creation_format: str = config.CREATION_DATE_FORMAT,
                 filename_formats: Optional[List[str]] = None):
        self.extractor = extractor or MetadataExtractor()
        self.creation_pattern = DatePattern(creation_format)
        self.filename_patterns = [
            DatePattern(fmt) for fmt in (filename_formats or config.FILENAME_DATE_FORMATS)
        ]

    def resolve(self, path: Path, name: str) -> Optional[datetime]:
        raw = self.extractor.get_creation_date(path)
        if raw:
            logging.debug(f"Creation date: {raw}")
            dt = self.creation_pattern.parse(raw)
            if dt:
                return dt
            logging.debug(f"Unparseable creation date {raw!r} for {path}")

        for pattern in self.filename_patterns:
            dt = pattern.parse(name)
            if dt:
                logging.debug(f"Date {dt:%Y-%m-%d} taken from file name via {pattern.fmt}")
                return dt

        return None
