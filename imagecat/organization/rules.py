from pathlib import Path
from datetime import datetime

from .. import config


class DestinationPlanner:
    """Maps a capture date to its catalog folder. Pure: never touches disk."""

    def plan(self, dest_root: Path, dt: datetime) -> Path:
        return dest_root / config.FOLDER_PATTERN.format(year=dt.year, month=dt.month, day=dt.day)
