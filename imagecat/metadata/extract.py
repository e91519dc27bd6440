import logging
import subprocess
import json
import re
from pathlib import Path
from typing import Optional

import exifread
from pymediainfo import MediaInfo

from .. import config


class MetadataExtractor:
    """
    Reads the embedded creation date of a media file.

    Strategies:
      - Images: Uses 'exifread' (fast, Python-native).
      - Video: Uses 'pymediainfo' (fast wrapper) -> falls back to 'exiftool' (robust).

    Dates are returned as raw strings in EXIF notation ("YYYY:MM:DD HH:MM:SS");
    validating them is up to the DateResolver.
    """

    def get_creation_date(self, path: Path) -> Optional[str]:
        if path.suffix.lower() in config.VIDEO_EXTS:
            return self.get_video_creation_date(path)
        return self.get_image_creation_date(path)

    def get_image_creation_date(self, path: Path) -> Optional[str]:
        try:
            with path.open('rb') as f:
                # details=False speeds up processing significantly
                tags = exifread.process_file(f, details=False)
        except Exception as e:
            logging.warning(f"ExifRead failed for {path}: {e}")
            return None

        value = tags.get(config.EXIF_CREATE_DATE_TAG)
        if value is None:
            return None
        return str(value).strip() or None

    def get_video_creation_date(self, path: Path) -> Optional[str]:
        # Strategy 1: Try MediaInfo (Fastest, usually sufficient)
        try:
            value = self._extract_mediainfo(path)
            if value:
                return value
        except Exception as e:
            logging.debug(f"MediaInfo failed for {path}: {e}")

        # Strategy 2: Try ExifTool (Robust fallback, requires system install)
        try:
            return self._extract_exiftool(path)
        except Exception as e:
            # Only log at debug level to avoid spamming console if tool is missing
            logging.debug(f"ExifTool failed for {path}: {e}")

        return None

    # --- Internal Extraction Helpers ---

    def _extract_mediainfo(self, path: Path) -> Optional[str]:
        mi = MediaInfo.parse(str(path))
        for track in mi.tracks:
            if track.track_type != "General":
                continue
            for field in config.MEDIAINFO_DATE_FIELDS:
                val = getattr(track, field, None)
                if val:
                    return self._to_exif_notation(str(val))
        return None

    def _extract_exiftool(self, path: Path) -> Optional[str]:
        """
        Wraps the 'exiftool' command line utility.
        Must be installed and on the system PATH.
        """
        # -j = JSON output; without -n dates keep the "YYYY:MM:DD HH:MM:SS" form
        cmd = ["exiftool", "-j", f"-{config.EXIFTOOL_CREATE_DATE_FIELD}", str(path)]
        out = subprocess.check_output(cmd, stderr=subprocess.DEVNULL, text=True)
        data_list = json.loads(out)
        if not data_list:
            return None

        value = data_list[0].get(config.EXIFTOOL_CREATE_DATE_FIELD)
        if not value:
            return None
        return str(value).strip() or None

    def _to_exif_notation(self, dt_str: str) -> str:
        """
        MediaInfo reports 'UTC 2021-05-10 14:00:00', '2021-05-10 14:00:00 UTC'
        or ISO 8601 ('2021-05-10T14:00:00Z').
        """
        clean = dt_str.replace("UTC", "").strip().rstrip("Z")
        return re.sub(r'^(\d{4})-(\d{2})-(\d{2})[T ]', r'\1:\2:\3 ', clean)
