"""
Configuration constants for imagecat.
"""

# --- File Type Definitions ---
# Videos go through MediaInfo/ExifTool; everything else is read with exifread.
VIDEO_EXTS = {'.mp4', '.mov', '.m4v', '.avi', '.mts', '.m2ts', '.3gp', '.mpg', '.mpeg', '.tod'}

# --- Metadata Parsing ---
# exifread name of ExifTool's "CreateDate" (0x9004)
EXIF_CREATE_DATE_TAG = 'EXIF DateTimeDigitized'
EXIFTOOL_CREATE_DATE_FIELD = 'CreateDate'

# MediaInfo General-track fields that carry the QuickTime creation date
MEDIAINFO_DATE_FIELDS = ['encoded_date', 'tagged_date']

# --- Date Resolution ---
CREATION_DATE_FORMAT = '%Y:%m:%d %H:%M:%S'

# Tried in order against the bare file name; most specific first so that a
# looser pattern never swallows a timestamped one.
FILENAME_DATE_FORMATS = [
    'IMG-%Y%m%d',
    'PANO_%Y%m%d_%H%M%S',
    'IMG_%Y%m%d_%H%M%S',
    '%Y%m%d_%H%M%S',
    'VID-%Y%m%d',
    '%Y%m%d',
]

# --- Hashing ---
HASH_ALGORITHM = 'md5'
HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading

# --- Organization ---
FOLDER_PATTERN = "{year:04d}/{year:04d}_{month:02d}_{day:02d}"
RENAME_PATTERN = "{name}_{counter}{ext}"

# Upper bound for the name_<n>.ext probe
MAX_COLLISION_COUNTER = 100_000
