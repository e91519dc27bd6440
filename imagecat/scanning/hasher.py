import hashlib
from pathlib import Path

from .. import config
from ..exceptions import FileHashError


class FileHasher:
    """Content digest used to decide whether two files are the same."""

    def __init__(self, algorithm: str = config.HASH_ALGORITHM):
        self.algorithm = algorithm

    def hash_file(self, path: Path) -> str:
        h = hashlib.new(self.algorithm)
        try:
            with open(path, 'rb') as f:
                while chunk := f.read(config.HASH_CHUNK_SIZE):
                    h.update(chunk)
        except OSError as e:
            raise FileHashError(f"Failed to hash {path}: {e}") from e
        return h.hexdigest()
