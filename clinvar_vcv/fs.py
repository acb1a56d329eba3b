import gzip
import os
from enum import StrEnum
from pathlib import PurePath


class BinaryOpenMode(StrEnum):
    READ = "rb"
    WRITE = "wb"


def assert_mkdir(db_directory: str):
    if not os.path.exists(db_directory):
        os.mkdir(db_directory)
    elif not os.path.isdir(db_directory):
        raise OSError(f"Path exists but is not a directory!: {db_directory}")


class ReadCounter:
    """
    Wraps a binary file object and counts the bytes read through it, so
    progress can be logged for inputs that do not support tell().
    """

    def __init__(self, f):
        self.f = f
        self.bytes_read = 0

    def __getattr__(self, name):
        return getattr(self.f, name)

    def read(self, size=-1):
        result = self.f.read(size)
        if not isinstance(result, bytes):
            raise TypeError("ReadCounter only works with binary files.")
        self.bytes_read += len(result)
        return result

    def tell(self):
        return self.bytes_read


def fs_open(
    filename: str,
    make_parents=False,
    mode: BinaryOpenMode = BinaryOpenMode.READ,
    compresslevel: int = 9,
):
    """
    Opens a file with path `filename`. If `filename` ends in .gz, opens as gzip.

    If `make_parents` is True, creates parent directories if they do not exist.
    """
    if make_parents:
        for parent in reversed(PurePath(filename).parents):
            assert_mkdir(str(parent))
    if filename.endswith(".gz"):
        return gzip.open(filename, str(mode), compresslevel=compresslevel)
    return open(filename, mode=str(mode))  # pylint: disable=W1514
