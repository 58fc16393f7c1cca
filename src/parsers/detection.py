from pathlib import Path
from typing import Final

EXTENSION: Final[str] = ".axd"
MINIMUM_FILE_SIZE: Final[int] = 2173
MAGIC: Final[bytes] = "anasysinstruments.com".encode("utf-16-le")
MAGIC_OFFSET: Final[int] = 350
MAGIC_WINDOW: Final[int] = 100

NAME_SCORE: Final[int] = 20
CONTENT_SCORE: Final[int] = 50


def has_magic(head: bytes) -> bool:
    """Whether the Anasys signature starts within the window after `MAGIC_OFFSET`."""
    end = MAGIC_OFFSET + MAGIC_WINDOW - 1 + len(MAGIC)
    return MAGIC in head[MAGIC_OFFSET:end]


def is_axd_content(head: bytes, file_size: int | None = None) -> bool:
    """
    Whether a file head looks like an Analysis Studio document.

    :param head: The first bytes of the file.
    :param file_size: The full file size; defaults to the length of `head`.
    """
    size = len(head) if file_size is None else file_size
    return size > MINIMUM_FILE_SIZE and has_magic(head)


def detect_score(
    file_name: str | Path,
    head: bytes = b"",
    only_name: bool = False,
    file_size: int | None = None,
) -> int:
    """
    Score how likely a file is an Analysis Studio document.

    :param file_name: The file name, only its extension is inspected.
    :param head: The first bytes of the file.
    :param only_name: Decide on the file name alone.
    :param file_size: The full file size; defaults to the length of `head`.
    :returns: ``20`` for a name match, ``50`` for a content match, else ``0``.
    """
    name_matches = str(file_name).lower().endswith(EXTENSION)
    if only_name:
        return NAME_SCORE if name_matches else 0
    if name_matches and is_axd_content(head, file_size):
        return CONTENT_SCORE
    return 0
