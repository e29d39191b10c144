r"""Value object describing one file part of a multipart body."""

from __future__ import annotations

__all__ = ["UploadFile"]

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadFile:
    """A file sent as one part of a ``multipart/form-data`` body.

    No validation is done locally: an empty file name or an empty
    payload is sent as-is and left for the server to accept or reject.

    Args:
        name: The form field name of the part.
        file_name: The file name announced in the part headers.
        file_data: The raw content of the file.

    Example:
        ```pycon
        >>> from fluenthttp import UploadFile
        >>> upload = UploadFile(name="file", file_name="test.txt", file_data=b"Hello, World!")
        >>> upload.file_name
        'test.txt'

        ```
    """

    name: str
    file_name: str
    file_data: bytes
