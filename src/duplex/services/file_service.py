"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem removal of single files: permanent delete or system trash (via send2trash).
"""
import os
import logging
from pathlib import Path
from send2trash import send2trash

from duplex.core.errors import DeletionError

logger = logging.getLogger(__name__)


class FileService:
    """
    Removes files from storage. Every failure is reported as DeletionError.
    """

    @staticmethod
    def delete_file(file_path: str) -> None:
        """Permanently removes a file."""
        path = Path(file_path)

        if not path.exists():
            raise DeletionError(f"File not found: {path}")

        try:
            os.remove(path)
        except OSError as e:
            raise DeletionError(f"Failed to delete: {e.strerror or e}") from e

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise DeletionError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise DeletionError(f"Failed to move to trash: {e}") from e

    @classmethod
    def remove(cls, file_path: str, use_trash: bool = False) -> None:
        if use_trash:
            cls.move_to_trash(file_path)
        else:
            cls.delete_file(file_path)
