import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from fastapi import UploadFile

from baatcheet.core.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    """A file written to the assets directory"""
    key: str
    original_name: Optional[str]


class LocalAssetStorage:
    """Handles uploaded pictures stored flat under one public directory"""

    def __init__(self, directory: str, max_size: int, allowed_extensions: Iterable[str]):
        self.directory = Path(directory)
        self.max_size = max_size
        self.allowed_extensions = [ext.lower() for ext in allowed_extensions]

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"Asset directory: {self.directory.resolve()}")

    def path_for(self, key: str) -> Path:
        return self.directory / key

    async def save(self, file: UploadFile) -> StoredFile:
        """
        Write an upload to disk under a random key and return the key.

        The client-supplied filename is only used for its extension and is
        kept as ``original_name``; two uploads with the same name never
        share a key.
        """
        original_name = file.filename or None
        file_extension = os.path.splitext(original_name or "")[1].lower()

        if file_extension not in self.allowed_extensions:
            raise ValidationError(
                f"Unsupported file format. Please use one of: {', '.join(self.allowed_extensions)}",
                context={"filename": original_name},
            )

        content = await file.read()
        if len(content) > self.max_size:
            raise ValidationError(
                f"File size exceeds {self.max_size // (1024 * 1024)}MB limit",
                context={"filename": original_name, "size": len(content)},
            )

        key = f"{uuid.uuid4().hex}{file_extension}"
        local_path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(local_path, "wb") as out_file:
                out_file.write(content)
        except OSError as e:
            logger.error(f"Failed to save file locally: {e}")
            raise StoreError("Failed to save uploaded file", context={"path": str(local_path)})

        logger.info(f"Saved upload '{original_name}' as {local_path}")
        return StoredFile(key=key, original_name=original_name)

    def delete(self, key: str) -> bool:
        """Remove a stored file, returning False when it was not there"""
        file_path = self.path_for(key)
        try:
            if file_path.exists():
                logger.info(f"Deleting stored file: {file_path}")
                file_path.unlink()
                return True
        except OSError as e:
            logger.error(f"Error deleting stored file {file_path}: {e}")
        return False
