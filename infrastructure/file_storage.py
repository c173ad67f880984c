import os
import logging
from pathlib import Path
from typing import Union

from fastapi import UploadFile

from config import settings
from core.domain import UploadedFile
from core.enums import ErrorCode
from core.exceptions import UploadAdmissionError
from core.interfaces import IFileStorage
from utils.common import build_stored_filename, get_file_extension

logger = logging.getLogger(settings.LOGGER_NAME)

READ_BLOCK_SIZE = 1024 * 1024


class LocalFileStorage(IFileStorage):
    """Stores uploads in a local directory until they have been analyzed."""

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)
        # Create the directory if it doesn't exist
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            logger.info(f"Upload directory ensured at: {self.base_path}")
        except OSError as e:
            logger.error(f"Could not create upload directory at {self.base_path}: {e}")
            raise

    async def save(self, file: UploadFile, max_size: int) -> UploadedFile:
        """Copies the upload to disk block by block, stopping as soon as it exceeds max_size."""
        original_name = file.filename or "upload"
        file_path = self.base_path / build_stored_filename(original_name)
        written = 0
        try:
            with open(file_path, "wb") as buffer:
                while True:
                    block = await file.read(READ_BLOCK_SIZE)
                    if not block:
                        break
                    written += len(block)
                    if written > max_size:
                        raise UploadAdmissionError(
                            "File upload error",
                            details=f"File too large: {original_name} exceeds {max_size} bytes",
                            error_code=ErrorCode.FILE_TOO_LARGE,
                        )
                    buffer.write(block)
        except BaseException:
            if file_path.exists():
                os.unlink(file_path)
            raise

        logger.info(f"Stored upload '{original_name}' ({written} bytes) at {file_path}")
        return UploadedFile(
            original_name=original_name,
            path=str(file_path),
            size=written,
            extension=get_file_extension(original_name),
        )

    async def delete(self, path: str) -> bool:
        """Deletes a file from the upload directory."""
        file_path = Path(path)
        try:
            os.unlink(file_path)
            logger.info(f"Successfully deleted file: {file_path}")
            return True
        except FileNotFoundError:
            logger.warning(f"Attempted to delete non-existent file: {file_path}")
            return False
        except OSError as e:
            logger.error(f"Error deleting file {file_path}: {e}")
            return False
