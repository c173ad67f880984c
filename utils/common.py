"""Common utilities: path management and filename handling"""
import os
import re
import time
import uuid
from pathlib import Path

# ⚠️ DO NOT import settings here - causes circular import with config.py


# ============= Path Management =============

def get_project_root() -> str:
    """Returns the absolute path to the project's root directory."""
    return os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def get_log_file_path() -> str:
    """Creates the log directory if it doesn't exist and returns the full log file path."""
    project_root = get_project_root()
    log_dir = os.path.join(project_root, 'log')

    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    return os.path.join(log_dir, 'document_analysis.log')


# ============= File Utilities =============

def sanitize_filename(filename: str) -> str:
    """Remove dangerous characters from filename."""
    safe_name = os.path.basename(filename.replace("\\", "/"))
    safe_name = re.sub(r'[^\w\-_\.]', '_', safe_name)
    return safe_name[:100] or "upload"


def build_stored_filename(original_name: str) -> str:
    """
    Unique on-disk name for an upload: '<epoch ms>-<random>-<sanitized name>'.
    The random part keeps two uploads of the same name in the same millisecond apart.
    """
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{sanitize_filename(original_name)}"


def get_file_extension(filename: str) -> str:
    """Extracts and normalizes the file extension from a filename."""
    return Path(filename).suffix[1:].lower()
