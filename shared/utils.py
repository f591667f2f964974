"""Shared utility functions for the Field Ops activity engine.

This module contains helpers used by both the domain layer and the
application services: the application clock, season derivation for
conditional tasks, and photo file hashing.
"""

import hashlib
import logging
import os
import time
import uuid
from datetime import datetime
from zoneinfo import ZoneInfo

from shared.enums import Season

logger = logging.getLogger(__name__)

# Homes are managed out of London; all timestamps are London time (GMT/BST)
APP_TIMEZONE = ZoneInfo('Europe/London')

# Photo hash algorithm constant - always SHA256
PHOTO_HASH_ALGO = 'sha256'

# Months (1-12) treated as summer for conditional tasks: May through October
SUMMER_MONTHS = frozenset(range(5, 11))


def now():
    """Return current datetime in application timezone (timezone-aware)."""
    return datetime.now(APP_TIMEZONE)


def season_for(moment=None):
    """Return the Season a date falls in.

    Args:
        moment: datetime or date to classify. Defaults to now().

    Returns:
        Season: SUMMER for May-October, WINTER otherwise.
    """
    moment = moment or now()
    return Season.SUMMER if moment.month in SUMMER_MONTHS else Season.WINTER


def generate_photo_id(task_id):
    """Build a photo id unique within an activity.

    Format is '<task_id>-<epoch millis>-<random suffix>' so ids sort by capture time
    per task and never collide when two photos land in the same millisecond.
    """
    return f"{task_id}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def compute_photo_hash(image_data_or_path):
    """Compute cryptographic hash of image data for integrity verification.

    Always uses SHA256 algorithm. Can accept bytes, file path, or file-like object.

    Args:
        image_data_or_path: Raw bytes, file path (str), or file-like object

    Returns:
        str: Hexadecimal hash string (64 characters for SHA256)

    Raises:
        TypeError: If input type is invalid
        FileNotFoundError: If image_data_or_path is a path and file doesn't exist
    """
    hasher = hashlib.new(PHOTO_HASH_ALGO)

    if isinstance(image_data_or_path, (str, os.PathLike)):
        # Read file in chunks to avoid loading large files into memory
        try:
            with open(image_data_or_path, 'rb') as f:
                while chunk := f.read(8192):
                    hasher.update(chunk)
        except FileNotFoundError:
            logger.error(f"Photo file not found: {image_data_or_path}")
            raise
    elif isinstance(image_data_or_path, bytes):
        hasher.update(image_data_or_path)
    elif hasattr(image_data_or_path, 'read'):
        while chunk := image_data_or_path.read(8192):
            hasher.update(chunk)
    else:
        raise TypeError(f"compute_photo_hash expected bytes, str (path), or file-like object, got {type(image_data_or_path).__name__}")

    return hasher.hexdigest()


def describe_photo_file(local_path):
    """Return (file_name, size_bytes) for a local photo path.

    Size is None when the file is not on disk (e.g. a content URI from the camera).
    """
    file_name = os.path.basename(str(local_path)) or 'photo.jpg'
    try:
        size = os.path.getsize(local_path)
    except OSError:
        size = None
    return file_name, size
