"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    DATETIME_FORMAT,
    IMAGE_PLACEHOLDER,
    MAX_URLS,
)
from .naming import batch_file_stem, export_base_name, sanitize_file_name

__all__ = [
    "APP_NAME",
    "APP_ORG",
    "DATETIME_FORMAT",
    "IMAGE_PLACEHOLDER",
    "MAX_URLS",
    "batch_file_stem",
    "export_base_name",
    "sanitize_file_name",
]
