"""File validation utilities for document uploads"""

from typing import Optional, Tuple


def validate_file_size(size_bytes: int, max_size: int) -> Tuple[bool, Optional[str]]:
    """Validate file size is within limits

    Args:
        size_bytes: File size in bytes
        max_size: Maximum allowed size

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> validate_file_size(1024, 10 * 1024)
        (True, None)
        >>> validate_file_size(0, 10 * 1024)
        (False, 'File is empty (0 bytes)')
    """
    if size_bytes == 0:
        return False, "File is empty (0 bytes)"

    if size_bytes > max_size:
        return False, f"File exceeds maximum size of {max_size} bytes (got {size_bytes} bytes)"

    return True, None


def validate_filename(filename: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate an uploaded filename

    Path separators and odd punctuation are allowed here; the storage key
    builder replaces them. Only names that cannot be sanitized sensibly are
    rejected.

    Validation rules:
    - Not empty
    - Max 255 characters
    - No null bytes or other control characters

    Example:
        >>> validate_filename('Invoice #1.pdf')
        (True, None)
        >>> validate_filename('')
        (False, 'Filename cannot be empty')
    """
    if not filename or len(filename.strip()) == 0:
        return False, "Filename cannot be empty"

    if len(filename) > 255:
        return False, f"Filename exceeds 255 characters (got {len(filename)})"

    if '\x00' in filename:
        return False, "Filename contains null bytes"

    if any(ord(c) < 32 for c in filename):
        return False, "Filename contains control characters"

    return True, None
