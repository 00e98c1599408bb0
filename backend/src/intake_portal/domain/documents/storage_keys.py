"""Storage key construction for uploaded documents

Turns an arbitrary uploaded filename into a key that is safe to use in
object storage. Keys have the shape:

    {category}/{company}_{base}_{timestamp_ms}.{extension}

Everything here is pure; callers supply the timestamp.
"""

import re
import unicodedata
from typing import Tuple

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_UNSAFE_BASE_CHARS = re.compile(r"[^a-zA-Z0-9.\-_]")
_UNDERSCORE_RUN = re.compile(r"_+")
_COMBINING_DIACRITICS = re.compile("[\u0300-\u036f]")


def sanitize_company_name(company_name: str) -> str:
    """Replace every non-alphanumeric character with '_' and lower-case

    Example:
        >>> sanitize_company_name('Acme Co.')
        'acme_co_'
    """
    return _NON_ALNUM.sub("_", company_name).lower()


def split_filename(filename: str) -> Tuple[str, str]:
    """Split a filename at its last '.' into (base, extension)

    The extension is returned verbatim. A name without '.' has an empty
    extension and is used whole as the base.

    Example:
        >>> split_filename('report.final.PDF')
        ('report.final', 'PDF')
        >>> split_filename('README')
        ('README', '')
    """
    base, dot, extension = filename.rpartition(".")
    if not dot:
        return filename, ""
    return base, extension


def sanitize_base_name(base_name: str) -> str:
    """Strip accents and replace unsafe characters in a filename base

    Example:
        >>> sanitize_base_name('Façade  (final)')
        'Facade_final_'
    """
    decomposed = unicodedata.normalize("NFD", base_name)
    without_accents = _COMBINING_DIACRITICS.sub("", decomposed)
    replaced = _UNSAFE_BASE_CHARS.sub("_", without_accents)
    return _UNDERSCORE_RUN.sub("_", replaced)


def build_storage_filename(company_name: str, original_filename: str, timestamp_ms: int) -> str:
    """Build the object name for an uploaded file

    Args:
        company_name: Company name as typed in the form
        original_filename: Filename reported by the client
        timestamp_ms: Epoch milliseconds, fresh for every file

    Returns:
        str: '{company}_{base}_{timestamp_ms}.{extension}'

    Example:
        >>> build_storage_filename('Acme Co.', 'Invoice #1.pdf', 1700000000000)
        'acme_co__Invoice_1_1700000000000.pdf'
    """
    base, extension = split_filename(original_filename)
    return (
        f"{sanitize_company_name(company_name)}_"
        f"{sanitize_base_name(base)}_{timestamp_ms}.{extension}"
    )


def build_storage_path(folder: str, company_name: str, original_filename: str, timestamp_ms: int) -> str:
    """Prefix the storage filename with its category folder"""
    return f"{folder}/{build_storage_filename(company_name, original_filename, timestamp_ms)}"
