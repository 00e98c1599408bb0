"""Documents domain module - categories, storage keys, upload validation"""

from .categories import (
    DocumentCategory,
    CategoryGroup,
    CATEGORY_LABELS,
    CATEGORY_GROUPS,
    parse_category,
    group_of,
    empty_document_paths,
    format_category_label,
)
from .storage_keys import (
    sanitize_company_name,
    sanitize_base_name,
    split_filename,
    build_storage_filename,
    build_storage_path,
)
from .validation import validate_file_size, validate_filename

__all__ = [
    "DocumentCategory",
    "CategoryGroup",
    "CATEGORY_LABELS",
    "CATEGORY_GROUPS",
    "parse_category",
    "group_of",
    "empty_document_paths",
    "format_category_label",
    "sanitize_company_name",
    "sanitize_base_name",
    "split_filename",
    "build_storage_filename",
    "build_storage_path",
    "validate_file_size",
    "validate_filename",
]
