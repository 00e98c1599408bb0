"""Document categories accepted by the intake portal

Twelve fixed classes of export paperwork. The category key doubles as the
storage folder and as the key in a submission's document_paths mapping.
"""

import re
from enum import Enum
from typing import Dict, List, Optional


class DocumentCategory(str, Enum):
    """Document category enum

    Declaration order is the order the orchestrator processes categories in.
    """
    COMPANY_REGISTRATION = "companyRegistration"
    COMPANY_DECLARATION = "companyDeclaration"
    IMPORT_PERMIT = "importPermit"
    TK10 = "tk10"
    TK11 = "tk11"
    TK32 = "tk32"
    TK31 = "tk31"
    PURCHASE_ORDER = "purchaseOrder"
    ID_CARD_COPY = "idCardCopy"
    MSDS = "msds"
    COMMERCIAL_INVOICE = "commercialInvoice"
    PACKING_LIST = "packingList"


class CategoryGroup(str, Enum):
    """Form sections the categories are presented in"""
    COMPANY_INFORMATION = "Company Information"
    PERMITS_AND_TK_FORMS = "Permits & TK Forms"
    SHIPPING_DOCUMENTS = "Shipping Documents"


# Form labels
CATEGORY_LABELS: Dict[DocumentCategory, str] = {
    DocumentCategory.COMPANY_REGISTRATION: "Company Registration",
    DocumentCategory.COMPANY_DECLARATION: "Company Declaration",
    DocumentCategory.IMPORT_PERMIT: "Import Permit",
    DocumentCategory.TK10: "TK 10",
    DocumentCategory.TK11: "TK 11",
    DocumentCategory.TK32: "TK 32",
    DocumentCategory.TK31: "TK 31",
    DocumentCategory.PURCHASE_ORDER: "Purchase Order",
    DocumentCategory.ID_CARD_COPY: "ID Card Copy",
    DocumentCategory.MSDS: "MSDS",
    DocumentCategory.COMMERCIAL_INVOICE: "Commercial Invoice",
    DocumentCategory.PACKING_LIST: "Packing List",
}

# Form sections, in display order
CATEGORY_GROUPS: Dict[CategoryGroup, List[DocumentCategory]] = {
    CategoryGroup.COMPANY_INFORMATION: [
        DocumentCategory.COMPANY_REGISTRATION,
        DocumentCategory.COMPANY_DECLARATION,
        DocumentCategory.ID_CARD_COPY,
    ],
    CategoryGroup.PERMITS_AND_TK_FORMS: [
        DocumentCategory.IMPORT_PERMIT,
        DocumentCategory.TK10,
        DocumentCategory.TK11,
        DocumentCategory.TK31,
        DocumentCategory.TK32,
    ],
    CategoryGroup.SHIPPING_DOCUMENTS: [
        DocumentCategory.PURCHASE_ORDER,
        DocumentCategory.MSDS,
        DocumentCategory.COMMERCIAL_INVOICE,
        DocumentCategory.PACKING_LIST,
    ],
}

_INTERNAL_CAPITAL = re.compile(r"(?<=.)([A-Z])")


def parse_category(value: Optional[str]) -> Optional[DocumentCategory]:
    """Look up a category by its key

    Returns:
        The matching DocumentCategory, or None for unknown keys

    Example:
        >>> parse_category('msds')
        <DocumentCategory.MSDS: 'msds'>
        >>> parse_category('invoices') is None
        True
    """
    try:
        return DocumentCategory(value)
    except ValueError:
        return None


def group_of(category: DocumentCategory) -> CategoryGroup:
    """Get the form section a category belongs to"""
    for group, members in CATEGORY_GROUPS.items():
        if category in members:
            return group
    raise KeyError(category)


def empty_document_paths() -> Dict[str, List[str]]:
    """Build a document_paths mapping with every category key and no paths"""
    return {category.value: [] for category in DocumentCategory}


def format_category_label(key: str) -> str:
    """Derive a display label from a category key

    Inserts a space before each internal capital letter and capitalizes the
    first letter.

    Example:
        >>> format_category_label('commercialInvoice')
        'Commercial Invoice'
        >>> format_category_label('tk10')
        'Tk10'
    """
    spaced = _INTERNAL_CAPITAL.sub(r" \1", key)
    return spaced[:1].upper() + spaced[1:]
