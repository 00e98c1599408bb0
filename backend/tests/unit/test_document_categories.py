"""Unit tests for document categories"""

import pytest

from intake_portal.domain.documents import (
    CATEGORY_GROUPS,
    CATEGORY_LABELS,
    CategoryGroup,
    DocumentCategory,
    empty_document_paths,
    format_category_label,
    group_of,
    parse_category,
)


class TestDocumentCategory:
    """Test the fixed category set"""

    def test_twelve_categories_in_processing_order(self):
        assert [c.value for c in DocumentCategory] == [
            "companyRegistration",
            "companyDeclaration",
            "importPermit",
            "tk10",
            "tk11",
            "tk32",
            "tk31",
            "purchaseOrder",
            "idCardCopy",
            "msds",
            "commercialInvoice",
            "packingList",
        ]

    def test_every_category_has_a_label(self):
        assert set(CATEGORY_LABELS) == set(DocumentCategory)

    def test_every_category_in_exactly_one_group(self):
        members = [c for group in CATEGORY_GROUPS.values() for c in group]
        assert sorted(members) == sorted(DocumentCategory)
        assert len(members) == len(set(members))

    def test_group_of(self):
        assert group_of(DocumentCategory.ID_CARD_COPY) == CategoryGroup.COMPANY_INFORMATION
        assert group_of(DocumentCategory.TK31) == CategoryGroup.PERMITS_AND_TK_FORMS
        assert group_of(DocumentCategory.MSDS) == CategoryGroup.SHIPPING_DOCUMENTS


class TestParseCategory:
    """Test category lookup by key"""

    def test_known_key(self):
        assert parse_category("commercialInvoice") is DocumentCategory.COMMERCIAL_INVOICE

    @pytest.mark.parametrize("value", ["invoices", "CommercialInvoice", "", None])
    def test_unknown_key(self, value):
        assert parse_category(value) is None


class TestEmptyDocumentPaths:
    """Test the initial document_paths mapping"""

    def test_all_keys_empty(self):
        paths = empty_document_paths()
        assert list(paths) == [c.value for c in DocumentCategory]
        assert all(value == [] for value in paths.values())

    def test_lists_not_shared(self):
        paths = empty_document_paths()
        paths["msds"].append("msds/x.pdf")
        assert paths["tk10"] == []
        assert empty_document_paths()["msds"] == []


class TestFormatCategoryLabel:
    """Test label derivation from stored keys"""

    @pytest.mark.parametrize("key,label", [
        ("commercialInvoice", "Commercial Invoice"),
        ("companyRegistration", "Company Registration"),
        ("idCardCopy", "Id Card Copy"),
        ("msds", "Msds"),
        ("tk10", "Tk10"),
        ("customsClearance", "Customs Clearance"),
    ])
    def test_labels(self, key, label):
        assert format_category_label(key) == label
