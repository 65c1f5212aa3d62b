"""Tests for document number generation and counters."""

from datetime import date

import pytest

from models.enums import DocumentType
from models.settings import CompanySettings
from services.numbering import format_document_number, increment_counter, preview_document_number


@pytest.mark.parametrize(
    "document_type, expected",
    [
        (DocumentType.INVOICE, "INV0007250601"),
        (DocumentType.QUOTE, "EQ0007250601"),
        (DocumentType.PROFORMA, "PI0007250601"),
    ],
)
def test_format_document_number(document_type, expected):
    assert format_document_number(document_type, 7, date(2025, 6, 1)) == expected


def test_counter_wider_than_padding():
    assert format_document_number(DocumentType.INVOICE, 12345, date(2024, 12, 31)) == "INV12345241231"


def test_preview_reads_matching_counter_without_side_effect():
    company = CompanySettings(next_invoice_number=3, next_quotation_number=8, next_proforma_number=21)

    assert preview_document_number(company, DocumentType.QUOTE, date(2025, 1, 2)) == "EQ0008250102"
    assert preview_document_number(company, DocumentType.PROFORMA, date(2025, 1, 2)) == "PI0021250102"
    assert company.next_quotation_number == 8


def test_increment_touches_only_one_counter():
    company = CompanySettings(next_invoice_number=1, next_quotation_number=1, next_proforma_number=1)

    increment_counter(company, DocumentType.QUOTE)

    assert company.next_quotation_number == 2
    assert company.next_invoice_number == 1
    assert company.next_proforma_number == 1
