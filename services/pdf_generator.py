"""PDF rendering of invoices, quotes and proformas using ReportLab."""

from reportlab.lib.pagesizes import A4
from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, Image
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_RIGHT, TA_CENTER
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional, Sequence
from xml.sax.saxutils import escape
import urllib.request

from loguru import logger

from models.document import Document, LineItem
from models.enums import DocumentType
from models.settings import CompanySettings
from services.currency import format_money
from services.totals import to_decimal

TITLES = {
    DocumentType.INVOICE: "INVOICE",
    DocumentType.QUOTE: "QUOTE",
    DocumentType.PROFORMA: "PROFORMA INVOICE",
}

FILE_PREFIXES = {
    DocumentType.INVOICE: "Invoice",
    DocumentType.QUOTE: "Quote",
    DocumentType.PROFORMA: "Proforma-Invoice",
}

# Inner padding of the printable area, on top of the page margin
CONTENT_PADDING = 16 * mm


@dataclass(frozen=True)
class PrintOptions:
    """Page setup handed to the renderer as-is."""
    margin_mm: float = 0
    exact_colors: bool = True


def document_title(document: Document) -> str:
    """Export title, e.g. Proforma-Invoice-PI0003250601."""
    return f"{FILE_PREFIXES[DocumentType(document.document_type)]}-{document.document_number}"


def _text(value: Optional[str]) -> str:
    return escape(value or "").replace("\n", "<br/>")


def _date(value) -> str:
    return value.strftime("%b %d, %Y")


def _load_logo(logo_url: Optional[str], logo_path: Optional[Path]):
    try:
        if logo_path is not None:
            return Image(str(logo_path), width=40 * mm, height=16 * mm, kind="proportional")
        if logo_url and logo_url.startswith("http"):
            req = urllib.request.Request(logo_url, headers={"User-Agent": "Mozilla/5.0"})
            with urllib.request.urlopen(req, timeout=2) as response:
                img_stream = BytesIO(response.read())
            return Image(img_stream, width=40 * mm, height=16 * mm, kind="proportional")
    except Exception as e:
        logger.warning(f"Skipping logo {logo_url}: {e}")
    return None


def generate_document_pdf(
    document: Document,
    items: Sequence[LineItem],
    company: CompanySettings,
    options: PrintOptions = PrintOptions(),
    logo_path: Optional[Path] = None,
) -> bytes:
    buffer = BytesIO()
    margin = options.margin_mm * mm + CONTENT_PADDING
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=margin,
        leftMargin=margin,
        topMargin=margin,
        bottomMargin=margin,
        title=document_title(document),
    )
    width = A4[0] - 2 * margin

    elements = []
    styles = getSampleStyleSheet()

    gray = colors.HexColor("#4b5563") if options.exact_colors else colors.black
    accent = colors.HexColor("#2563eb") if options.exact_colors else colors.black

    title_style = ParagraphStyle(
        'DocTitle',
        parent=styles['Heading1'],
        fontSize=30,
        leading=36,
        textColor=colors.HexColor('#111827'),
        spaceAfter=8,
        alignment=TA_RIGHT
    )

    heading_style = ParagraphStyle(
        'SectionHeading',
        parent=styles['Normal'],
        fontName='Helvetica-Bold',
        fontSize=9,
        textColor=colors.HexColor('#6b7280'),
        spaceAfter=4,
    )

    name_style = ParagraphStyle(
        'PartyName',
        parent=styles['Normal'],
        fontName='Helvetica-Bold',
        fontSize=12,
        leading=16,
        textColor=colors.HexColor('#111827'),
    )

    normal_style = ParagraphStyle(
        'Body',
        parent=styles['Normal'],
        fontSize=10,
        leading=14,
        textColor=gray,
    )

    right_align_style = ParagraphStyle(
        'RightAlign',
        parent=normal_style,
        alignment=TA_RIGHT
    )

    currency = document.currency

    # --- Logo ---
    logo = _load_logo(company.logo_url, logo_path)
    if logo:
        logo.hAlign = 'LEFT'
        elements.append(logo)
        elements.append(Spacer(1, 6 * mm))

    # --- Title & Numbers ---
    elements.append(Paragraph(TITLES[DocumentType(document.document_type)], title_style))
    elements.append(Paragraph(f"<b>Invoice #:</b> {_text(document.document_number)}", right_align_style))
    elements.append(Paragraph(f"<b>Date:</b> {_date(document.document_date)}", right_align_style))
    if document.due_date:
        elements.append(Paragraph(f"<b>Due:</b> {_date(document.due_date)}", right_align_style))
    elements.append(Spacer(1, 8 * mm))

    # --- Bill From / Bill To ---
    bill_from = [Paragraph("BILL FROM", heading_style), Paragraph(_text(company.company_name), name_style)]
    for value in (company.company_email, company.company_phone, company.company_address):
        if value:
            bill_from.append(Paragraph(_text(value), normal_style))
    if company.tax_number:
        bill_from.append(Paragraph(f"Tax No: {_text(company.tax_number)}", normal_style))
    if company.pan_number:
        bill_from.append(Paragraph(f"PAN: {_text(company.pan_number)}", normal_style))

    bill_to = [Paragraph("BILL TO", heading_style), Paragraph(_text(document.client_name), name_style)]
    for value in (document.client_email, document.client_address):
        if value:
            bill_to.append(Paragraph(_text(value), normal_style))
    if document.client_tax_number:
        bill_to.append(Paragraph(f"Tax No: {_text(document.client_tax_number)}", normal_style))
    if document.client_pan_number:
        bill_to.append(Paragraph(f"PAN: {_text(document.client_pan_number)}", normal_style))

    header_table = Table([[bill_from, bill_to]], colWidths=[width / 2, width / 2])
    header_table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('LEFTPADDING', (0, 0), (-1, -1), 0),
        ('RIGHTPADDING', (0, 0), (-1, -1), 0),
    ]))
    elements.append(header_table)
    elements.append(Spacer(1, 10 * mm))

    # --- Line Items Table ---
    items_data = [['DESCRIPTION', 'UNIT', 'QTY', 'RATE', 'AMOUNT']]
    for item in items:
        items_data.append([
            Paragraph(_text(item.description), normal_style),
            (item.unit or "item").capitalize(),
            f"{to_decimal(item.quantity).normalize():f}",
            format_money(item.rate, currency),
            format_money(item.amount, currency),
        ])

    fixed = 22 * mm + 18 * mm + 28 * mm + 28 * mm
    items_table = Table(items_data, colWidths=[width - fixed, 22 * mm, 18 * mm, 28 * mm, 28 * mm])
    items_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, 0), 9),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.HexColor('#374151')),
        ('LINEBELOW', (0, 0), (-1, 0), 1.5, colors.HexColor('#111827')),
        ('LINEBELOW', (0, 1), (-1, -1), 0.5, colors.HexColor('#e5e7eb')),
        ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
        ('FONTNAME', (4, 1), (4, -1), 'Helvetica-Bold'),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('TOPPADDING', (0, 0), (-1, -1), 8),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
    ]))
    elements.append(items_table)
    elements.append(Spacer(1, 6 * mm))

    # --- Totals Section ---
    totals_data = [['Subtotal:', format_money(document.subtotal, currency)]]
    if document.tax_enabled:
        totals_data.append([f"Tax ({to_decimal(document.tax_rate).normalize():f}%):", format_money(document.tax_amount, currency)])
    totals_data.append(['Total:', format_money(document.total, currency)])

    totals_table = Table(totals_data, colWidths=[width - 40 * mm, 40 * mm])
    totals_table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, -1), (-1, -1), 13),
        ('TEXTCOLOR', (1, -1), (1, -1), accent),
        ('LINEABOVE', (0, -1), (-1, -1), 1.5, colors.HexColor('#111827')),
        ('TOPPADDING', (0, -1), (-1, -1), 8),
    ]))
    elements.append(totals_table)
    elements.append(Spacer(1, 10 * mm))

    # --- Bank Details, Terms & Notes ---
    if company.bank_name:
        elements.append(Paragraph("BANK DETAILS", heading_style))
        elements.append(Paragraph(f"<b>Bank:</b> {_text(company.bank_name)}", normal_style))
        if company.account_number:
            elements.append(Paragraph(f"<b>Account:</b> {_text(company.account_number)}", normal_style))
        if company.ifsc_code:
            elements.append(Paragraph(f"<b>IFSC:</b> {_text(company.ifsc_code)}", normal_style))
        elements.append(Spacer(1, 5 * mm))

    if document.payment_terms:
        elements.append(Paragraph("PAYMENT TERMS", heading_style))
        elements.append(Paragraph(_text(document.payment_terms), normal_style))
        elements.append(Spacer(1, 5 * mm))

    if document.notes:
        elements.append(Paragraph("NOTES", heading_style))
        elements.append(Paragraph(_text(document.notes), normal_style))

    # --- Footer ---
    elements.append(Spacer(1, 15 * mm))
    footer_style = ParagraphStyle('Footer', parent=styles['Normal'], fontSize=9, textColor=colors.gray, alignment=TA_CENTER)
    elements.append(Paragraph("Thank you for your business!", footer_style))

    doc.build(elements)
    pdf_bytes = buffer.getvalue()
    buffer.close()

    return pdf_bytes
