"""ReportLab PDF Generation Service Implementation

Lays out a prepared InvoiceDocument on an A4 canvas with absolute
coordinates. Body content is positioned from the top of the page; the
payment slip is positioned from the bottom, where banks expect it.
"""

import logging
from io import BytesIO
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from invoicing.app.services.pdf_service import InvoicePdfService
from invoicing.app.services.qr_code_service import QrCodeService
from invoicing.adapter.services.qr_code_service import QrCodeGenerator
from invoicing.domain.invoice_document import DocumentLabels, InvoiceDocument, PaymentSlipView
from invoicing.domain.payment_slip import PaymentSlipPayload

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 50
RIGHT = PAGE_WIDTH - MARGIN
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
BODY_BOTTOM = PAGE_HEIGHT - MARGIN
FOOTER_TOP = PAGE_HEIGHT - 60

FONT = "Helvetica"
BOLD = "Helvetica-Bold"

LINE_HEIGHT = 11
ROW_HEIGHT = 16
TABLE_TOP = 250
DESCRIPTION_X = MARGIN + 5
DESCRIPTION_WIDTH = 270
QUANTITY_RIGHT = 375
UNIT_PRICE_RIGHT = 460
TOTAL_RIGHT = RIGHT - 5
TOTALS_X = 350

SLIP_HEIGHT = 105 * mm
RECEIPT_WIDTH = 62 * mm
PAYMENT_PART_X = RECEIPT_WIDTH + 5 * mm
PAYMENT_INFO_X = 118 * mm
AMOUNT_SECTION_Y = 37 * mm
QR_SIZE = 46 * mm
CROSS_SIZE = 7 * mm

HEADER_FILL = colors.HexColor("#E8E8E8")
ROW_FILL = colors.HexColor("#F8F8F8")
RULE = colors.HexColor("#CCCCCC")
MUTED = colors.HexColor("#666666")
LINK = colors.HexColor("#1A5FB4")

QR_ERROR_TEXT = "Error generating QR"


class ReportLabInvoicePdfService(InvoicePdfService):
    """
    ReportLab implementation of InvoicePdfService

    Args:
        qr_code_service: Encoder for the payment slip QR code
        invariant: Omit creation date and random document id so equal
            documents render to equal bytes
    """

    def __init__(self, qr_code_service: Optional[QrCodeService] = None, invariant: bool = False):
        self.qr_code_service = qr_code_service or QrCodeGenerator()
        self.invariant = invariant

    def render(self, document: InvoiceDocument) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1 if self.invariant else 0)
        pdf.setTitle(document.title)
        pdf.setAuthor(document.issuer_name)

        self._draw_header(pdf, document)
        top = self._draw_line_items(pdf, document)
        top = self._draw_totals(pdf, document, top)
        top = self._draw_extras(pdf, document, top)

        if document.payment_slip:
            if top > PAGE_HEIGHT - SLIP_HEIGHT - 10:
                pdf.showPage()
            self._draw_payment_slip(pdf, document.payment_slip, document.labels)
        elif document.footer:
            self._draw_footer(pdf, document.footer, top)

        pdf.save()
        pdf_bytes = buffer.getvalue()
        buffer.close()
        return pdf_bytes

    # Body, top-origin coordinates

    def _text(self, pdf, x, top, text, size=9, font=FONT, align="left", color=colors.black):
        pdf.setFillColor(color)
        pdf.setFont(font, size)
        y = PAGE_HEIGHT - top - size
        if align == "right":
            pdf.drawRightString(x, y, text)
        elif align == "center":
            pdf.drawCentredString(x, y, text)
        else:
            pdf.drawString(x, y, text)

    def _ensure_space(self, pdf, top: float, needed: float) -> float:
        if top + needed > BODY_BOTTOM:
            pdf.showPage()
            return MARGIN
        return top

    def _draw_header(self, pdf, document: InvoiceDocument):
        labels = document.labels

        self._text(pdf, MARGIN, 50, document.issuer_name, 16, BOLD)
        top = 72
        for line in document.issuer_lines:
            if line:
                self._text(pdf, MARGIN, top, line)
                top += LINE_HEIGHT

        self._text(pdf, RIGHT, 50, labels.title, 20, BOLD, "right")
        details = [
            (labels.invoice_number, document.invoice_number),
            (labels.invoice_date, document.invoice_date),
        ]
        if document.due_date:
            details.append((labels.due_date, document.due_date))
        top = 85
        for label, value in details:
            self._text(pdf, TOTALS_X, top, label)
            self._text(pdf, RIGHT, top, value, align="right")
            top += 12

        self._text(pdf, MARGIN, 160, labels.bill_to, 10, BOLD)
        self._text(pdf, MARGIN, 175, document.billee_name, 9, BOLD)
        top = 187
        for line in document.billee_lines:
            self._text(pdf, MARGIN, top, line)
            top += LINE_HEIGHT

    def _draw_table_header(self, pdf, labels: DocumentLabels, top: float) -> float:
        pdf.setFillColor(HEADER_FILL)
        pdf.rect(MARGIN, PAGE_HEIGHT - top - 20, CONTENT_WIDTH, 20, stroke=0, fill=1)
        self._text(pdf, DESCRIPTION_X, top + 6, labels.description, 8, BOLD)
        self._text(pdf, QUANTITY_RIGHT, top + 6, labels.quantity, 8, BOLD, "right")
        self._text(pdf, UNIT_PRICE_RIGHT, top + 6, labels.unit_price, 8, BOLD, "right")
        self._text(pdf, TOTAL_RIGHT, top + 6, labels.line_total, 8, BOLD, "right")
        return top + 25

    def _draw_line_items(self, pdf, document: InvoiceDocument) -> float:
        """Line table; breaks pages as needed and repeats the header on each"""
        top = self._draw_table_header(pdf, document.labels, TABLE_TOP)

        for index, line in enumerate(document.lines):
            wrapped = simpleSplit(line.description, FONT, 9, DESCRIPTION_WIDTH) or [""]
            height = ROW_HEIGHT + LINE_HEIGHT * (len(wrapped) - 1)

            if top + height > BODY_BOTTOM:
                pdf.showPage()
                top = self._draw_table_header(pdf, document.labels, MARGIN)

            if index % 2 == 1:
                pdf.setFillColor(ROW_FILL)
                pdf.rect(MARGIN, PAGE_HEIGHT - top - height + 3, CONTENT_WIDTH, height, stroke=0, fill=1)

            for offset, text in enumerate(wrapped):
                self._text(pdf, DESCRIPTION_X, top + offset * LINE_HEIGHT, text)
            self._text(pdf, QUANTITY_RIGHT, top, line.quantity, align="right")
            self._text(pdf, UNIT_PRICE_RIGHT, top, line.unit_price, align="right")
            self._text(pdf, TOTAL_RIGHT, top, line.total, align="right")
            top += height

        pdf.setStrokeColor(RULE)
        pdf.setLineWidth(0.5)
        pdf.line(MARGIN, PAGE_HEIGHT - top, RIGHT, PAGE_HEIGHT - top)
        return top

    def _draw_totals(self, pdf, document: InvoiceDocument, top: float) -> float:
        labels = document.labels
        top = self._ensure_space(pdf, top + 15, 55)

        self._text(pdf, TOTALS_X, top, labels.subtotal)
        self._text(pdf, TOTAL_RIGHT, top, document.subtotal, align="right")
        self._text(pdf, TOTALS_X, top + 14, f"{document.vat_label}:")
        self._text(pdf, TOTAL_RIGHT, top + 14, document.tax_total, align="right")

        pdf.setStrokeColor(colors.black)
        pdf.setLineWidth(1)
        pdf.line(TOTALS_X, PAGE_HEIGHT - top - 30, RIGHT, PAGE_HEIGHT - top - 30)

        self._text(pdf, TOTALS_X, top + 36, f"{labels.total} {document.currency}:", 11, BOLD)
        self._text(pdf, TOTAL_RIGHT, top + 36, document.amount_total, 11, BOLD, "right")
        return top + 55

    def _draw_extras(self, pdf, document: InvoiceDocument, top: float) -> float:
        """Bank details, notes, payment link and slip hint, in that order"""
        labels = document.labels

        if document.bank_details:
            top = self._ensure_space(pdf, top + 20, 18 + 15 * len(document.bank_details))
            self._text(pdf, MARGIN, top, labels.bank_details, 11, BOLD)
            top += 18
            for label, value in document.bank_details:
                self._text(pdf, MARGIN, top, label, 10)
                self._text(pdf, 110, top, value, 10)
                top += 15

        if document.notes:
            top = self._ensure_space(pdf, top + 20, 15 + LINE_HEIGHT)
            self._text(pdf, MARGIN, top, labels.notes, 10, BOLD)
            top += 15
            for text in self._wrap(document.notes, FONT, 9, CONTENT_WIDTH):
                top = self._ensure_space(pdf, top, LINE_HEIGHT)
                self._text(pdf, MARGIN, top, text)
                top += LINE_HEIGHT

        if document.payment_link:
            top = self._ensure_space(pdf, top + 15, 14)
            self._text(pdf, MARGIN, top, labels.pay_online, 9, BOLD)
            x = MARGIN + stringWidth(labels.pay_online, BOLD, 9) + 4
            self._text(pdf, x, top, document.payment_link, 9, color=LINK)
            width = stringWidth(document.payment_link, FONT, 9)
            baseline = PAGE_HEIGHT - top - 9
            pdf.linkURL(document.payment_link, (x, baseline - 2, x + width, baseline + 9), relative=0)
            top += 14

        if document.payment_slip:
            top = self._ensure_space(pdf, top + 15, 12)
            self._text(pdf, MARGIN, top, labels.slip_hint, 8, color=MUTED)
            top += 12

        return top

    def _draw_footer(self, pdf, footer: str, top: float):
        if top > FOOTER_TOP - 15:
            pdf.showPage()
        line_top = FOOTER_TOP
        for text in self._wrap(footer, FONT, 8, CONTENT_WIDTH):
            self._text(pdf, PAGE_WIDTH / 2, line_top, text, 8, align="center", color=MUTED)
            line_top += 10

    @staticmethod
    def _wrap(text: str, font: str, size: float, width: float) -> List[str]:
        lines = []
        for paragraph in text.splitlines() or [""]:
            lines.extend(simpleSplit(paragraph, font, size, width) or [""])
        return lines

    # Payment slip, bottom-origin coordinates

    def _draw_payment_slip(self, pdf, slip: PaymentSlipView, labels: DocumentLabels):
        pdf.setStrokeColor(colors.black)
        pdf.setLineWidth(0.5)
        pdf.setDash(3, 3)
        pdf.line(0, SLIP_HEIGHT, PAGE_WIDTH, SLIP_HEIGHT)
        pdf.line(RECEIPT_WIDTH, 0, RECEIPT_WIDTH, SLIP_HEIGHT)
        pdf.setDash()

        self._draw_receipt(pdf, slip, labels)
        self._draw_payment_part(pdf, slip, labels)

    def _slip_block(self, pdf, x, y, heading, lines, heading_size, value_size) -> float:
        """Heading with its value lines; returns the y below the block"""
        pdf.setFillColor(colors.black)
        pdf.setFont(BOLD, heading_size)
        y -= heading_size
        pdf.drawString(x, y, heading)
        pdf.setFont(FONT, value_size)
        for line in lines:
            y -= value_size + 1
            pdf.drawString(x, y, line)
        return y - value_size

    def _draw_blank_box(self, pdf, x, y, width, height):
        """Corner marks of a field the payer fills in by hand"""
        corner = 3 * mm
        pdf.setStrokeColor(colors.black)
        pdf.setLineWidth(0.75)
        for cx, cy, dx, dy in (
            (x, y + height, 1, -1),
            (x + width, y + height, -1, -1),
            (x, y, 1, 1),
            (x + width, y, -1, 1),
        ):
            pdf.line(cx, cy, cx + dx * corner, cy)
            pdf.line(cx, cy, cx, cy + dy * corner)

    def _draw_amount_section(self, pdf, x, slip: PaymentSlipView, labels, heading_size, value_size, amount_offset):
        pdf.setFillColor(colors.black)
        pdf.setFont(BOLD, heading_size)
        pdf.drawString(x, AMOUNT_SECTION_Y, labels.currency)
        pdf.drawString(x + amount_offset, AMOUNT_SECTION_Y, labels.amount)
        pdf.setFont(FONT, value_size)
        pdf.drawString(x, AMOUNT_SECTION_Y - value_size - 3, slip.currency)
        pdf.drawString(x + amount_offset, AMOUNT_SECTION_Y - value_size - 3, slip.amount)

    def _draw_receipt(self, pdf, slip: PaymentSlipView, labels: DocumentLabels):
        x = 5 * mm
        y = SLIP_HEIGHT - 5 * mm - 11
        pdf.setFillColor(colors.black)
        pdf.setFont(BOLD, 11)
        pdf.drawString(x, y, labels.receipt)
        y -= 7

        y = self._slip_block(pdf, x, y, labels.account_payable_to, [slip.account] + slip.creditor_lines, 6, 8)
        if slip.reference:
            y = self._slip_block(pdf, x, y, labels.reference, [slip.reference], 6, 8)
        if slip.debtor_lines:
            self._slip_block(pdf, x, y, labels.payable_by, slip.debtor_lines, 6, 8)
        else:
            y = self._slip_block(pdf, x, y, labels.payable_by_blank, [], 6, 8)
            self._draw_blank_box(pdf, x, y - 20 * mm + 8, 52 * mm, 20 * mm)

        self._draw_amount_section(pdf, x, slip, labels, 6, 8, 12 * mm)

        pdf.setFont(BOLD, 6)
        pdf.drawRightString(RECEIPT_WIDTH - 5 * mm, 18 * mm, labels.acceptance_point)

    def _draw_payment_part(self, pdf, slip: PaymentSlipView, labels: DocumentLabels):
        x = PAYMENT_PART_X
        pdf.setFillColor(colors.black)
        pdf.setFont(BOLD, 11)
        pdf.drawString(x, SLIP_HEIGHT - 5 * mm - 11, labels.payment_part)

        self._draw_qr_code(pdf, slip.payload, x, SLIP_HEIGHT - 17 * mm - QR_SIZE)
        self._draw_amount_section(pdf, x, slip, labels, 8, 10, 15 * mm)

        info_x = PAYMENT_INFO_X
        info_width = PAGE_WIDTH - info_x - 5 * mm
        y = SLIP_HEIGHT - 5 * mm
        y = self._slip_block(pdf, info_x, y, labels.account_payable_to, [slip.account] + slip.creditor_lines, 8, 10)
        if slip.reference:
            y = self._slip_block(pdf, info_x, y, labels.reference, [slip.reference], 8, 10)
        if slip.message:
            y = self._slip_block(
                pdf, info_x, y, labels.additional_information,
                simpleSplit(slip.message, FONT, 10, info_width), 8, 10,
            )
        if slip.debtor_lines:
            self._slip_block(pdf, info_x, y, labels.payable_by, slip.debtor_lines, 8, 10)
        else:
            y = self._slip_block(pdf, info_x, y, labels.payable_by_blank, [], 8, 10)
            self._draw_blank_box(pdf, info_x, y - 25 * mm + 10, 65 * mm, 25 * mm)

    def _draw_qr_code(self, pdf, payload: PaymentSlipPayload, x: float, y: float):
        """QR code as vector modules with the Swiss cross; placeholder text if encoding fails"""
        try:
            matrix = self.qr_code_service.matrix(payload.qr_data())
        except Exception as e:
            logger.warning(f"QR code generation failed for account {payload.account}: {e}")
            pdf.setFillColor(colors.black)
            pdf.setFont(FONT, 8)
            pdf.drawString(x, y + QR_SIZE / 2, QR_ERROR_TEXT)
            return

        count = len(matrix)
        module = QR_SIZE / count
        pdf.setFillColor(colors.black)
        for row_index, row in enumerate(matrix):
            row_y = y + QR_SIZE - (row_index + 1) * module
            col = 0
            while col < count:
                if not row[col]:
                    col += 1
                    continue
                start = col
                while col < count and row[col]:
                    col += 1
                pdf.rect(x + start * module, row_y, (col - start) * module, module, stroke=0, fill=1)

        offset = (QR_SIZE - CROSS_SIZE) / 2
        self._draw_swiss_cross(pdf, x + offset, y + offset)

    def _draw_swiss_cross(self, pdf, x: float, y: float):
        inset = 0.5 * mm
        side = CROSS_SIZE - 2 * inset
        arm = side * 0.18
        length = side * 0.6
        cx = x + CROSS_SIZE / 2
        cy = y + CROSS_SIZE / 2

        pdf.setFillColor(colors.white)
        pdf.rect(x, y, CROSS_SIZE, CROSS_SIZE, stroke=0, fill=1)
        pdf.setFillColor(colors.black)
        pdf.rect(x + inset, y + inset, side, side, stroke=0, fill=1)
        pdf.setFillColor(colors.white)
        pdf.rect(cx - length / 2, cy - arm / 2, length, arm, stroke=0, fill=1)
        pdf.rect(cx - arm / 2, cy - length / 2, arm, length, stroke=0, fill=1)
        pdf.setFillColor(colors.black)
