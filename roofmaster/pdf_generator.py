"""
Estimate document generator.

Renders a saved project snapshot to PDF with fpdf2 (pure Python, no system
dependencies). Sections:
1. Branded header
2. Property (address, area, squares, pitch)
3. Material selection
4. Cost breakdown (same rows and labels as the app)
5. Total + signature lines

White-labeled: company name/logo come from the contractor's branding.
"""

import base64
import binascii
import logging
from datetime import datetime
from io import BytesIO

from fpdf import FPDF

from .config import settings
from .estimator.geometry import squares_from_area
from .estimator.materials import display_name
from .estimator.presentation import breakdown_rows, format_currency

logger = logging.getLogger(__name__)

VALID_LOGO_PREFIXES = ("data:image/", "https://", "file://")

ACCENT = (255, 107, 53)
INK = (26, 35, 50)


def _safe(text) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        str(text)
        .replace("\u2022", "-")    # bullet
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .replace("\u201c", '"')
        .replace("\u201d", '"')
        .replace("\u2018", "'")
        .replace("\u2019", "'")
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


def _number(value, default=0):
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _plain_number(value) -> str:
    n = _number(value, 0.0)
    return f"{int(n):,}" if n.is_integer() else f"{n:,.2f}"


def _format_date(value) -> str:
    if isinstance(value, datetime):
        return value.strftime("%B %d, %Y")
    try:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        return dt.strftime("%B %d, %Y")
    except (ValueError, TypeError):
        return datetime.utcnow().strftime("%B %d, %Y")


def is_valid_logo_uri(uri) -> bool:
    return isinstance(uri, str) and uri.startswith(VALID_LOGO_PREFIXES)


def _logo_image(uri):
    """Embedded data: URIs become an image stream; remote logos are not fetched."""
    if not is_valid_logo_uri(uri) or not uri.startswith("data:image/") or "," not in uri:
        return None
    try:
        return BytesIO(base64.b64decode(uri.split(",", 1)[1]))
    except (binascii.Error, ValueError):
        return None


class EstimatePDF(FPDF):
    """Letter-size estimate with a branded header bar."""

    def __init__(self, company_name=""):
        super().__init__(format="letter")
        self.company_name = company_name
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # drawn once on the first page by render_header()

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 5, _safe(f"Generated by {settings.COMPANY_NAME} | Professional Roofing Estimation Platform"),
                  align="C", new_x="LMARGIN", new_y="NEXT")
        self.cell(0, 5, f"Contact: {settings.SUPPORT_EMAIL}   Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        self.set_font("Helvetica", "B", 10)
        self.set_fill_color(240, 240, 240)
        self.set_text_color(100, 100, 100)
        self.cell(0, 7, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(*INK)
        self.ln(2)

    def render_header(self, logo_uri, date_str):
        top = self.get_y()
        image = _logo_image(logo_uri)
        drawn = False
        if image is not None:
            try:
                self.image(image, x=self.l_margin, y=top, w=14, h=14)
                drawn = True
            except Exception as e:  # fpdf2 raises several types for unreadable images
                logger.info("Logo could not be embedded: %s", e)
        if not drawn:
            self.set_fill_color(*ACCENT)
            self.set_text_color(255, 255, 255)
            self.set_font("Helvetica", "B", 18)
            self.set_xy(self.l_margin, top)
            self.cell(14, 14, _safe(self.company_name[:1].upper()), fill=True, align="C")

        self.set_text_color(*INK)
        self.set_xy(self.l_margin + 18, top)
        self.set_font("Helvetica", "B", 18)
        self.cell(100, 8, _safe(self.company_name))
        self.set_font("Helvetica", "", 9)
        self.set_text_color(100, 100, 100)
        self.cell(0, 8, date_str, align="R")
        self.set_xy(self.l_margin + 18, top + 8)
        self.cell(100, 5, "Professional Roofing Estimate")
        self.set_text_color(*INK)

        self.set_y(top + 17)
        self.set_draw_color(*ACCENT)
        self.set_line_width(0.6)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_line_width(0.2)
        self.set_draw_color(0, 0, 0)
        self.ln(6)

    def detail_pair(self, label, value, width):
        x, y = self.get_x(), self.get_y()
        self.set_font("Helvetica", "", 8)
        self.set_text_color(100, 100, 100)
        self.cell(width, 4, label)
        self.set_xy(x, y + 4)
        self.set_font("Helvetica", "B", 11)
        self.set_text_color(*INK)
        self.cell(width, 6, _safe(value))
        self.set_xy(x + width, y)

    def breakdown_row(self, label, detail, amount):
        self.set_font("Helvetica", "", 9)
        self.cell(70, 6.5, _safe(label), border="B")
        self.set_text_color(110, 110, 110)
        self.cell(70, 6.5, _safe(detail), border="B")
        self.set_text_color(*INK)
        self.cell(0, 6.5, format_currency(amount), border="B", align="R", new_x="LMARGIN", new_y="NEXT")


def generate_estimate_pdf(project: dict, branding: dict = None) -> bytes:
    """
    Render a project (camelCase keys, as the app sends it) to PDF bytes.

    The breakdown section reads the stored snapshot; amounts are not
    recomputed, so the document always matches what the client saw.
    """
    project = project or {}
    branding = branding or {}

    company_name = (branding.get("companyName") or settings.COMPANY_NAME).strip()
    for ch in '<>&"\'':
        company_name = company_name.replace(ch, "")
    company_name = company_name or settings.COMPANY_NAME
    logo_uri = branding.get("logoUri") or branding.get("companyLogo")

    pdf = EstimatePDF(company_name=company_name)
    pdf.alias_nb_pages()
    pdf.add_page()

    pdf.render_header(logo_uri, _format_date(project.get("createdAt")))

    # Property
    pdf.section_header("PROPERTY ADDRESS")
    pdf.set_font("Helvetica", "B", 13)
    pdf.multi_cell(0, 6, _safe(project.get("address") or ""), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(2)
    roof_area = _number(project.get("roofArea"))
    squares = project.get("roofSquares") or squares_from_area(roof_area)
    pdf.detail_pair("Roof Area", f"{_plain_number(roof_area)} sq ft", 50)
    pdf.detail_pair("Squares", _plain_number(squares), 40)
    pdf.detail_pair("Pitch", f"{_plain_number(project.get('pitch'))}/12", 40)
    pdf.ln(14)

    # Material
    pdf.section_header("MATERIAL SELECTION")
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(120, 7, _safe(display_name(project.get("selectedMaterial"))))
    pdf.set_font("Helvetica", "", 9)
    pdf.cell(0, 7, f"Price per Square: {format_currency(project.get('materialPricePerSquare') or 0)}",
             align="R", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    # Breakdown
    pdf.section_header("COST BREAKDOWN")
    stored = project.get("microBreakdown")
    if stored:
        rows = breakdown_rows(stored, project.get("laborRate"), project.get("laborHours"))
        material_rows = [r for r in rows if r[0] not in ("Labor", "Additional Costs")]
        other_rows = [r for r in rows if r[0] in ("Labor", "Additional Costs")]

        pdf.set_font("Helvetica", "B", 9)
        pdf.cell(0, 6, "Materials", new_x="LMARGIN", new_y="NEXT")
        for label, detail, amount in material_rows:
            pdf.breakdown_row(label, detail, amount)
        if other_rows:
            pdf.ln(2)
            pdf.set_font("Helvetica", "B", 9)
            pdf.cell(0, 6, "Labor & Other", new_x="LMARGIN", new_y="NEXT")
            for label, detail, amount in other_rows:
                pdf.breakdown_row(label, detail, amount)
    else:
        pdf.set_font("Helvetica", "I", 9)
        pdf.cell(0, 6, "No breakdown available", new_x="LMARGIN", new_y="NEXT")

    # Total
    pdf.ln(3)
    pdf.set_fill_color(*INK)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font("Helvetica", "B", 13)
    pdf.cell(130, 10, "  TOTAL ESTIMATE", fill=True)
    pdf.set_text_color(*ACCENT)
    pdf.cell(0, 10, f"{format_currency(project.get('estimateTotal') or 0)}  ", fill=True, align="R",
             new_x="LMARGIN", new_y="NEXT")
    pdf.set_text_color(*INK)

    # Signatures
    pdf.ln(22)
    half = (pdf.w - pdf.l_margin - pdf.r_margin - 10) / 2
    y = pdf.get_y()
    pdf.line(pdf.l_margin, y, pdf.l_margin + half, y)
    pdf.line(pdf.l_margin + half + 10, y, pdf.w - pdf.r_margin, y)
    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(100, 100, 100)
    pdf.cell(half + 10, 6, "Contractor Signature")
    pdf.cell(half, 6, "Client Signature")
    pdf.set_text_color(0, 0, 0)

    return bytes(pdf.output())
