import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealplan.domain.MealTemplate import MealTiming
from mealplan.utilities.constants import COST_ESTIMATE_NOTE

_HEADER_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("ALIGN", (0, 0), (-1, -1), "CENTER"),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 12),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
])


def _build(elements, pagesize) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=pagesize,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )
    doc.build(elements)
    return buf.getvalue()


def generate_pdf_for_week(weekly_plan, title: str = "Meal Plan") -> bytes:
    """One row per day, one column per meal timing used anywhere in the week."""
    styles = getSampleStyleSheet()
    used = {timing for slots in weekly_plan.values() for timing in slots}
    timings = [t.value for t in MealTiming if t.value in used]

    data = [["Day"] + [t.replace("_", " ").title() for t in timings]]
    for day, slots in weekly_plan.items():
        row = [day]
        for timing in timings:
            names = [s.get("name", "") for s in slots.get(timing, [])]
            row.append(", ".join(names) if names else "-")
        data.append(row)

    table = Table(data, repeatRows=1)
    table.setStyle(_HEADER_STYLE)
    elements = [Paragraph(title, styles["Title"]), Spacer(1, 16), table]
    return _build(elements, landscape(A4))


def generate_pdf_for_shopping_list(record) -> bytes:
    """Shopping list grouped by category with estimated costs."""
    styles = getSampleStyleSheet()
    data = [["Category", "Item", "Quantity", "Est. cost"]]
    for category, items in record.items.items():
        for item in items:
            data.append([category, item.name, f"{item.display_quantity} {item.unit}",
                         f"{item.estimated_cost:.2f}"])
    data.append(["", "Total", "", f"{record.total_estimated_cost:.2f}"])

    table = Table(data, repeatRows=1)
    table.setStyle(_HEADER_STYLE)
    elements = [
        Paragraph(record.name, styles["Title"]),
        Spacer(1, 16),
        table,
        Spacer(1, 12),
        Paragraph(COST_ESTIMATE_NOTE, styles["Italic"]),
    ]
    return _build(elements, A4)
