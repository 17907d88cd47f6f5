import io
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from nutrigen.logic.reporting.nutrition import format_bmi
from nutrigen.utilities.constants import BRAND_NAME, DEFAULT_PLAN_TITLE, DIET_NOTES, MEAL_SLOTS
from nutrigen.utilities.formatting import format_number

CJK_FONT = "STSong-Light"
pdfmetrics.registerFont(UnicodeCIDFont(CJK_FONT))


def _styles():
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("PlanTitle", parent=base["Title"], fontName=CJK_FONT),
        "heading": ParagraphStyle("PlanHeading", parent=base["Heading2"], fontName=CJK_FONT),
        "body": ParagraphStyle("PlanBody", parent=base["BodyText"], fontName=CJK_FONT, leading=14),
        "cell": ParagraphStyle("PlanCell", parent=base["BodyText"], fontName=CJK_FONT, fontSize=8, leading=10),
    }


def _meal_cell(meal, style):
    if meal is None:
        return Paragraph("-", style)
    lines = [f"{escape(meal.name)} ({format_number(meal.calories)} kcal)",
             escape(meal.ingredients_text)]
    lines += [escape(step) for step in meal.recipe_steps]
    return Paragraph("<br/>".join(lines), style)


def generate_pdf_for_plan(plan, profile):
    """Generate the poster as a PDF: header, one table row per day, shopping list, notes."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4), title=plan.title or DEFAULT_PLAN_TITLE,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )
    styles = _styles()

    badges = [profile.goal.value, f"{profile.gender.value} · {profile.age}岁",
              f"BMI: {format_bmi(profile.weight, profile.height)}"]
    if profile.has_preferences:
        badges.append("已应用偏好设置")

    elements = [
        Paragraph(escape(plan.title or DEFAULT_PLAN_TITLE), styles["title"]),
        Paragraph(escape("  |  ".join(badges)), styles["body"]),
        Spacer(1, 6),
        Paragraph(f"“{escape(plan.summary)}”", styles["body"]),
        Spacer(1, 12),
    ]

    header = ["", *[long_label for _, _, long_label in MEAL_SLOTS], "总摄入"]
    data = [[Paragraph(h, styles["cell"]) for h in header]]
    for day in plan.days:
        row = [Paragraph(escape(day.day), styles["cell"])]
        row += [_meal_cell(getattr(day, slot), styles["cell"]) for slot, _, _ in MEAL_SLOTS]
        row.append(Paragraph(format_number(day.total_calories), styles["cell"]))
        data.append(row)

    table = Table(data, repeatRows=1, colWidths=[50, 170, 170, 170, 130, 50])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F97316")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    elements.append(table)

    elements += [Spacer(1, 16), Paragraph("采购清单", styles["heading"])]
    elements.append(Paragraph("、".join(escape(i) for i in plan.shopping_list) or "-", styles["body"]))
    elements += [Spacer(1, 12), Paragraph("饮食须知", styles["heading"])]
    elements += [Paragraph(f"• {escape(note)}", styles["body"]) for note in DIET_NOTES]
    elements += [Spacer(1, 12), Paragraph(BRAND_NAME, styles["heading"])]

    doc.build(elements)
    return buf.getvalue()
