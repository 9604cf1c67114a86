"""PDF generation for exam seating documents."""
from io import BytesIO
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, PageBreak
from reportlab.lib.enums import TA_CENTER
import xml.sax.saxutils as saxutils

from utils.seating_grid import build_seating_grid

# Usable landscape A4 width with 0.5 inch margins
GRID_WIDTH = 10.5 * inch


def _esc(value):
    return saxutils.escape(str(value if value is not None else ''))


def _supervisor_label(supervisor):
    """Teacher name with id for directory refs; plain identifiers as given."""
    if not supervisor:
        return '-'
    if isinstance(supervisor, dict):
        name = supervisor.get('name') or ''
        teacher_id = supervisor.get('teacherId')
        return f"{name} ({teacher_id})" if teacher_id else name
    return str(supervisor)


def _grid_table(hall, styles):
    """Seat grid: one header row of column numbers, one row per hall row."""
    grid = build_seating_grid(hall)
    columns = len(grid[0]) if grid else 0
    cell_style = ParagraphStyle('SeatCell', parent=styles['Normal'], fontSize=7, leading=8, alignment=TA_CENTER)

    data = [['Row / Col'] + [str(c) for c in range(1, columns + 1)]]
    for r, row in enumerate(grid, start=1):
        cells = [str(r)]
        for student in row:
            if student is None:
                cells.append('')
                continue
            text = (
                f"<b>{_esc(student.get('seatNumber', ''))}</b><br/>"
                f"{_esc(student.get('name', ''))}<br/>"
                f"<font size='6'>{_esc(student.get('class', ''))}{_esc(student.get('section', ''))}</font>"
            )
            cells.append(Paragraph(text, cell_style))
        data.append(cells)

    first_col = 0.6 * inch
    col_width = max(0.5 * inch, (GRID_WIDTH - first_col) / max(1, columns))
    t = Table(data, colWidths=[first_col] + [col_width] * columns, repeatRows=1)
    t.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#2980b9')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('BACKGROUND', (0, 1), (0, -1), colors.HexColor('#ecf0f1')),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('TOPPADDING', (0, 0), (-1, -1), 3),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 3),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    return t


def _student_list_table(hall):
    data = [['Seat #', 'Row', 'Column', 'Student Name', 'Student ID', 'Class']]
    for s in hall.get('students') or []:
        data.append([
            str(s.get('seatNumber', '')),
            str(s.get('row') or '-'),
            str(s.get('column') or '-'),
            str(s.get('name', '')),
            str(s.get('studentId', '')),
            f"{s.get('class', '')}{s.get('section', '') or ''}",
        ])
    t = Table(data, colWidths=[0.7*inch, 0.6*inch, 0.7*inch, 3*inch, 1.6*inch, 1.2*inch], repeatRows=1)
    t.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#27ae60')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (0, 0), (2, -1), 'CENTER'),
        ('ALIGN', (3, 0), (-1, -1), 'LEFT'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    return t


def create_seating_pdf(record):
    """Seating chart for a stored arrangement: an overview page, then one page per hall."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=landscape(A4),
        leftMargin=0.5*inch, rightMargin=0.5*inch, topMargin=0.5*inch, bottomMargin=0.5*inch,
    )
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'CustomTitle',
        parent=styles['Heading1'],
        fontSize=14,
        alignment=TA_CENTER,
        spaceAfter=8
    )
    sub_style = ParagraphStyle(
        'SubTitle',
        parent=styles['Normal'],
        fontSize=10,
        alignment=TA_CENTER,
        spaceAfter=12
    )

    exam_name = _esc(record.get('examName', ''))
    exam_date = _esc(record.get('examDate', ''))
    halls = record.get('examHalls') or []
    summary = record.get('summary') or {}

    story = []
    story.append(Paragraph("EXAM SEATING ARRANGEMENT", title_style))
    story.append(Paragraph(f"<b>Exam:</b> {exam_name} | <b>Date:</b> {exam_date}", sub_style))
    story.append(Paragraph(
        f"<b>Classes:</b> {_esc(', '.join(record.get('classes') or []))} | "
        f"<b>Students:</b> {record.get('totalStudents', 0)} | "
        f"<b>Utilization:</b> {_esc(summary.get('utilizationRate', ''))}",
        sub_style
    ))
    story.append(Spacer(1, 0.2*inch))

    data = [['Hall', 'Capacity', 'Layout', 'Students', 'Supervisor']]
    for hall in halls:
        data.append([
            str(hall.get('hallName', '')),
            str(hall.get('capacity', '')),
            f"{hall.get('rows', '-')} x {hall.get('columns', '-')}",
            str(hall.get('totalStudents', 0)),
            _supervisor_label(hall.get('supervisor')),
        ])
    t = Table(data, colWidths=[2*inch, 1*inch, 1.2*inch, 1*inch, 2.5*inch])
    t.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#2c3e50')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('BACKGROUND', (0, 1), (-1, -1), colors.HexColor('#ecf0f1')),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    story.append(t)

    for hall in halls:
        story.append(PageBreak())
        story.append(Paragraph(
            f"<b>{_esc(hall.get('hallName', ''))}</b> | "
            f"{hall.get('totalStudents', 0)} / {hall.get('capacity', 0)} students | "
            f"Supervisor: {_esc(_supervisor_label(hall.get('supervisor')))}",
            styles['Heading2']
        ))
        story.append(Paragraph(f"Exam: {exam_name} | Date: {exam_date}", styles['Normal']))
        story.append(Spacer(1, 0.15*inch))
        if not hall.get('students'):
            story.append(Paragraph("No students seated in this hall.", styles['Normal']))
            continue
        story.append(_grid_table(hall, styles))
        story.append(Spacer(1, 0.25*inch))
        story.append(Paragraph("<b>Student List</b>", styles['Heading3']))
        story.append(_student_list_table(hall))

    doc.build(story)
    buffer.seek(0)
    return buffer
