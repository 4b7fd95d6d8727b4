# -*- coding: utf-8 -*-
"""
Экспорт соглашений в TXT/Word/PDF и импорт списка застрахованных из Excel
"""

import logging
import platform
from pathlib import Path
from typing import List
from xml.sax.saxutils import escape

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Cm, Pt
from openpyxl import load_workbook
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from agreement import InsuredPerson

logger = logging.getLogger(__name__)

# Маппинг заголовков (в нижнем регистре) на поля
COLUMN_MAP = {
    '№': 'ignore',
    'п/п': 'ignore',
    '№ п/п': 'ignore',
    'фио': 'name',
    'фио застрахованного': 'name',
    'застрахованный': 'name',
    'застрахованное лицо': 'name',
    'иин': 'iin',
    'иин застрахованного': 'iin',
    'iin': 'iin',
}

_pdf_fonts = None


# ============================================================================
# ИИН И ИМПОРТ ИЗ EXCEL
# ============================================================================

def validate_iin(iin: str) -> dict:
    """Валидация ИИН"""
    if not iin:
        return {'valid': False, 'error': 'ИИН отсутствует'}

    iin_clean = iin.strip()

    if not iin_clean.isdigit():
        return {'valid': False, 'error': f'ИИН содержит недопустимые символы: {iin_clean}'}

    if len(iin_clean) != 12:
        return {'valid': False, 'error': f'ИИН должен содержать 12 цифр, найдено: {len(iin_clean)}'}

    return {'valid': True, 'error': None}


def map_columns(headers: dict) -> dict:
    """Сопоставить заголовки столбцов полям: сначала точно, затем частично"""
    col_indices = {}
    for header_lower, col_idx in headers.items():
        if header_lower in COLUMN_MAP:
            field_name = COLUMN_MAP[header_lower]
            if field_name != 'ignore' and field_name not in col_indices:
                col_indices[field_name] = col_idx
            continue
        for key, field_name in COLUMN_MAP.items():
            if key in header_lower or header_lower in key:
                if field_name != 'ignore' and field_name not in col_indices:
                    col_indices[field_name] = col_idx
                break
    return col_indices


def _cell_to_iin(value) -> str:
    # Числовая ячейка теряет ведущие нули
    if isinstance(value, (int, float)):
        return str(int(value)).zfill(12)
    return str(value).strip()


def read_insured_persons(file_path: Path) -> List[dict]:
    """
    Прочитать список застрахованных из Excel

    Returns:
        list: [{'person': InsuredPerson, 'iin_valid': bool, 'iin_error': str|None}, ...]
    """
    wb = load_workbook(file_path, read_only=True, data_only=True)
    try:
        ws = wb.active
        rows = ws.iter_rows(values_only=True)
        header_row = next(rows, None)
        if header_row is None:
            return []

        headers = {}
        for col_idx, val in enumerate(header_row):
            if val:
                headers[str(val).strip().lower()] = col_idx
        col_indices = map_columns(headers)
        if 'name' not in col_indices:
            raise ValueError('Не найден столбец с ФИО застрахованного')

        result = []
        for row in rows:
            values = {}
            for field_name, col_idx in col_indices.items():
                value = row[col_idx] if col_idx < len(row) else None
                if value is None:
                    values[field_name] = ''
                elif field_name == 'iin':
                    values[field_name] = _cell_to_iin(value)
                else:
                    values[field_name] = str(value).strip()

            if not values.get('name') and not values.get('iin'):
                continue

            person = InsuredPerson(name=values.get('name', ''), iin=values.get('iin', ''))
            iin_validation = validate_iin(person.iin)
            result.append({
                'person': person,
                'iin_valid': iin_validation['valid'],
                'iin_error': iin_validation['error'],
            })
    finally:
        wb.close()

    logger.info("Прочитано застрахованных из %s: %d", Path(file_path).name, len(result))
    return result


# ============================================================================
# ЭКСПОРТ
# ============================================================================

def create_txt_agreement(text: str, output_path: Path) -> Path:
    """Сохранение соглашения в текстовый файл"""
    output_path = Path(output_path)
    output_path.write_text(text, encoding='utf-8')
    return output_path


def create_docx_agreement(text: str, output_path: Path) -> Path:
    """Создание соглашения в формате Word"""
    doc = Document()

    for section in doc.sections:
        section.top_margin = Cm(1.5)
        section.bottom_margin = Cm(1.5)
        section.left_margin = Cm(2)
        section.right_margin = Cm(1.5)

    blocks = text.split('\n\n')

    # Заголовок
    title_lines = blocks[0].split('\n')
    for i, line in enumerate(title_lines):
        p = doc.add_paragraph()
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = p.add_run(line)
        run.bold = i == 0
        run.font.size = Pt(14 if i == 0 else 11)

    for block in blocks[1:]:
        p = doc.add_paragraph()
        p.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
        lines = block.strip('\n').split('\n')
        for i, line in enumerate(lines):
            run = p.add_run(line)
            run.font.size = Pt(11)
            if line.startswith('ПОДПИСИ СТОРОН'):
                run.bold = True
            if i < len(lines) - 1:
                run.add_break()

    output_path = Path(output_path)
    doc.save(str(output_path))
    return output_path


def register_pdf_fonts():
    """Регистрация шрифтов с поддержкой кириллицы, Helvetica при неудаче"""
    global _pdf_fonts
    if _pdf_fonts is not None:
        return _pdf_fonts

    if platform.system() == 'Windows':
        candidates = ('Arial', 'C:/Windows/Fonts/arial.ttf', 'C:/Windows/Fonts/arialbd.ttf')
    else:
        candidates = ('DejaVu', '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf',
                      '/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf')
    name, regular, bold = candidates

    try:
        pdfmetrics.registerFont(TTFont(name, regular))
        pdfmetrics.registerFont(TTFont(f'{name}-Bold', bold))
        _pdf_fonts = (name, f'{name}-Bold')
        logger.info("Зарегистрированы шрифты %s", name)
    except Exception as e:
        logger.warning("Не удалось зарегистрировать шрифт %s: %s, используется Helvetica (без кириллицы)",
                       name, e)
        _pdf_fonts = ('Helvetica', 'Helvetica-Bold')
    return _pdf_fonts


def create_pdf_agreement(text: str, output_path: Path) -> Path:
    """Создание соглашения в формате PDF"""
    font, font_bold = register_pdf_fonts()
    output_path = Path(output_path)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        rightMargin=20*mm,
        leftMargin=20*mm,
        topMargin=20*mm,
        bottomMargin=20*mm
    )

    title_style = ParagraphStyle(
        'Title',
        fontName=font_bold,
        fontSize=13,
        alignment=1,
        spaceAfter=4
    )

    body_style = ParagraphStyle(
        'Body',
        fontName=font,
        fontSize=10,
        leading=14,
        alignment=4,
        spaceAfter=8
    )

    blocks = text.split('\n\n')
    story = []
    for line in blocks[0].split('\n'):
        story.append(Paragraph(escape(line), title_style))
    story.append(Spacer(1, 10))

    for block in blocks[1:]:
        html = '<br/>'.join(escape(line) for line in block.strip('\n').split('\n'))
        story.append(Paragraph(html, body_style))

    doc.build(story)
    return output_path
