# -*- coding: utf-8 -*-
"""
Создание шаблона Excel со списком застрахованных лиц
"""
import sys
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill

DEFAULT_PATH = Path(__file__).parent / "data" / "insured_template.xlsx"

# Заголовки столбцов (распознаются при загрузке)
HEADERS = [
    "№ п/п",
    "ФИО застрахованного",
    "ИИН",
]

EXAMPLE_DATA = [
    [1, "Иванов Иван Иванович", "850101300123"],
    [2, "Петрова Мария Петровна", "900215400456"],
]


def create_template(output_path=DEFAULT_PATH):
    """Создать шаблон и вернуть путь к нему"""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    ws = wb.active
    ws.title = "Застрахованные"

    for col, header in enumerate(HEADERS, start=1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = Font(bold=True, size=11)
        cell.fill = PatternFill(start_color="D3D3D3", end_color="D3D3D3", fill_type="solid")
        cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)

    ws.column_dimensions['A'].width = 8   # № п/п
    ws.column_dimensions['B'].width = 40  # ФИО
    ws.column_dimensions['C'].width = 18  # ИИН

    ws.row_dimensions[1].height = 30

    for row_idx, data in enumerate(EXAMPLE_DATA, start=2):
        for col_idx, value in enumerate(data, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            if col_idx == 3:
                # ИИН как текст, чтобы Excel не срезал ведущие нули
                cell.number_format = '@'

    wb.save(output_path)
    wb.close()
    return output_path


if __name__ == '__main__':
    path = create_template(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_PATH)
    print(f"Шаблон создан: {path}")
