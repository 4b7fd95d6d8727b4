# -*- coding: utf-8 -*-
"""
Генератор дополнительных соглашений к договорам страхования

Использование:
    python generate_agreements.py --form form.json --format docx
    python generate_agreements.py --form form.json --insured-add new.xlsx --format all
    python generate_agreements.py --amount 1500000
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from agreement import AgreementForm, AgreementType, InfoSubType, build_agreement_text
from documents import (
    create_docx_agreement,
    create_pdf_agreement,
    create_txt_agreement,
    read_insured_persons,
)
from logging_config import setup_logging
from num2text import number_to_words_ru

logger = logging.getLogger(__name__)

SCRIPT_DIR = Path(__file__).parent
PROJECT_DIR = SCRIPT_DIR.parent
OUTPUT_DIR = PROJECT_DIR / "output"

EXPORTERS = {
    'txt': create_txt_agreement,
    'docx': create_docx_agreement,
    'pdf': create_pdf_agreement,
}


def load_form(form_path, insured_add=None, insured_remove=None):
    """Прочитать форму из JSON и дополнить списками застрахованных из Excel"""
    with open(form_path, encoding='utf-8') as f:
        data = json.load(f)
    form = AgreementForm.model_validate(data)

    for excel_path, target in ((insured_add, form.insured_to_add),
                               (insured_remove, form.insured_to_remove)):
        if not excel_path:
            continue
        for row in read_insured_persons(excel_path):
            if not row['iin_valid']:
                logger.warning("%s: %s", row['person'].name, row['iin_error'])
            target.append(row['person'])

    if insured_add or insured_remove:
        form.agreement_type = AgreementType.INFO
        form.info_sub_type = InfoSubType.INSURED
    return form


def generate_agreement(form, output_format='txt', output_dir=OUTPUT_DIR):
    """
    Сформировать соглашение и сохранить в выбранных форматах

    Args:
        form: AgreementForm
        output_format: 'txt', 'docx', 'pdf' или 'all'
        output_dir: папка для результатов

    Returns:
        list: пути созданных файлов
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    text = build_agreement_text(form)

    safe_number = "".join(c for c in form.contract_number if c.isalnum() or c in '_-')[:50]
    filename = f"agreement_{safe_number or 'draft'}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

    formats = list(EXPORTERS) if output_format == 'all' else [output_format]
    created = []
    for fmt in formats:
        path = EXPORTERS[fmt](text, output_dir / f"{filename}.{fmt}")
        logger.info("Соглашение сохранено: %s", path)
        created.append(path)
    return created


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Генератор дополнительных соглашений к договорам страхования'
    )
    parser.add_argument(
        '--form', '-i',
        help='Путь к JSON файлу с данными формы'
    )
    parser.add_argument(
        '--format', '-f',
        choices=['txt', 'docx', 'pdf', 'all'],
        default='txt',
        help='Формат вывода (по умолчанию: txt)'
    )
    parser.add_argument(
        '--output', '-o',
        default=str(OUTPUT_DIR),
        help='Папка для результатов (по умолчанию: output)'
    )
    parser.add_argument(
        '--insured-add',
        help='Excel со списком включаемых застрахованных'
    )
    parser.add_argument(
        '--insured-remove',
        help='Excel со списком исключаемых застрахованных'
    )
    parser.add_argument(
        '--amount', '-a',
        type=float,
        help='Только вывести сумму прописью'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Уровень логирования (по умолчанию из LOG_LEVEL или INFO)'
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.amount is not None:
        try:
            print(number_to_words_ru(args.amount))
        except ValueError as e:
            print(f"Ошибка: {e}")
            return 1
        return 0

    if not args.form:
        parser.error('Укажите --form или --amount')

    for path in (args.form, args.insured_add, args.insured_remove):
        if path and not Path(path).exists():
            print(f"Ошибка: Файл не найден: {path}")
            return 1

    try:
        form = load_form(args.form, args.insured_add, args.insured_remove)
        created = generate_agreement(form, args.format, args.output)
    except (json.JSONDecodeError, ValidationError, ValueError) as e:
        print(f"Ошибка: {e}")
        return 1

    print(f"\nГотово! Создано файлов: {len(created)}")
    for path in created:
        print(f"   {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
