# -*- coding: utf-8 -*-
"""
Форматирование пользовательского ввода: суммы и даты
"""

import logging
import re
from datetime import date, datetime

logger = logging.getLogger(__name__)

MONTHS_GENITIVE = (
    'января', 'февраля', 'марта', 'апреля', 'мая', 'июня',
    'июля', 'августа', 'сентября', 'октября', 'ноября', 'декабря'
)

_NOT_NUMERIC = re.compile(r'[^0-9.,]')
_THOUSANDS = re.compile(r'\B(?=(\d{3})+(?!\d))')
_ISO_DATE = re.compile(r'\d{4}-\d{2}-\d{2}')


def sanitize_number_input(value):
    """Оставить только цифры и одну десятичную точку (запятая -> точка)"""
    cleaned = _NOT_NUMERIC.sub('', value).replace(',', '.')
    parts = cleaned.split('.')
    if len(parts) > 2:
        return parts[0] + '.' + ''.join(parts[1:])
    return cleaned


def format_number_with_spaces(num_str):
    """Разделить разряды целой части пробелами: "1000000.50" -> "1 000 000.50" """
    if not num_str:
        return ''
    parts = num_str.split('.')
    integer_part = _THOUSANDS.sub(' ', parts[0])
    if len(parts) > 1:
        return f"{integer_part}.{parts[1]}"
    return integer_part


def format_date_ru(date_str):
    """
    Форматировать дату YYYY-MM-DD в вид «DD» месяца YYYY г.

    При ошибке разбора возвращает исходную строку без изменений.
    """
    if isinstance(date_str, date):
        dt = date_str
    else:
        if not date_str:
            return ''
        try:
            if not _ISO_DATE.fullmatch(str(date_str)):
                raise ValueError("ожидается формат YYYY-MM-DD")
            # Полдень, чтобы часовой пояс не сдвигал календарный день
            dt = datetime.strptime(f"{date_str}T12:00:00", '%Y-%m-%dT%H:%M:%S')
        except (TypeError, ValueError) as e:
            logger.warning("Ошибка форматирования даты %r: %s", date_str, e)
            return date_str

    return f"«{dt.day:02d}» {MONTHS_GENITIVE[dt.month - 1]} {dt.year} г."
