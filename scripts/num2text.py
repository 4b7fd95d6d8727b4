# -*- coding: utf-8 -*-
"""
Модуль для конвертации чисел в текст на русском языке
Поддержка валюты: тенге (kzt)
"""

import math
from types import MappingProxyType

MASCULINE = 'm'
FEMININE = 'f'

UNITS = ('', 'один', 'два', 'три', 'четыре', 'пять', 'шесть', 'семь', 'восемь', 'девять')

UNITS_FEMININE = MappingProxyType({1: 'одна', 2: 'две'})

TEENS = (
    'десять', 'одиннадцать', 'двенадцать', 'тринадцать', 'четырнадцать',
    'пятнадцать', 'шестнадцать', 'семнадцать', 'восемнадцать', 'девятнадцать'
)

TENS = (
    '', '', 'двадцать', 'тридцать', 'сорок', 'пятьдесят',
    'шестьдесят', 'семьдесят', 'восемьдесят', 'девяносто'
)

HUNDREDS = (
    '', 'сто', 'двести', 'триста', 'четыреста', 'пятьсот',
    'шестьсот', 'семьсот', 'восемьсот', 'девятьсот'
)

# (делитель, род, (единственное, 2-4, множественное)) - от большего к меньшему
SCALES = (
    (10 ** 12, MASCULINE, ('триллион', 'триллиона', 'триллионов')),
    (10 ** 9, MASCULINE, ('миллиард', 'миллиарда', 'миллиардов')),
    (10 ** 6, MASCULINE, ('миллион', 'миллиона', 'миллионов')),
    (10 ** 3, FEMININE, ('тысяча', 'тысячи', 'тысяч')),
)

MAX_AMOUNT = 10 ** 15 - 1

CURRENCIES = MappingProxyType({
    'kzt': ('тенге', 'тенге', 'тенге'),
})

ZERO = 'ноль'
MINUS = 'минус'


def get_plural_form(n, forms):
    """Получить правильную форму слова в зависимости от числа"""
    n = abs(n) % 100
    if 4 < n < 20:
        return forms[2]
    n = n % 10
    if n == 1:
        return forms[0]
    if 2 <= n <= 4:
        return forms[1]
    return forms[2]


def convert_group(n, gender=MASCULINE):
    """Конвертировать число от 0 до 999 в текст"""
    if not 0 <= n <= 999:
        raise ValueError(f"Группа должна быть в диапазоне 0..999: {n}")
    if n == 0:
        return ''

    result = []

    # Сотни
    hundreds = n // 100
    if hundreds:
        result.append(HUNDREDS[hundreds])

    # Десятки и единицы
    tens = (n % 100) // 10
    ones = n % 10

    if tens == 1:
        result.append(TEENS[ones])
    else:
        if tens > 1:
            result.append(TENS[tens])
        if ones:
            if gender == FEMININE and ones in UNITS_FEMININE:
                result.append(UNITS_FEMININE[ones])
            else:
                result.append(UNITS[ones])

    return ' '.join(result)


def split_groups(n):
    """
    Разложить неотрицательное целое на группы по шкале

    Returns:
        tuple: ([(значение группы, род, формы), ...], последняя группа 0..999)
    """
    if n > MAX_AMOUNT:
        raise ValueError(f"Число слишком большое (максимум {MAX_AMOUNT}): {n}")

    groups = []
    for divisor, gender, forms in SCALES:
        groups.append((n // divisor % 1000, gender, forms))
    return groups, n % 1000


def _integer_words(n):
    """Слова для целого n > 0 без валюты"""
    groups, rest = split_groups(n)

    parts = []
    for value, gender, forms in groups:
        if value:
            parts.append(f"{convert_group(value, gender)} {get_plural_form(value, forms)}")
    if rest:
        parts.append(convert_group(rest, MASCULINE))

    return ' '.join(p for p in parts if p.strip())


def number_to_words_ru(amount, currency='kzt'):
    """
    Конвертировать сумму в текст с названием валюты

    Дробная часть отбрасывается, знак сохраняется. Название валюты
    согласуется с последней группой (0..999), а не со старшими разрядами:
    1000 -> "одна тысяча тенге".

    Args:
        amount: число (int, float, Decimal)
        currency: код валюты, поддерживается только 'kzt'

    Returns:
        str: сумма прописью или '' для NaN и бесконечности
    """
    if currency not in CURRENCIES:
        raise ValueError(f"Неподдерживаемая валюта: {currency}")
    unit_forms = CURRENCIES[currency]

    if isinstance(amount, float) and not math.isfinite(amount):
        return ''
    if amount != amount:
        # Decimal('NaN')
        return ''
    try:
        is_negative = amount < 0
        num = math.floor(abs(amount))
    except (OverflowError, ValueError):
        return ''

    if num == 0:
        return f"{ZERO} {get_plural_form(0, unit_forms)}"

    words = _integer_words(num)
    rest = num % 1000
    result = f"{words} {get_plural_form(rest, unit_forms)}"

    return (f"{MINUS} " if is_negative else '') + result.strip()


if __name__ == '__main__':
    test_numbers = [
        0, 1, 2, 11, 21, 100, 101, 111, 121, 200,
        1000, 1001, 2000, 5000, 21000,
        1000000, 7652278, 6551320, 799832, 301126
    ]

    print("Тестирование перевода сумм прописью:\n")
    for num in test_numbers:
        print(f"{num:>12,} -> {number_to_words_ru(num)}")
