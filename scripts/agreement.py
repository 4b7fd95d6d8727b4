# -*- coding: utf-8 -*-
"""
Формирование текста дополнительного соглашения к договору страхования
"""

import logging
import math
import uuid
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from formatting import format_date_ru, format_number_with_spaces, sanitize_number_input
from num2text import number_to_words_ru

logger = logging.getLogger(__name__)

DEFAULT_CITY = '[Город]'

PREAMBLE = (
    "[Наименование Страховщика], именуемое в дальнейшем «Страховщик», в лице [ФИО, должность], "
    "действующего на основании [документ], с одной стороны, и [Наименование Страхователя], "
    "именуемое в дальнейшем «Страхователь», в лице [ФИО, должность], действующего на основании "
    "[документ], с другой стороны, совместно именуемые «Стороны», заключили настоящее "
    "Дополнительное соглашение (далее – «Соглашение») о нижеследующем:"
)

CLOSING_CLAUSES = (
    "Все остальные условия Договора, не затронутые настоящим Соглашением, остаются неизменными, "
    "и Стороны подтверждают по ним свои обязательства.",
    "Настоящее Соглашение вступает в силу с даты подписания настоящего дополнительного "
    "соглашения и является неотъемлемой частью Договора.",
    "Настоящее Соглашение составлено в 2 (двух) экземплярах, имеющих одинаковую юридическую "
    "силу, по одному для каждой из Сторон.",
)


# ============================================================================
# МОДЕЛЬ ФОРМЫ
# ============================================================================

class AgreementType(str, Enum):
    MONETARY = 'monetary'
    INFO = 'info'


class InfoSubType(str, Enum):
    GENERAL = 'general'
    INSURED = 'insured'


class MonetaryOperation(str, Enum):
    INCREASE = 'increase'
    DECREASE = 'decrease'


class InsuredPerson(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ''
    iin: str = ''


class AgreementForm(BaseModel):
    """Данные формы дополнительного соглашения"""

    contract_number: str = ''
    contract_date: str = ''
    insurance_type: str = ''
    agreement_type: AgreementType = AgreementType.MONETARY

    # Денежное соглашение
    basis_document: str = ''
    basis_document_number: str = ''
    basis_document_date: str = ''
    sum_operation: MonetaryOperation = MonetaryOperation.INCREASE
    current_sum: str = ''
    delta_sum: str = ''
    is_sum_unchanged: bool = False
    premium_operation: MonetaryOperation = MonetaryOperation.INCREASE
    current_premium: str = ''
    delta_premium: str = ''
    is_premium_unchanged: bool = False
    payment_deadline: str = ''

    # Информационное соглашение
    info_sub_type: InfoSubType = InfoSubType.GENERAL
    general_info_text: str = ''
    insured_to_add: List[InsuredPerson] = Field(default_factory=list)
    insured_to_remove: List[InsuredPerson] = Field(default_factory=list)

    @field_validator('current_sum', 'delta_sum', 'current_premium', 'delta_premium', mode='before')
    @classmethod
    def _sanitize_amount(cls, value):
        if value is None:
            return ''
        return sanitize_number_input(str(value))


# ============================================================================
# РАСЧЁТЫ
# ============================================================================

def parse_amount(value) -> float:
    """Число из строки суммы, 0 для пустого или некорректного ввода"""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount):
        raise ValueError(f"Сумма слишком большая: {str(value)[:20]}...")
    return amount


def _apply_operation(current: float, delta: float, operation: MonetaryOperation) -> float:
    if operation == MonetaryOperation.INCREASE:
        return current + delta
    return current - delta


def calculate_new_values(form: AgreementForm) -> Tuple[float, float]:
    """Новая страховая сумма и новая премия с учётом операций"""
    new_sum = _apply_operation(
        parse_amount(form.current_sum), parse_amount(form.delta_sum), form.sum_operation
    )
    new_premium = _apply_operation(
        parse_amount(form.current_premium), parse_amount(form.delta_premium), form.premium_operation
    )
    if not (math.isfinite(new_sum) and math.isfinite(new_premium)):
        raise ValueError("Итоговая сумма слишком большая")
    return new_sum, new_premium


def amount_to_str(value: float) -> str:
    """Строковое представление суммы без лишнего ".0" у целых"""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_amount(num_str: str) -> str:
    """Сумма цифрами с разрядами и прописью: 1 000 (одна тысяча тенге)"""
    words = number_to_words_ru(parse_amount(num_str))
    return f"{format_number_with_spaces(num_str)} ({words})"


def format_person(person: InsuredPerson) -> str:
    return f"- {person.name.strip()}, ИИН {person.iin.strip()}"


# ============================================================================
# ТЕКСТ СОГЛАШЕНИЯ
# ============================================================================

def build_agreement_text(form: AgreementForm, today: Optional[date] = None,
                         city: str = DEFAULT_CITY) -> str:
    """
    Сформировать текст дополнительного соглашения

    Args:
        form: данные формы
        today: дата составления (по умолчанию сегодня)
        city: город составления

    Returns:
        str: текст соглашения
    """
    today = today or date.today()
    new_sum, new_premium = calculate_new_values(form)
    is_monetary = form.agreement_type == AgreementType.MONETARY

    parts = [
        f"ДОПОЛНИТЕЛЬНОЕ СОГЛАШЕНИЕ №_____\n"
        f"к Договору {form.insurance_type} страхования №{form.contract_number} "
        f"от {format_date_ru(form.contract_date)}",
        f"\n{city:<107}{format_date_ru(today)}",
        f"\n{PREAMBLE}",
    ]

    counter = 1
    if is_monetary and form.basis_document:
        parts.append(
            f"\n{counter}. Настоящее Соглашение заключено на основании {form.basis_document} "
            f"№ {form.basis_document_number} от {format_date_ru(form.basis_document_date)}."
        )
        counter += 1

    def add_clause(text):
        nonlocal counter
        parts.append(f"\n{counter}. {text}")
        counter += 1

    if is_monetary:
        if not form.is_sum_unchanged and form.delta_sum:
            operation = 'увеличить' if form.sum_operation == MonetaryOperation.INCREASE else 'уменьшить'
            add_clause(
                "Внести изменения в пункт Договора, касающийся страховой суммы, и изложить его "
                f"в следующей редакции: «{operation} страховую сумму по Договору на "
                f"{format_amount(form.delta_sum)}. Новая страховая сумма по Договору "
                f"устанавливается в размере {format_amount(amount_to_str(new_sum))}.»."
            )
        if not form.is_premium_unchanged and form.delta_premium:
            increase = form.premium_operation == MonetaryOperation.INCREASE
            operation = 'увеличить' if increase else 'уменьшить'
            add_clause(
                "Внести изменения в пункт Договора, касающийся страховой премии, и изложить его "
                f"в следующей редакции: «{operation} страховую премию по Договору на "
                f"{format_amount(form.delta_premium)}. Новая страховая премия по Договору "
                f"устанавливается в размере {format_amount(amount_to_str(new_premium))}.»."
            )
            if form.payment_deadline:
                payment = 'доплате' if increase else 'возврату'
                add_clause(
                    f"Сумма, подлежащая {payment}, должна быть перечислена "
                    f"Страхователем/Страховщиком в срок до {format_date_ru(form.payment_deadline)}."
                )
    elif form.info_sub_type == InfoSubType.GENERAL:
        if form.general_info_text:
            add_clause(form.general_info_text)
    else:
        if form.insured_to_add:
            people = '\n'.join(format_person(p) for p in form.insured_to_add)
            add_clause(f"Включить в список Застрахованных по Договору следующих лиц:\n{people}")
        if form.insured_to_remove:
            people = '\n'.join(format_person(p) for p in form.insured_to_remove)
            add_clause(f"Исключить из списка Застрахованных по Договору следующих лиц:\n{people}")

    for clause in CLOSING_CLAUSES:
        add_clause(clause)

    parts.append("\n\nПОДПИСИ СТОРОН:")
    parts.append("\nСтраховщик: _____________________")
    parts.append("\nСтрахователь: ___________________")

    logger.debug("Сформировано соглашение по договору №%s, пунктов: %d",
                 form.contract_number, counter - 1)
    return '\n'.join(parts)
