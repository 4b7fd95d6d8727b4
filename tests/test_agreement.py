"""
Unit tests for agreement calculations and text rendering.

Tests focus on:
- New sum / premium calculation
- Clause numbering
- Amount rendering with words
- Insured persons lists
"""
import pytest

from agreement import (
    AgreementForm,
    AgreementType,
    InfoSubType,
    MonetaryOperation,
    amount_to_str,
    build_agreement_text,
    calculate_new_values,
    format_amount,
    parse_amount,
)


class TestAmounts:
    """Tests for amount parsing and formatting helpers"""

    @pytest.mark.parametrize("value,expected", [
        ("", 0.0),
        (".", 0.0),
        ("12.5", 12.5),
        ("1000", 1000.0),
        (None, 0.0),
    ])
    def test_parse_amount(self, value, expected):
        assert parse_amount(value) == expected

    def test_parse_amount_overflow(self):
        """A digit string beyond float range is an error, not an empty amount"""
        with pytest.raises(ValueError):
            parse_amount("9" * 400)

    def test_amount_to_str(self):
        assert amount_to_str(1500.0) == "1500"
        assert amount_to_str(1500.5) == "1500.5"
        assert amount_to_str(-200.0) == "-200"

    def test_format_amount(self):
        assert format_amount("1000") == "1 000 (одна тысяча тенге)"
        assert format_amount("2500.75") == "2 500.75 (две тысячи пятьсот тенге)"

    def test_form_sanitizes_amounts(self):
        form = AgreementForm(current_sum="1 000,5", delta_sum=1500, current_premium=None)
        assert form.current_sum == "1000.5"
        assert form.delta_sum == "1500"
        assert form.current_premium == ""


class TestCalculateNewValues:
    """Tests for calculate_new_values"""

    def test_increase_and_decrease(self, monetary_form):
        new_sum, new_premium = calculate_new_values(monetary_form)
        assert new_sum == 1500000.0
        assert new_premium == 7500.0

    def test_empty_fields_are_zero(self):
        assert calculate_new_values(AgreementForm()) == (0.0, 0.0)

    def test_decrease_below_zero(self):
        form = AgreementForm(current_sum="100", delta_sum="300",
                             sum_operation=MonetaryOperation.DECREASE)
        assert calculate_new_values(form)[0] == -200.0

    def test_sum_overflow(self):
        form = AgreementForm(current_sum="1" + "0" * 308, delta_sum="1" + "0" * 308)
        with pytest.raises(ValueError):
            calculate_new_values(form)


class TestMonetaryAgreement:
    """Tests for monetary agreement text"""

    def test_header(self, monetary_form, fixed_today):
        text = build_agreement_text(monetary_form, today=fixed_today)
        assert text.startswith("ДОПОЛНИТЕЛЬНОЕ СОГЛАШЕНИЕ №_____\n"
                               "к Договору добровольного страхования №123 от «05» января 2024 г.")
        assert "«15» марта 2024 г." in text
        assert "[Город]" in text

    def test_basis_clause_is_first(self, monetary_form, fixed_today):
        text = build_agreement_text(monetary_form, today=fixed_today)
        assert ("\n1. Настоящее Соглашение заключено на основании Письма Страхователя "
                "№ 15 от «10» марта 2024 г.") in text

    def test_sum_clause(self, monetary_form, fixed_today):
        text = build_agreement_text(monetary_form, today=fixed_today)
        assert ("\n2. Внести изменения в пункт Договора, касающийся страховой суммы") in text
        assert ("«увеличить страховую сумму по Договору на 500 000 (пятьсот тысяч тенге). "
                "Новая страховая сумма по Договору устанавливается в размере "
                "1 500 000 (один миллион пятьсот тысяч тенге).».") in text

    def test_premium_clause_and_refund_deadline(self, monetary_form, fixed_today):
        text = build_agreement_text(monetary_form, today=fixed_today)
        assert ("\n3. Внести изменения в пункт Договора, касающийся страховой премии") in text
        assert "«уменьшить страховую премию по Договору на 2 500 (две тысячи пятьсот тенге)." in text
        assert "7 500 (семь тысяч пятьсот тенге)" in text
        assert ("\n4. Сумма, подлежащая возврату, должна быть перечислена "
                "Страхователем/Страховщиком в срок до «01» апреля 2024 г.") in text

    def test_closing_clauses_and_signatures(self, monetary_form, fixed_today):
        text = build_agreement_text(monetary_form, today=fixed_today)
        assert "\n5. Все остальные условия Договора" in text
        assert "\n6. Настоящее Соглашение вступает в силу" in text
        assert "\n7. Настоящее Соглашение составлено в 2 (двух) экземплярах" in text
        assert "\n\n\nПОДПИСИ СТОРОН:" in text
        assert text.endswith("Страховщик: _____________________\n\nСтрахователь: ___________________")

    def test_payment_deadline_for_increase(self, monetary_form, fixed_today):
        monetary_form.premium_operation = MonetaryOperation.INCREASE
        text = build_agreement_text(monetary_form, today=fixed_today)
        assert "Сумма, подлежащая доплате" in text
        assert "12 500 (двенадцать тысяч пятьсот тенге)" in text

    def test_without_basis_numbering_starts_at_one(self, monetary_form, fixed_today):
        monetary_form.basis_document = ""
        text = build_agreement_text(monetary_form, today=fixed_today)
        assert "заключено на основании" not in text
        assert "\n1. Внести изменения в пункт Договора, касающийся страховой суммы" in text

    def test_unchanged_sum_is_skipped(self, monetary_form, fixed_today):
        monetary_form.is_sum_unchanged = True
        text = build_agreement_text(monetary_form, today=fixed_today)
        assert "страховой суммы" not in text
        assert "\n2. Внести изменения в пункт Договора, касающийся страховой премии" in text

    def test_no_deadline_clause_without_date(self, monetary_form, fixed_today):
        monetary_form.payment_deadline = ""
        text = build_agreement_text(monetary_form, today=fixed_today)
        assert "подлежащая" not in text
        assert "\n4. Все остальные условия Договора" in text

    def test_new_sum_too_large(self, monetary_form, fixed_today):
        monetary_form.delta_sum = "1000000000000000"
        with pytest.raises(ValueError):
            build_agreement_text(monetary_form, today=fixed_today)

    def test_delta_beyond_float_range(self, fixed_today):
        form = AgreementForm(current_sum="1", delta_sum="9" * 400)
        with pytest.raises(ValueError):
            build_agreement_text(form, today=fixed_today)


class TestInfoAgreement:
    """Tests for informational agreement text"""

    def test_general_text(self, fixed_today):
        form = AgreementForm(
            agreement_type=AgreementType.INFO,
            info_sub_type=InfoSubType.GENERAL,
            general_info_text="Стороны договорились изменить порядок оплаты страховой премии.",
            basis_document="Письма",
        )
        text = build_agreement_text(form, today=fixed_today)
        assert "\n1. Стороны договорились изменить порядок оплаты страховой премии." in text
        assert "\n2. Все остальные условия Договора" in text
        assert "заключено на основании" not in text

    def test_general_without_text(self, fixed_today):
        form = AgreementForm(agreement_type=AgreementType.INFO)
        text = build_agreement_text(form, today=fixed_today)
        assert "\n1. Все остальные условия Договора" in text

    def test_insured_lists(self, insured_form, fixed_today):
        text = build_agreement_text(insured_form, today=fixed_today)
        assert ("\n1. Включить в список Застрахованных по Договору следующих лиц:\n"
                "- Иванов Иван Иванович, ИИН 850101300123\n"
                "- Сидоров Петр, ИИН 900215400456") in text
        assert ("\n2. Исключить из списка Застрахованных по Договору следующих лиц:\n"
                "- Петрова Мария, ИИН 870505400789") in text
        assert "\n3. Все остальные условия Договора" in text

    def test_monetary_fields_ignored(self, insured_form, fixed_today):
        insured_form.delta_sum = "1000"
        text = build_agreement_text(insured_form, today=fixed_today)
        assert "страховой суммы" not in text
