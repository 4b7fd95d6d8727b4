"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date

from openpyxl import Workbook

from agreement import AgreementForm, AgreementType, InfoSubType, InsuredPerson, MonetaryOperation


@pytest.fixture
def fixed_today():
    """Fixed date for deterministic agreement headers"""
    return date(2024, 3, 15)


@pytest.fixture
def monetary_form():
    """Monetary agreement: sum increase, premium decrease with deadline"""
    return AgreementForm(
        contract_number="123",
        contract_date="2024-01-05",
        insurance_type="добровольного",
        agreement_type=AgreementType.MONETARY,
        basis_document="Письма Страхователя",
        basis_document_number="15",
        basis_document_date="2024-03-10",
        sum_operation=MonetaryOperation.INCREASE,
        current_sum="1000000",
        delta_sum="500000",
        premium_operation=MonetaryOperation.DECREASE,
        current_premium="10000",
        delta_premium="2500",
        payment_deadline="2024-04-01",
    )


@pytest.fixture
def insured_form():
    """Info agreement changing the list of insured persons"""
    return AgreementForm(
        contract_number="77-А",
        contract_date="2023-12-31",
        insurance_type="медицинского",
        agreement_type=AgreementType.INFO,
        info_sub_type=InfoSubType.INSURED,
        insured_to_add=[
            InsuredPerson(name=" Иванов Иван Иванович ", iin="850101300123"),
            InsuredPerson(name="Сидоров Петр", iin="900215400456"),
        ],
        insured_to_remove=[InsuredPerson(name="Петрова Мария", iin="870505400789")],
    )


@pytest.fixture
def insured_excel(tmp_path):
    """Excel file with insured persons, numeric and text IIN cells"""
    path = tmp_path / "insured.xlsx"
    wb = Workbook()
    ws = wb.active
    ws.append(["№", "ФИО застрахованного лица", "ИИН"])
    ws.append([1, "Иванов Иван Иванович", 850101300123])
    ws.append([2, "Петрова Мария", "12345"])
    ws.append([3, None, None])
    ws.append([4, "Ахметов Ержан", 12345678901])
    wb.save(path)
    wb.close()
    return path
