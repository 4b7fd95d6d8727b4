# -*- coding: utf-8 -*-
"""
Веб-платформа генерации дополнительных соглашений к договорам страхования
"""

import logging
import math
import os
import shutil
import sys
import uuid
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request, UploadFile, File, Form, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, FileResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from fastapi.security import HTTPBasic, HTTPBasicCredentials
import secrets

# Добавляем пути к scripts и корню проекта для импорта модулей
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from agreement import AgreementForm, build_agreement_text, calculate_new_values
from documents import (
    create_docx_agreement,
    create_pdf_agreement,
    create_txt_agreement,
    read_insured_persons,
)
from formatting import format_number_with_spaces, sanitize_number_input
from logging_config import setup_logging
from num2text import number_to_words_ru
from create_template import create_template

# ============================================================================
# КОНФИГУРАЦИЯ
# ============================================================================

APP_DIR = Path(__file__).parent
PROJECT_DIR = APP_DIR.parent  # Корневая папка проекта
UPLOAD_DIR = APP_DIR / "uploads"
GENERATED_DIR = APP_DIR / "generated"
TEMPLATES_DIR = APP_DIR / "templates"
STATIC_DIR = APP_DIR / "static"
TEMPLATE_PATH = PROJECT_DIR / "data" / "insured_template.xlsx"

# Создаём директории если их нет
UPLOAD_DIR.mkdir(exist_ok=True)
GENERATED_DIR.mkdir(exist_ok=True)

setup_logging(os.getenv("LOG_LEVEL"), os.getenv("LOG_DIR"))
logger = logging.getLogger(__name__)

# Авторизация
USERS = {
    os.getenv("APP_USERNAME", "admin"): os.getenv("APP_PASSWORD", "admin")
}

EXPORT_FORMATS = {
    'txt': (create_txt_agreement, 'text/plain; charset=utf-8'),
    'docx': (create_docx_agreement,
             'application/vnd.openxmlformats-officedocument.wordprocessingml.document'),
    'pdf': (create_pdf_agreement, 'application/pdf'),
}

# ============================================================================
# ПРИЛОЖЕНИЕ
# ============================================================================

app = FastAPI(title="Генератор дополнительных соглашений")
security = HTTPBasic()

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
templates = Jinja2Templates(directory=TEMPLATES_DIR)

# История генераций (в памяти, для production используйте БД)
generation_history = []


# ============================================================================
# АВТОРИЗАЦИЯ
# ============================================================================

def verify_credentials(credentials: HTTPBasicCredentials = Depends(security)):
    """Проверка логина и пароля"""
    username = credentials.username
    password = credentials.password

    if username in USERS and secrets.compare_digest(password, USERS[username]):
        return username

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Неверный логин или пароль",
        headers={"WWW-Authenticate": "Basic"},
    )


# ============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# ============================================================================

def render_agreement(form: AgreementForm) -> str:
    """Текст соглашения, ошибки данных -> 400"""
    try:
        return build_agreement_text(form)
    except ValueError as e:
        raise HTTPException(400, f"Ошибка формирования соглашения: {e}")


def add_to_history(form: AgreementForm, username: str, export_format: str = None):
    generation_history.append({
        'id': str(uuid.uuid4()),
        'date': datetime.now().strftime('%d.%m.%Y %H:%M'),
        'username': username,
        'contract_number': form.contract_number,
        'agreement_type': form.agreement_type.value,
        'format': export_format,
    })


# ============================================================================
# МАРШРУТЫ
# ============================================================================

@app.get("/", response_class=HTMLResponse)
async def home(request: Request, username: str = Depends(verify_credentials)):
    """Главная страница"""
    return templates.TemplateResponse(request, "index.html", {
        "username": username,
        "history": generation_history[-10:][::-1]
    })


@app.get("/num2words")
async def num2words(
    amount: float,
    currency: str = 'kzt',
    username: str = Depends(verify_credentials)
):
    """Сумма прописью"""
    try:
        text = number_to_words_ru(amount, currency)
    except ValueError as e:
        raise HTTPException(400, str(e))
    # nan и inf не сериализуются в JSON
    return {
        "amount": amount if math.isfinite(amount) else None,
        "currency": currency,
        "text": text
    }


@app.post("/sanitize")
async def sanitize(
    value: str = Form(""),
    username: str = Depends(verify_credentials)
):
    """Очистка введённой суммы"""
    cleaned = sanitize_number_input(value)
    return {"value": cleaned, "formatted": format_number_with_spaces(cleaned)}


@app.post("/generate")
async def generate(
    form: AgreementForm,
    username: str = Depends(verify_credentials)
):
    """Генерация текста соглашения"""
    # Ошибки расчёта сумм -> 400 до записи в историю
    text = render_agreement(form)
    new_sum, new_premium = calculate_new_values(form)
    add_to_history(form, username)
    logger.info("Пользователь %s сформировал соглашение по договору №%s",
                username, form.contract_number)

    return {
        "text": text,
        "new_sum": new_sum,
        "new_premium": new_premium
    }


@app.post("/export/{format_type}")
async def export_agreement(
    format_type: str,
    form: AgreementForm,
    username: str = Depends(verify_credentials)
):
    """Скачивание соглашения в формате txt/docx/pdf"""
    if format_type not in EXPORT_FORMATS:
        raise HTTPException(400, f"Неизвестный формат: {format_type}")

    text = render_agreement(form)
    exporter, media_type = EXPORT_FORMATS[format_type]

    output_id = str(uuid.uuid4())
    output_dir = GENERATED_DIR / output_id
    output_dir.mkdir(exist_ok=True)

    filename = f"agreement.{format_type}"
    file_path = exporter(text, output_dir / filename)
    add_to_history(form, username, format_type)

    return FileResponse(
        file_path,
        filename=filename,
        media_type=media_type
    )


@app.post("/upload-insured")
async def upload_insured(
    file: UploadFile = File(...),
    username: str = Depends(verify_credentials)
):
    """Загрузка списка застрахованных из Excel"""
    if not file.filename.endswith('.xlsx'):
        raise HTTPException(400, "Только Excel файлы (.xlsx)")

    session_dir = UPLOAD_DIR / str(uuid.uuid4())
    session_dir.mkdir(exist_ok=True)

    file_path = session_dir / Path(file.filename).name
    with open(file_path, "wb") as f:
        content = await file.read()
        f.write(content)

    try:
        rows = read_insured_persons(file_path)
    except Exception as e:
        logger.warning("Ошибка чтения файла %s: %s", file.filename, e)
        raise HTTPException(400, f"Ошибка чтения файла: {str(e)}")
    finally:
        shutil.rmtree(session_dir)

    return {
        "filename": file.filename,
        "count": len(rows),
        "persons": [
            {**row['person'].model_dump(), "iin_valid": row['iin_valid'], "iin_error": row['iin_error']}
            for row in rows
        ]
    }


@app.get("/history")
async def get_history(username: str = Depends(verify_credentials)):
    """Получение истории генераций"""
    return generation_history[-20:][::-1]


@app.get("/download-template")
async def download_template(username: str = Depends(verify_credentials)):
    """Скачивание шаблона Excel со списком застрахованных"""
    if not TEMPLATE_PATH.exists():
        create_template(TEMPLATE_PATH)

    return FileResponse(
        TEMPLATE_PATH,
        filename="template_insured.xlsx",
        media_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )


# ============================================================================
# ЗАПУСК
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
