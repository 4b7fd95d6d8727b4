# -*- coding: utf-8 -*-
"""
Настройка логирования для веб-приложения и скриптов
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_level=None, log_dir=None, service_name='agreements'):
    """
    Настроить корневой логгер

    Args:
        log_level: уровень (по умолчанию из LOG_LEVEL или INFO)
        log_dir: папка для файлов логов (по умолчанию из LOG_DIR, иначе только консоль)
        service_name: имя файла лога

    Returns:
        logging.Logger: корневой логгер
    """
    log_level = log_level or os.getenv('LOG_LEVEL', 'INFO')
    log_dir = log_dir or os.getenv('LOG_DIR')
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_dir:
        logs_path = Path(log_dir)
        logs_path.mkdir(parents=True, exist_ok=True)

        # Ротация логов по дням (максимум 30 дней)
        daily_handler = logging.handlers.TimedRotatingFileHandler(
            filename=logs_path / f"{service_name}.log",
            when='midnight',
            interval=1,
            backupCount=30,
            encoding='utf-8'
        )
        daily_handler.setFormatter(formatter)
        daily_handler.setLevel(level)
        root_logger.addHandler(daily_handler)

    return root_logger
