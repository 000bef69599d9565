import sys
import os
import logging
from dotenv import load_dotenv

from config.config import settings
from loguru import logger
from google.cloud import logging as g_logging
from google.cloud.logging.handlers import CloudLoggingHandler

load_dotenv()

class SingletonLogger():
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.setup_logger()
        return cls._instance

    def setup_logger(self):
        logger.remove()  # Drop loguru's default stderr sink

        log_level = os.getenv('LOG_LEVEL') or settings.Logging.LEVEL
        if os.getenv('DEPLOYMENT') == 'CLOUD':
            g_client = g_logging.Client(project=settings.GCP.PROJECT_ID)
            g_client.setup_logging(log_level=logging.WARNING)
            logger.add(
                sink=CloudLoggingHandler(client=g_client, name=settings.Logging.CLOUD_LOG_NAME),
                level=log_level,
                format=settings.Logging.CLOUD_FORMAT
            )
        else:
            logger.add(sink=sys.stdout, level=log_level, format=settings.Logging.FORMAT)

    def get_logger(self):
        return logger

logger = SingletonLogger().get_logger()
