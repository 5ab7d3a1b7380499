import logging
from pythonjsonlogger import jsonlogger
from app.core.config import get_settings


def setup_logger():
    settings = get_settings()
    logHandler = logging.StreamHandler()
    if settings.log_json:
        formatter = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s',
                                             rename_fields={'levelname': 'level', 'asctime': 'timestamp'})
    else:
        formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')
    logHandler.setFormatter(formatter)
    logger = logging.getLogger("app")
    logger.handlers = [logHandler]
    logger.setLevel(settings.log_level.upper())
