import logging
import sys
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = self.formatTime(record, self.datefmt)
        if log_record.get('level'):
            log_record['level'] = log_record['level'].upper()
        else:
            log_record['level'] = record.levelname

        log_record['module'] = record.module
        log_record['lineno'] = record.lineno


def setup_logging(log_level_str: str = "INFO"):
    """
    Configures structured JSON logging on stdout for the API process.

    Safe to call more than once; the JSON handler is only attached the first time.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not any(isinstance(h, logging.StreamHandler) and isinstance(h.formatter, CustomJsonFormatter) for h in root_logger.handlers):
        log_handler = logging.StreamHandler(sys.stdout)
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
        log_handler.setFormatter(formatter)
        root_logger.addHandler(log_handler)
        root_logger.info(f"Structured JSON logging configured with level: {logging.getLevelName(log_level)}")
