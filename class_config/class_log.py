import os
import sys
from class_config.class_env import Config
from loguru import logger


class ConfigLogger:
    LOG_FORMAT = "[{time}] [{level}] [PID: {process}] - {message}"

    def __init__(self, log_name='dashboard_log', backupCount=30):
        self.config = Config()
        self.log_name = log_name
        self.backupCount = backupCount
        self.setup_log_listener()

    def setup_log_listener(self):
        level = "DEBUG" if self.config.api_debug else "INFO"

        logger.remove()
        logger.add(sys.stderr, format=self.LOG_FORMAT, level=level)

        # LOG_PATH 미설정 시 stderr만 사용
        log_dir = self.config.log_path
        if not log_dir:
            return

        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        logger.add(
            os.path.join(log_dir, self.log_name),
            rotation="00:00",
            retention=f"{self.backupCount} days",
            format=self.LOG_FORMAT,
            level=level,
            enqueue=True
        )

    @staticmethod
    def get_logger(name):
        return logger.bind(name=name)
