"""
Logger utility for Face Template Migration
"""

import logging
import os


class Logger:
    """
    A Logger class for logging messages
    """

    def __init__(self):
        self.logger = logging.getLogger("face_template_migration")
        level = os.environ.get("FACE_MIGRATION_LOG_LEVEL", "INFO").upper()
        self.logger.setLevel(getattr(logging, level, logging.INFO))

        # Create console handler
        handler = logging.StreamHandler()

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)

        # Add handler to logger
        if not self.logger.handlers:
            self.logger.addHandler(handler)

    def info(self, message: str):
        """Log info message"""
        self.logger.info(message)

    def warn(self, message: str):
        """Log warning message"""
        self.logger.warning(message)

    def error(self, message: str):
        """Log error message"""
        self.logger.error(message)

    def debug(self, message: str):
        """Log debug message"""
        self.logger.debug(message)
