from abc import ABC, abstractmethod
from enum import IntEnum
import logging

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class BaseLogger(ABC):
	@abstractmethod
	def log(self, level: int, message: str):
		pass


class LogLevel(IntEnum):
	DEBUG = 10
	INFO = 20
	IMPORTANT = 25
	WARNING = 30
	ERROR = 40


logging.addLevelName(LogLevel.IMPORTANT, 'IMPORTANT')


class StdStreamLogger(BaseLogger):
	def __init__(self, log_level: int):
		self.log_level = log_level
		self.logger = logging.Logger('relaybot.StdStreamLogger')
		log_handler = logging.StreamHandler()
		log_handler.setFormatter(logging.Formatter(style='{', fmt='{levelname:9} {message}', datefmt=DATE_FORMAT))
		self.logger.addHandler(log_handler)
		self.logger.setLevel(log_level)

	def log(self, level: int, message: str):
		if level >= self.log_level:
			self.logger.log(level, message)


class FileLogger(BaseLogger):
	def __init__(self, file_path: str, log_level: int):
		self.log_level = log_level
		self.logger = logging.Logger('relaybot.FileLogger')
		log_handler = logging.FileHandler(file_path, encoding='utf-8')
		log_handler.setFormatter(logging.Formatter(style='{', fmt='{levelname:9} {asctime} {message}', datefmt=DATE_FORMAT))
		self.logger.addHandler(log_handler)
		self.logger.setLevel(log_level)

	def log(self, level: int, message: str):
		if level >= self.log_level:
			self.logger.log(level, message)


class AppLogger:
	def __init__(self, log_level: int = LogLevel.INFO):
		self.log_level = log_level
		self.loggers: list[BaseLogger] = []

	def register_logger(self, logger: BaseLogger):
		self.loggers.append(logger)

	def setLevel(self, log_level: int):
		self.log_level = log_level
		for logger in self.loggers:
			if isinstance(logger, StdStreamLogger):
				logger.log_level = log_level
				logger.logger.setLevel(log_level)

	def _log(self, level: int, message: str):
		if level < self.log_level:
			return
		for logger in self.loggers:
			logger.log(level, message)

	def debug(self, message: str):
		self._log(LogLevel.DEBUG, message)

	def info(self, message: str):
		self._log(LogLevel.INFO, message)

	def warning(self, message: str):
		self._log(LogLevel.WARNING, message)

	def error(self, message: str):
		self._log(LogLevel.ERROR, message)

	def exception(self, e: BaseException):
		self.error(f"Exception: {type(e).__name__}: {e}")


logger = AppLogger()
