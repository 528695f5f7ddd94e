from abc import ABC, abstractmethod
from colorama import init as colorama_init
from colorama import Fore, Style

from relaybot.log_config import FileLogger, LogLevel


class MarkupElement(ABC):
	@abstractmethod
	def render_md(self) -> str:
		pass

	@abstractmethod
	def render_terminal(self) -> str:
		pass


class FmtCode(MarkupElement):
	def __init__(self, code: str):
		self.code = code

	def render_md(self) -> str:
		return f"```\n{self.code.strip()}\n```"

	def render_terminal(self) -> str:
		return Fore.LIGHTBLUE_EX + self.code + Style.RESET_ALL


class FmtText(MarkupElement):
	def __init__(self, text: str):
		self.text = text

	def render_md(self) -> str:
		return self.text.strip()

	def render_terminal(self) -> str:
		return Fore.CYAN + self.text + Style.RESET_ALL


class FmtHeader(MarkupElement):
	def __init__(self, level: int, text: str):
		self.level = level
		self.text = text

	def render_md(self) -> str:
		return f"{'#' * self.level} {self.text.strip()}"

	def render_terminal(self) -> str:
		return Fore.GREEN + f"{'#' * self.level} {self.text}" + Style.RESET_ALL


class ElementLogger(ABC):
	@abstractmethod
	def log(self, element: MarkupElement):
		pass


class MarkdownLogger(ElementLogger):
	def __init__(self, file_path: str):
		self.file_logger = FileLogger(file_path, LogLevel.IMPORTANT)

	def log(self, element: MarkupElement):
		self.file_logger.log(LogLevel.IMPORTANT, element.render_md() + "\n")


class ColoredTerminalLogger(ElementLogger):
	def __init__(self):
		colorama_init()

	def log(self, element: MarkupElement):
		print(element.render_terminal())


class FormattedLog:
	"""Fans rich log elements out to every registered element logger.

	Logging without any registered logger is a no-op, so library code can
	call `fmtlog` unconditionally (the entry point decides where it goes).
	"""

	def __init__(self):
		self.loggers: list[ElementLogger] = []

	def register_logger(self, element_logger: ElementLogger):
		self.loggers.append(element_logger)

	def log(self, element: MarkupElement):
		for element_logger in self.loggers:
			element_logger.log(element)

	def text(self, text: str):
		self.log(FmtText(text))

	def header(self, level: int, text: str):
		self.log(FmtHeader(level, text))

	def code(self, code: str):
		self.log(FmtCode(code))


fmtlog = FormattedLog()
