import asyncio
from enum import Enum
from typing import Any

from relaybot.app_context import AppContext
from relaybot.formatted_logger import fmtlog
from relaybot.history import Turn, UserId
from relaybot.log_config import logger
from relaybot.providers.results import Failure, FailureKind, InferenceResult
from relaybot.utils import DISCORD_MESSAGE_LIMIT, shorten, split_message

MODEL_LOADING_NOTICE = "⏳ The AI model is warming up (this happens after idle periods). Wait ~20 seconds and try again!"
GENERIC_FAILURE_NOTICE = "Sorry, something went wrong on my end. Please try again in a moment!"
RESET_NOTICE = "Done! I've forgotten our conversation so far."


class DispatchState(str, Enum):
	IGNORED = 'ignored'
	USAGE = 'usage'
	RESET = 'reset'
	REPLIED = 'replied'
	FAILED = 'failed'


def usage_notice(command_prefix: str) -> str:
	return f"Hey! You forgot to include a message. Try: `{command_prefix.strip()} hello!`"


class MessageDispatcher:
	"""Turns one incoming chat message into at most one model request and its reply.

	`message` is a discord.py `Message`, or anything exposing `author.id`,
	`author.bot`, `content`, `reply()` and `channel.send()` / `channel.typing()`.

	Messages from the same user are handled one at a time, so the history a
	prompt is built from always contains the previous exchange and turns are
	stored in the order they happened. Different users do not wait on each
	other.
	"""

	def __init__(self, context: AppContext):
		self.context = context
		self.config = context.config
		self.user_locks: dict[UserId, asyncio.Lock] = {}

	def lock_for(self, user_id: UserId) -> asyncio.Lock:
		lock = self.user_locks.get(user_id)
		if lock is None:
			lock = asyncio.Lock()
			self.user_locks[user_id] = lock
		return lock

	def extract_payload(self, message: Any) -> str | None:
		"""Return the command text, or None when the message is not meant for the bot."""
		if message.author.bot:
			return None
		content: str = message.content or ''
		if not content.startswith(self.config.command_prefix):
			return None
		return content[len(self.config.command_prefix):].strip()

	def is_reset_command(self, payload: str) -> bool:
		keyword = self.config.reset_keyword
		return bool(keyword) and payload.lower() == keyword.lower()

	async def handle_message(self, message: Any) -> DispatchState:
		payload = self.extract_payload(message)
		if payload is None:
			return DispatchState.IGNORED
		try:
			if not payload:
				await message.reply(usage_notice(self.config.command_prefix))
				return DispatchState.USAGE

			user_id: UserId = message.author.id
			if self.is_reset_command(payload):
				async with self.lock_for(user_id):
					self.context.history.clear(user_id)
				logger.info(f"Cleared history of user {user_id}")
				await message.reply(RESET_NOTICE)
				return DispatchState.RESET

			async with self.lock_for(user_id):
				return await self.relay(message, user_id, payload)
		except Exception as e:
			logger.error(f"Error while handling message from user {message.author.id}")
			logger.exception(e)
			return DispatchState.FAILED

	async def relay(self, message: Any, user_id: UserId, payload: str) -> DispatchState:
		history = self.context.history
		history.append(user_id, Turn.user(payload))
		await self.signal_typing(message)

		turns = history.get(user_id)
		fmtlog.header(3, f"Request from user {user_id} ({len(turns)} turns in history)")
		fmtlog.code(payload)

		try:
			result: InferenceResult = await self.context.provider.complete(turns)
		except Exception as e:
			logger.exception(e)
			result = Failure(FailureKind.UPSTREAM_ERROR, f"{type(e).__name__}: {e}")

		if isinstance(result, Failure):
			return await self.report_failure(message, user_id, result)

		history.append(user_id, Turn.assistant(result.text))
		fmtlog.header(3, f"Reply to user {user_id}")
		fmtlog.code(result.text)
		await self.send_reply(message, result.text)
		return DispatchState.REPLIED

	async def signal_typing(self, message: Any):
		try:
			await message.channel.typing()
		except Exception as e:
			logger.debug(f"Could not send typing indicator: {e}")

	async def send_reply(self, message: Any, text: str):
		if len(text) <= DISCORD_MESSAGE_LIMIT:
			await message.reply(text)
			return
		chunks = split_message(text)
		logger.info(f"Reply of {len(text)} characters split into {len(chunks)} messages")
		for chunk in chunks:
			await message.channel.send(chunk)

	async def report_failure(self, message: Any, user_id: UserId, failure: Failure) -> DispatchState:
		if failure.kind == FailureKind.MODEL_LOADING:
			logger.warning(f"Model is loading, asked user {user_id} to retry: {shorten(failure.detail, 200)}")
			notice = MODEL_LOADING_NOTICE
		else:
			logger.error(f"Inference failed for user {user_id} ({failure.kind.value}): {failure.detail}")
			notice = GENERIC_FAILURE_NOTICE
		try:
			await message.reply(notice)
		except Exception as e:
			logger.error(f"Could not deliver failure notice to user {user_id}")
			logger.exception(e)
		return DispatchState.FAILED
