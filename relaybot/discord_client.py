import discord

from relaybot.app_context import AppContext
from relaybot.dispatcher import DispatchState, MessageDispatcher
from relaybot.formatted_logger import fmtlog
from relaybot.log_config import logger


def default_intents() -> discord.Intents:
	intents = discord.Intents.default()
	intents.message_content = True
	return intents


class RelayClient(discord.Client):
	def __init__(self, context: AppContext):
		super().__init__(intents=default_intents())
		self.context = context
		self.message_dispatcher = MessageDispatcher(context)

	async def on_ready(self):
		fmtlog.text(f"Logged in as: {self.user}")
		fmtlog.text(f"Listening for messages starting with '{self.context.config.command_prefix}'")

	async def on_message(self, message: discord.Message):
		if self.user is not None and message.author.id == self.user.id:
			return
		state = await self.message_dispatcher.handle_message(message)
		if state != DispatchState.IGNORED:
			logger.debug(f"Message {message.id} from {message.author.id}: {state.value}, {self.context.history.user_count()} users in memory")

	async def close(self):
		await self.context.aclose()
		await super().close()
