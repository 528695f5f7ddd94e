from dataclasses import dataclass, field

from relaybot.history import HistoryStore
from relaybot.providers.base_provider import BaseProvider
from relaybot.providers.hf_provider import HuggingFaceProvider
from relaybot.providers.messages_provider import MessagesProvider
from relaybot.providers.openai_provider import OpenAIProvider
from relaybot.pydantic_models.bot_config import BotConfig
from relaybot.pydantic_models.provider_config import ProviderKind


def create_provider(config: BotConfig) -> BaseProvider:
	kind = config.provider.kind
	if kind == ProviderKind.hf:
		return HuggingFaceProvider(config.provider, config.system_prompt)
	elif kind == ProviderKind.messages:
		return MessagesProvider(config.provider, config.system_prompt)
	elif kind == ProviderKind.openai:
		return OpenAIProvider(config.provider, config.system_prompt)
	else:
		raise ValueError(f"Provider not implemented: {kind}")


@dataclass
class AppContext:
	"""Everything one running bot owns: its config, backend and conversation memory."""
	config: BotConfig
	provider: BaseProvider
	history: HistoryStore = field(init=False)

	def __post_init__(self):
		self.history = HistoryStore(max_history=self.config.max_history)

	@classmethod
	def from_config(cls, config: BotConfig) -> 'AppContext':
		return cls(config, create_provider(config))

	async def aclose(self):
		await self.provider.aclose()
