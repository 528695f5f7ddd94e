from typing import Optional
from pydantic import BaseModel, Field

from relaybot.history import DEFAULT_MAX_HISTORY
from relaybot.prompt_format import DEFAULT_SYSTEM_PROMPT
from relaybot.pydantic_models.provider_config import ProviderConfig


class BotConfig(BaseModel):
	command_prefix: str = Field('?bot ', description='Messages must start with this prefix to reach the model', min_length=1)
	max_history: int = Field(DEFAULT_MAX_HISTORY, description='Keep at most this many turns per user and remove the oldest turns.', ge=1)
	system_prompt: str = Field(DEFAULT_SYSTEM_PROMPT, description='System instruction sent with every request', min_length=1)
	reset_keyword: Optional[str] = Field('reset', description='Command payload that clears the author\'s history. Null disables it.')
	provider: ProviderConfig = Field(default_factory=ProviderConfig)
	discord_token: Optional[str] = Field(None, description='Discord bot login token. Read from the environment.', exclude=True)
