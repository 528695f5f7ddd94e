import os
from typing import Any, Mapping, Optional
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from relaybot.pydantic_models.bot_config import BotConfig
from relaybot.pydantic_models.provider_config import ProviderKind

BOT_CONFIG_FILENAME = 'config/bot_config.yaml'

DISCORD_TOKEN_ENV = 'DISCORD_TOKEN'
PROVIDER_TOKEN_ENVS = {
    ProviderKind.hf: 'HF_TOKEN',
    ProviderKind.messages: 'ANTHROPIC_API_KEY',
    ProviderKind.openai: 'OPENAI_API_KEY',
}


class LoadConfigException(Exception):
	pass


def read_config_file(path: str) -> dict[str, Any]:
	if not os.path.exists(path):
		return {}
	try:
		with open(path, encoding='utf-8') as f:
			config_obj = yaml.safe_load(f)
	except yaml.YAMLError as e:
		raise LoadConfigException(f"Could not parse {path}: {e}") from e
	if config_obj is None:
		return {}
	if not isinstance(config_obj, dict):
		raise LoadConfigException(f"Expected a mapping at the top level of {path}, got {type(config_obj).__name__}")
	return config_obj


def load_bot_config(path: str = BOT_CONFIG_FILENAME,
                    provider_override: Optional[str] = None,
                    environ: Optional[Mapping[str, str]] = None) -> BotConfig:
	"""Build the bot configuration from the optional YAML file and the environment.

	Secrets (the Discord token and the backend API key) are only ever taken
	from the environment. A `.env` file is loaded first when `environ` is not
	given explicitly.
	"""
	if environ is None:
		load_dotenv()
		environ = os.environ
	config_obj = read_config_file(path)
	if provider_override:
		config_obj.setdefault('provider', {})
		if not isinstance(config_obj['provider'], dict):
			raise LoadConfigException(f"'provider' in {path} must be a mapping")
		provider_obj = config_obj['provider']
		if provider_obj.get('kind', ProviderKind.hf.value) != provider_override:
			# Model and URL belong to the backend named in the file
			provider_obj.pop('model_id', None)
			provider_obj.pop('base_url', None)
		provider_obj['kind'] = provider_override
	try:
		config = BotConfig(**config_obj)
	except ValidationError as e:
		raise LoadConfigException(f"Invalid configuration in {path}:\n{e}") from e

	config.discord_token = environ.get(DISCORD_TOKEN_ENV) or None
	if not config.discord_token:
		raise LoadConfigException(f"No Discord token found. Set the {DISCORD_TOKEN_ENV} environment variable.")

	token_env = PROVIDER_TOKEN_ENVS[config.provider.kind]
	config.provider.api_key = environ.get(token_env) or None
	if not config.provider.api_key:
		raise LoadConfigException(f"No API key for the '{config.provider.kind.value}' backend. Set the {token_env} environment variable.")
	return config
