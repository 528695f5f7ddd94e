from pathlib import Path

import pytest

from relaybot.app_context import AppContext, create_provider
from relaybot.config_loader import LoadConfigException, load_bot_config
from relaybot.providers.hf_provider import HuggingFaceProvider
from relaybot.providers.messages_provider import MessagesProvider
from relaybot.providers.openai_provider import OpenAIProvider
from relaybot.pydantic_models.provider_config import ProviderKind

ENV = {"DISCORD_TOKEN": "discord-secret", "HF_TOKEN": "hf-secret", "ANTHROPIC_API_KEY": "sk-ant", "OPENAI_API_KEY": "sk-oai"}


def write_config(tmp_path: Path, text: str) -> str:
	path = tmp_path / "bot_config.yaml"
	path.write_text(text, encoding="utf-8")
	return str(path)


def test_missing_file_uses_defaults(tmp_path: Path):
	config = load_bot_config(str(tmp_path / "missing.yaml"), environ=ENV)

	assert config.command_prefix == "?bot "
	assert config.max_history == 10
	assert config.provider.kind == ProviderKind.hf
	assert config.provider.resolved_model_id() == "meta-llama/Meta-Llama-3-8B-Instruct"
	assert config.discord_token == "discord-secret"
	assert config.provider.api_key == "hf-secret"


def test_file_values_and_provider_override(tmp_path: Path):
	path = write_config(tmp_path, """
command_prefix: "!ai "
max_history: 4
provider:
  kind: hf
  model_id: some/model
  temperature: 0.2
""")
	config = load_bot_config(path, provider_override="messages", environ=ENV)

	assert config.command_prefix == "!ai "
	assert config.max_history == 4
	assert config.provider.kind == ProviderKind.messages
	assert config.provider.model_id is None
	assert config.provider.resolved_model_id() == "claude-3-5-haiku-latest"
	assert config.provider.temperature == 0.2
	assert config.provider.api_key == "sk-ant"


def test_secrets_are_not_dumped(tmp_path: Path):
	config = load_bot_config(str(tmp_path / "missing.yaml"), environ=ENV)
	dumped = config.model_dump()

	assert "discord_token" not in dumped
	assert "api_key" not in dumped["provider"]


@pytest.mark.parametrize("text", ["max_history: 0", "provider:\n  kind: nope", "- a list", "command_prefix: [unclosed"])
def test_invalid_config_raises(tmp_path: Path, text: str):
	with pytest.raises(LoadConfigException):
		load_bot_config(write_config(tmp_path, text), environ=ENV)


def test_missing_secrets_raise(tmp_path: Path):
	path = str(tmp_path / "missing.yaml")
	with pytest.raises(LoadConfigException, match="DISCORD_TOKEN"):
		load_bot_config(path, environ={"HF_TOKEN": "x"})
	with pytest.raises(LoadConfigException, match="OPENAI_API_KEY"):
		load_bot_config(path, provider_override="openai", environ={"DISCORD_TOKEN": "x"})


@pytest.mark.parametrize("kind, provider_class", [
    ("hf", HuggingFaceProvider),
    ("messages", MessagesProvider),
    ("openai", OpenAIProvider),
])
def test_create_provider_per_kind(tmp_path: Path, kind: str, provider_class: type):
	config = load_bot_config(str(tmp_path / "missing.yaml"), provider_override=kind, environ=ENV)
	assert isinstance(create_provider(config), provider_class)


def test_app_context_owns_history_with_configured_cap(tmp_path: Path):
	path = write_config(tmp_path, "max_history: 2\n")
	context = AppContext.from_config(load_bot_config(path, environ=ENV))

	assert context.history.max_history == 2
	assert context.history.user_count() == 0


def test_override_with_same_kind_keeps_model(tmp_path: Path):
	path = write_config(tmp_path, "provider:\n  kind: openai\n  model_id: gpt-4o\n  base_url: https://proxy.test/v1\n")
	config = load_bot_config(path, provider_override="openai", environ=ENV)

	assert config.provider.resolved_model_id() == "gpt-4o"
	assert config.provider.resolved_base_url() == "https://proxy.test/v1"


@pytest.mark.parametrize("kind, model_id", [
    ("hf", "meta-llama/Meta-Llama-3-8B-Instruct"),
    ("messages", "claude-3-5-haiku-latest"),
    ("openai", "gpt-4o-mini"),
])
def test_example_config_with_each_provider_override(kind: str, model_id: str):
	example = Path(__file__).parent.parent / "config" / "bot_config.yaml.example"
	config = load_bot_config(str(example), provider_override=kind, environ=ENV)

	assert config.provider.kind == ProviderKind(kind)
	assert config.provider.resolved_model_id() == model_id
