import argparse
from datetime import datetime
import logging
import os
import sys

from relaybot.app_context import AppContext
from relaybot.config_loader import BOT_CONFIG_FILENAME, LoadConfigException, load_bot_config
from relaybot.discord_client import RelayClient
from relaybot.formatted_logger import ColoredTerminalLogger, MarkdownLogger, fmtlog
from relaybot.log_config import StdStreamLogger, logger
from relaybot.pydantic_models.provider_config import ProviderKind
from relaybot.utils import yaml_dump


def run():
	available_providers = [provider.value for provider in ProviderKind]
	parser = argparse.ArgumentParser(description="Relay prefixed Discord messages to a language model and post the replies.")
	parser.add_argument("--config", type=str, default=BOT_CONFIG_FILENAME, help=f"Path to the bot config file (default: {BOT_CONFIG_FILENAME})")
	parser.add_argument("--provider", type=str, choices=available_providers, help="Inference backend to use, overriding the config file.")
	parser.add_argument("--log_level", type=str, default="INFO", help="Set the log level. Default: INFO")
	parser.add_argument("--markdown_log_dir", type=str, help="Directory to save markdown logs. Markdown logging is off when not set.")
	args = parser.parse_args()
	assert isinstance(args.config, str)
	assert isinstance(args.log_level, str)

	log_level = logging.getLevelNamesMapping().get(args.log_level.upper())
	if log_level is None:
		raise ValueError(f"Invalid log level: {args.log_level}")
	logger.register_logger(StdStreamLogger(log_level))
	logger.setLevel(log_level)

	if args.markdown_log_dir:
		markdown_log_filename = datetime.now().isoformat(sep="_", timespec="seconds") + ".log.md"
		fmtlog.register_logger(MarkdownLogger(os.path.join(args.markdown_log_dir, markdown_log_filename)))
	fmtlog.register_logger(ColoredTerminalLogger())

	try:
		config = load_bot_config(args.config, provider_override=args.provider)
	except LoadConfigException as e:
		logger.error(str(e))
		sys.exit(1)
	fmtlog.text(f"Using provider: {config.provider.kind.value} ({config.provider.resolved_model_id()})")
	fmtlog.header(3, "Configuration:")
	fmtlog.code(yaml_dump(config.model_dump(mode="json", exclude={"system_prompt"})))

	context = AppContext.from_config(config)
	client = RelayClient(context)
	assert config.discord_token is not None
	client.run(config.discord_token)


if __name__ == '__main__':
	run()
