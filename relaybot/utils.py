from typing import Any
import yaml

DISCORD_MESSAGE_LIMIT = 2000
# Headroom below the hard cap for reply quoting and mentions
CHUNK_SIZE = 1900


def yaml_dump(obj: Any) -> str:
	return yaml.dump(obj, default_flow_style=False, allow_unicode=True, sort_keys=False)


def split_message(text: str, chunk_size: int = CHUNK_SIZE) -> list[str]:
	if chunk_size < 1:
		raise ValueError(f"chunk_size must be positive, got {chunk_size}")
	return [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]


def shorten(text: str, width: int = 80) -> str:
	text = " ".join(text.split())
	if len(text) <= width:
		return text
	return text[:width - 3] + "..."
