import re
from typing import Sequence

from relaybot.history import Role, Turn

BEGIN_OF_TEXT = '<|begin_of_text|>'
START_HEADER = '<|start_header_id|>'
END_HEADER = '<|end_header_id|>'
END_OF_TURN = '<|eot_id|>'

DEFAULT_SYSTEM_PROMPT = """You are a friendly and helpful assistant living inside a Discord server.
You are warm, approachable, and genuinely enjoy helping people.
Keep your responses concise and conversational — this is a chat environment, not an essay.
If you don't know something, say so honestly rather than guessing."""

_HEADER_RE = re.compile(re.escape(START_HEADER) + r'(system|user|assistant)' + re.escape(END_HEADER) + '\n')


def _check_content(turn: Turn):
	if not turn.content:
		raise ValueError(f"Empty {turn.role.value} turn cannot be formatted")


def _llama3_block(role: str, content: str) -> str:
	return f"{START_HEADER}{role}{END_HEADER}\n{content}{END_OF_TURN}"


def render_llama3_prompt(system_prompt: str, turns: Sequence[Turn]) -> str:
	"""Render a conversation in the Llama 3 instruct chat template.

	The prompt ends with an open assistant header so the model continues as
	the assistant. Token spelling must match the model's template exactly.
	"""
	parts = [BEGIN_OF_TEXT, _llama3_block('system', system_prompt)]
	for turn in turns:
		_check_content(turn)
		parts.append(_llama3_block(turn.role.value, turn.content))
	parts.append(f"{START_HEADER}{Role.ASSISTANT.value}{END_HEADER}\n")
	return ''.join(parts)


def parse_llama3_prompt(prompt: str) -> tuple[str, list[Turn]]:
	"""Split a prompt made by `render_llama3_prompt` back into system prompt and turns."""
	if not prompt.startswith(BEGIN_OF_TEXT):
		raise ValueError("Prompt does not start with the begin-of-text token")
	rest = prompt[len(BEGIN_OF_TEXT):]
	system_prompt: str | None = None
	turns: list[Turn] = []
	while rest:
		match = _HEADER_RE.match(rest)
		if not match:
			raise ValueError(f"Malformed turn header at: {rest[:40]!r}")
		role = match.group(1)
		rest = rest[match.end():]
		if not rest and role == Role.ASSISTANT.value:
			break
		end = rest.find(END_OF_TURN)
		if end < 0:
			raise ValueError(f"Unterminated {role} turn")
		content = rest[:end]
		rest = rest[end + len(END_OF_TURN):]
		if role == 'system':
			system_prompt = content
		else:
			turns.append(Turn(Role(role), content))
	if system_prompt is None:
		raise ValueError("Prompt has no system turn")
	return system_prompt, turns


def clean_generated_text(text: str) -> str:
	eot = text.find(END_OF_TURN)
	if eot >= 0:
		text = text[:eot]
	return text.strip()


def build_chat_messages(turns: Sequence[Turn]) -> list[dict[str, str]]:
	messages: list[dict[str, str]] = []
	for turn in turns:
		_check_content(turn)
		messages.append({"role": turn.role.value, "content": turn.content})
	return messages
