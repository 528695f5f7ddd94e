from typing import Any, Sequence

from relaybot.history import Turn
from relaybot.prompt_format import build_chat_messages
from relaybot.providers.base_provider import HttpProvider, is_success_status, parse_json_body
from relaybot.providers.results import Failure, FailureKind, InferenceResult, Success, mentions_loading, upstream_error

API_VERSION = '2023-06-01'


class MessagesProvider(HttpProvider):
	"""Structured chat endpoint taking a system prompt and role-tagged messages."""

	def endpoint(self) -> str:
		return f"{self.base_url}/v1/messages"

	def headers(self) -> dict[str, str]:
		return {
		    "x-api-key": self.config.api_key or '',
		    "anthropic-version": API_VERSION,
		}

	def build_payload(self, turns: Sequence[Turn]) -> dict[str, Any]:
		return {
		    "model": self.model,
		    "max_tokens": self.config.max_new_tokens,
		    "temperature": self.config.temperature,
		    "top_p": self.config.top_p,
		    "system": self.system_prompt,
		    "messages": build_chat_messages(turns),
		}

	def interpret_response(self, status_code: int, body: str) -> InferenceResult:
		data, failure = parse_json_body(status_code, body)
		if failure:
			return failure
		if isinstance(data, dict) and mentions_loading(data.get('error')):
			return Failure(FailureKind.MODEL_LOADING, body[:200])
		if not is_success_status(status_code):
			return upstream_error(status_code, body)

		content = data.get('content') if isinstance(data, dict) else None
		if not isinstance(content, list):
			return Failure(FailureKind.UPSTREAM_ERROR, f"Unexpected response shape: {body[:200]}")
		text = ''.join(block['text'] for block in content if isinstance(block, dict) and isinstance(block.get('text'), str))
		if not text:
			return Failure(FailureKind.EMPTY_RESPONSE, body[:200])
		return Success(text)
