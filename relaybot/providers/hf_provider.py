from typing import Any, Sequence

from relaybot.history import Turn
from relaybot.prompt_format import clean_generated_text, render_llama3_prompt
from relaybot.providers.base_provider import HttpProvider, is_success_status, parse_json_body
from relaybot.providers.results import Failure, FailureKind, InferenceResult, Success, mentions_loading, upstream_error


class HuggingFaceProvider(HttpProvider):
	"""Text-generation endpoint fed with a Llama 3 templated prompt."""

	def endpoint(self) -> str:
		return f"{self.base_url}/models/{self.model}"

	def headers(self) -> dict[str, str]:
		return {"Authorization": f"Bearer {self.config.api_key}"}

	def build_payload(self, turns: Sequence[Turn]) -> dict[str, Any]:
		return {
		    "inputs": render_llama3_prompt(self.system_prompt, turns),
		    "parameters": {
		        "max_new_tokens": self.config.max_new_tokens,
		        "temperature": self.config.temperature,
		        "top_p": self.config.top_p,
		        "do_sample": True,
		        "return_full_text": False,
		    },
		}

	def interpret_response(self, status_code: int, body: str) -> InferenceResult:
		data, failure = parse_json_body(status_code, body)
		if failure:
			return failure
		# Cold starts come back as 503 with {"error": "Model ... is currently loading", "estimated_time": ...}
		if isinstance(data, dict) and mentions_loading(data.get('error')):
			return Failure(FailureKind.MODEL_LOADING, str(data.get('error')))
		if not is_success_status(status_code):
			return upstream_error(status_code, body)
		if isinstance(data, dict) and data.get('error'):
			return upstream_error(status_code, body)

		if isinstance(data, list):
			first = data[0] if data else None
			text = first.get('generated_text') if isinstance(first, dict) else None
		elif isinstance(data, dict):
			text = data.get('generated_text')
		else:
			return Failure(FailureKind.UPSTREAM_ERROR, f"Unexpected response shape: {body[:200]}")

		if not isinstance(text, str) or not text:
			return Failure(FailureKind.EMPTY_RESPONSE, body[:200])
		text = clean_generated_text(text)
		if not text:
			return Failure(FailureKind.EMPTY_RESPONSE, body[:200])
		return Success(text)
