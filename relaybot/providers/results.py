from dataclasses import dataclass
from enum import Enum


class FailureKind(str, Enum):
	MODEL_LOADING = 'model_loading'
	UPSTREAM_ERROR = 'upstream_error'
	EMPTY_RESPONSE = 'empty_response'


@dataclass(frozen=True)
class Success:
	text: str


@dataclass(frozen=True)
class Failure:
	kind: FailureKind
	detail: str = ''


InferenceResult = Success | Failure


def upstream_error(status_code: int, body: str) -> Failure:
	return Failure(FailureKind.UPSTREAM_ERROR, f"HTTP {status_code}: {body}")


def mentions_loading(error: object) -> bool:
	"""True when a backend error payload reports that the model is still being loaded."""
	if isinstance(error, dict):
		error = error.get('message') or error.get('error') or ''
	return isinstance(error, str) and 'loading' in error.lower()
