from dataclasses import dataclass, field
from enum import Enum

UserId = int | str

DEFAULT_MAX_HISTORY = 10


class Role(str, Enum):
	USER = 'user'
	ASSISTANT = 'assistant'


@dataclass(frozen=True)
class Turn:
	role: Role
	content: str

	@classmethod
	def user(cls, content: str) -> 'Turn':
		return cls(Role.USER, content)

	@classmethod
	def assistant(cls, content: str) -> 'Turn':
		return cls(Role.ASSISTANT, content)


@dataclass
class HistoryStore:
	"""In-memory conversation turns per user, oldest first.

	Each user's sequence is capped at `max_history`; once the cap is exceeded
	the oldest turns are dropped. Nothing is persisted.
	"""
	max_history: int = DEFAULT_MAX_HISTORY
	turns_by_user: dict[UserId, list[Turn]] = field(default_factory=dict)

	def __post_init__(self):
		if self.max_history < 1:
			raise ValueError(f"max_history must be at least 1, got {self.max_history}")

	def append(self, user_id: UserId, turn: Turn):
		turns = self.turns_by_user.setdefault(user_id, [])
		turns.append(turn)
		if len(turns) > self.max_history:
			del turns[:len(turns) - self.max_history]

	def get(self, user_id: UserId) -> tuple[Turn, ...]:
		return tuple(self.turns_by_user.get(user_id, ()))

	def clear(self, user_id: UserId):
		self.turns_by_user.pop(user_id, None)

	def user_count(self) -> int:
		return len(self.turns_by_user)
