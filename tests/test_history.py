import pytest

from relaybot.history import HistoryStore, Role, Turn


def test_turn_constructors_set_role():
	assert Turn.user("hi") == Turn(Role.USER, "hi")
	assert Turn.assistant("hey").role is Role.ASSISTANT


def test_get_unknown_user_returns_empty_sequence():
	store = HistoryStore()
	assert store.get(42) == ()
	assert store.user_count() == 0


def test_appends_within_limit_preserve_order():
	store = HistoryStore(max_history=10)
	turns = [Turn.user(f"message {i}") for i in range(10)]
	for turn in turns:
		store.append("alice", turn)

	assert list(store.get("alice")) == turns


def test_oldest_turns_are_evicted_first():
	store = HistoryStore(max_history=3)
	for i in range(7):
		store.append(1, Turn.user(str(i)))
		assert len(store.get(1)) <= 3

	assert [turn.content for turn in store.get(1)] == ["4", "5", "6"]


def test_users_do_not_share_history():
	store = HistoryStore(max_history=2)
	store.append(1, Turn.user("one"))
	store.append(2, Turn.user("two"))
	store.append(2, Turn.assistant("reply"))

	assert store.get(1) == (Turn.user("one"), )
	assert store.get(2) == (Turn.user("two"), Turn.assistant("reply"))
	assert store.user_count() == 2


def test_snapshot_is_not_affected_by_later_appends():
	store = HistoryStore()
	store.append(1, Turn.user("first"))
	snapshot = store.get(1)
	store.append(1, Turn.assistant("second"))

	assert snapshot == (Turn.user("first"), )


def test_clear_drops_only_that_user():
	store = HistoryStore()
	store.append(1, Turn.user("a"))
	store.append(2, Turn.user("b"))
	store.clear(1)
	store.clear(3)

	assert store.get(1) == ()
	assert store.get(2) == (Turn.user("b"), )


def test_rejects_non_positive_limit():
	with pytest.raises(ValueError):
		HistoryStore(max_history=0)
