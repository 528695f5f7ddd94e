from relaybot.utils import CHUNK_SIZE, DISCORD_MESSAGE_LIMIT, shorten, split_message


def test_split_message_respects_chunk_size_and_order():
	text = "".join(chr(ord('a') + i % 26) for i in range(DISCORD_MESSAGE_LIMIT + 1))
	chunks = split_message(text)

	assert len(chunks) >= 2
	assert all(len(chunk) <= CHUNK_SIZE for chunk in chunks)
	assert "".join(chunks) == text


def test_split_message_keeps_newlines():
	text = "line\n" * 1000
	assert "".join(split_message(text, 7)) == text


def test_split_empty_text():
	assert split_message("") == []


def test_shorten():
	assert shorten("a  b\nc") == "a b c"
	assert shorten("x" * 100, 10) == "xxxxxxx..."
