from modelhub.client.cli import handle_command
from modelhub.client.history import HISTORY_FILENAME, HistoryStore
from modelhub.client.session import ChatSession


class _NoNetworkController:
    async def fetch_reply(self, payload):
        raise AssertionError("no request expected")


def _session(tmp_path) -> ChatSession:
    history = HistoryStore(tmp_path / HISTORY_FILENAME)
    history.append("first q", "first a")
    history.append("second q", "second a")
    return ChatSession(_NoNetworkController(), history)


def test_replay_command_shows_stored_pair(tmp_path, capsys):
    session = _session(tmp_path)

    assert handle_command(session, "/replay 1") is True

    assert [t.text for t in session.transcript] == ["first q", "first a"]
    assert "[bot] first a" in capsys.readouterr().out


def test_model_and_system_commands(tmp_path):
    session = _session(tmp_path)

    handle_command(session, "/model gemini-1.5-pro")
    handle_command(session, "/system answer in French")

    assert session.model == "gemini-1.5-pro"
    assert session.system_prompt == "answer in French"


def test_clear_and_quit_commands(tmp_path):
    session = _session(tmp_path)

    handle_command(session, "/clear")
    assert session.history == []

    assert handle_command(session, "/quit") is False
