import anyio

from modelhub.client.fallback import BothRoutesFailedError, GatewayRequestError
from modelhub.client.history import HISTORY_FILENAME, HistoryStore
from modelhub.client.session import BOTH_ROUTES_FAILED, ChatSession
from modelhub.models.history import HistoryEntry


class _FakeController:
    def __init__(self, reply=None, fail=False):
        self.reply = reply
        self.fail = fail
        self.payloads = []

    async def fetch_reply(self, payload):
        self.payloads.append(payload)
        if self.fail:
            raise BothRoutesFailedError(
                GatewayRequestError("/api/chat", "HTTP 500"),
                GatewayRequestError("/api/chat/v2", "HTTP 404"),
            )
        return self.reply


def _session(tmp_path, controller, **kwargs) -> ChatSession:
    return ChatSession(controller, HistoryStore(tmp_path / HISTORY_FILENAME), **kwargs)


def test_send_composes_system_window_and_user_turn(tmp_path):
    controller = _FakeController(reply="second answer")
    history = HistoryStore(tmp_path / HISTORY_FILENAME)
    history.append("old q", "old a")
    history.append("last q", "last a")
    session = ChatSession(controller, history, model="gpt-4o", system_prompt="be kind")

    reply = anyio.run(session.send, "new q")

    assert reply == "second answer"
    assert controller.payloads == [
        {
            "messages": [
                {"role": "system", "content": "be kind"},
                {"role": "user", "content": "last q"},
                {"role": "assistant", "content": "last a"},
                {"role": "user", "content": "new q"},
            ],
            "model": "gpt-4o",
        }
    ]
    assert session.history[-1] == HistoryEntry(query="new q", response="second answer")
    assert [(t.kind, t.text) for t in session.transcript] == [
        ("user", "new q"),
        ("bot", "second answer"),
    ]


def test_blank_input_is_ignored(tmp_path):
    controller = _FakeController(reply="x")
    session = _session(tmp_path, controller)

    assert anyio.run(session.send, "   ") is None
    assert controller.payloads == []
    assert session.transcript == []


def test_double_failure_shows_fixed_message_and_skips_history(tmp_path):
    controller = _FakeController(fail=True)
    session = _session(tmp_path, controller)

    reply = anyio.run(session.send, "hello")

    assert reply == BOTH_ROUTES_FAILED
    assert session.transcript[-1].text == BOTH_ROUTES_FAILED
    assert session.history == []
    assert len(controller.payloads) == 1


def test_replay_restores_pair_without_network(tmp_path):
    controller = _FakeController(reply="unused")
    session = _session(tmp_path, controller)
    entry = HistoryEntry(query="what is pi?", response="about 3.14159")

    session.replay(entry)

    assert [(t.kind, t.text) for t in session.transcript] == [
        ("user", "what is pi?"),
        ("bot", "about 3.14159"),
    ]
    assert controller.payloads == []


def test_clear_resets_history_and_transcript(tmp_path):
    session = _session(tmp_path, _FakeController(reply="a"))
    anyio.run(session.send, "q")

    session.clear()

    assert session.history == []
    assert session.transcript == []
    assert not (tmp_path / HISTORY_FILENAME).exists()


def test_select_model_accepts_unlisted_names(tmp_path):
    session = _session(tmp_path, _FakeController(reply="a"))

    session.select_model("my-custom-model")

    assert session.model == "my-custom-model"
