"""弹窗的线程调度逻辑（不创建真实窗口）。"""

import pytest

from portfolio_chat.api.service import create_session
from portfolio_chat.domain.models import ChatConfig

pytest.importorskip("tkinter")

from portfolio_chat.gui.chat_popup import App  # noqa: E402


class FakeLoop:
    def __init__(self):
        self.scheduled = []

    def call_soon_threadsafe(self, fn, *args):
        self.scheduled.append((fn, args))


class FakeRoot:
    def __init__(self):
        self.after_calls = []

    def after(self, delay, fn):
        self.after_calls.append(fn)


def _app():
    app = App.__new__(App)
    app.session = create_session(ChatConfig(worker_url="https://w/chat", system_prompt="sys", welcome_message="Welcome!"))
    app.widget = app.session.widget
    app.loop = FakeLoop()
    app.root = FakeRoot()
    app.popup = None
    return app


def test_toggle_is_scheduled_on_event_loop_thread():
    app = _app()
    app.on_toggle()

    # 点击本身不修改 store
    assert app.widget.is_open is False
    assert app.session.store.visible() == []
    assert len(app.loop.scheduled) == 1

    fn, args = app.loop.scheduled[0]
    fn(*args)
    assert app.widget.is_open is True
    assert app.widget.messages() == [("bot", "Welcome!")]
    assert app._sync_popup in app.root.after_calls


def test_send_is_scheduled_on_event_loop_thread():
    app = _app()

    class Entry:
        def get(self):
            return "Hello"

    app.entry = Entry()
    app.on_send()
    assert app.widget.input_text == "Hello"
    assert app.session.store.visible() == []
    assert [fn for fn, _ in app.loop.scheduled] == [app._submit]
