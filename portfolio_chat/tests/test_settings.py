from portfolio_chat.config.settings import Settings
from portfolio_chat.domain.models import ChatConfig
from portfolio_chat.prompts import load_system_prompt


def _clear_env(monkeypatch):
    for var in ["CHAT_WORKER_URL", "CHAT_HISTORY_WINDOW", "CHAT_SYSTEM_PROMPT", "CHAT_CONFIG_FILE"]:
        monkeypatch.delenv(var, raising=False)


def test_defaults(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    cfg = Settings()
    assert cfg.worker_url == "https://test/chat"
    assert cfg.history_window == 25
    assert cfg.system_prompt == load_system_prompt()
    assert "Saad Pasta" in cfg.system_prompt
    assert cfg.fallback_message != cfg.connection_error_message


def test_env_overrides(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CHAT_WORKER_URL", "  https://worker.example/chat ")
    monkeypatch.setenv("CHAT_HISTORY_WINDOW", "10")
    cfg = Settings()
    assert cfg.worker_url == "https://worker.example/chat"
    assert cfg.history_window == 10


def test_yaml_config_file(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "chat.yaml"
    path.write_text("worker_url: https://yaml.example/chat\nsystem_prompt: From yaml\n", encoding="utf-8")
    monkeypatch.setenv("CHAT_CONFIG_FILE", str(path))
    cfg = Settings()
    assert cfg.worker_url == "https://yaml.example/chat"
    assert cfg.system_prompt == "From yaml"

    # 环境变量优先于 yaml
    monkeypatch.setenv("CHAT_WORKER_URL", "https://env.example/chat")
    assert Settings().worker_url == "https://env.example/chat"


def test_chat_config_from_settings(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    cfg = ChatConfig.from_settings(Settings(history_window=5, http_timeout=3.0))
    assert cfg.history_window == 5
    assert cfg.http_timeout == 3.0
    assert cfg.worker_url == "https://test/chat"


def test_chat_config_from_stub_object():
    class SettingsStub:
        worker_url = "https://stub/chat"
        system_prompt = "stub"

    cfg = ChatConfig.from_settings(SettingsStub())
    assert cfg.worker_url == "https://stub/chat"
    assert cfg.history_window == 25
