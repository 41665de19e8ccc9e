"""
tests/test_session.py
"""

from client.session import JsonFileStore, MemoryStore, SessionProvider


def test_establish_and_clear():
    provider = SessionProvider(MemoryStore())
    assert provider.current_session() is None

    provider.establish("tok", {"id": "u1", "role": "USER"})
    current = provider.current_session()
    assert current.token == "tok"
    assert current.user["id"] == "u1"
    assert not current.is_admin

    provider.clear()
    assert provider.current_session() is None


def test_corrupt_user_counts_as_no_session():
    store = MemoryStore()
    store.set("token", "tok")
    store.set("user", "{not json")
    provider = SessionProvider(store)

    assert provider.current_session() is None
    assert store.get("token") is None


def test_token_without_user_is_no_session():
    store = MemoryStore()
    store.set("token", "tok")
    assert SessionProvider(store).current_session() is None


def test_json_file_store_survives_restart(tmp_path):
    path = tmp_path / "session.json"
    SessionProvider(JsonFileStore(path)).establish("tok", {"id": "u1", "role": "ADMIN"})

    restored = SessionProvider(JsonFileStore(path)).current_session()
    assert restored.token == "tok"
    assert restored.is_admin


def test_json_file_store_ignores_garbage(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("garbage", encoding="utf-8")
    assert SessionProvider(JsonFileStore(path)).current_session() is None
