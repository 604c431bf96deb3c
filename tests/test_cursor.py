import pytest


def test_cursor_is_lazy(provider, database):
    cursor = provider.query("/pets")
    assert not database.is_open
    assert cursor.fetchall() == []
    assert database.is_open


def test_cursor_is_restartable(provider, rex):
    cursor = provider.query("/pets")
    assert cursor.count() == 0
    provider.insert("/pets", rex)
    # cada recorrido vuelve a consultar
    assert len(list(cursor)) == 1
    assert len(list(cursor)) == 1
    assert cursor.count() == 1


def test_cursor_notification_uri(provider):
    assert provider.query("/pets/3").notification_uri == "/pets/3"


def test_collection_cursor_sees_item_changes(provider, rex):
    cursor = provider.query("/pets")
    seen = []
    cursor.register_observer(seen.append)

    uri = provider.insert("/pets", rex)
    provider.update(uri, {"name": "Max"})
    provider.delete(uri)
    assert seen == ["/pets", uri, uri]


def test_item_cursor_sees_collection_changes(provider, rex):
    uri = provider.insert("/pets", rex)
    cursor = provider.query(uri)
    seen = []
    cursor.register_observer(seen.append)

    provider.delete("/pets")
    assert seen == ["/pets"]


def test_closed_cursor(provider, notifier):
    cursor = provider.query("/pets")
    seen = []
    cursor.register_observer(seen.append)
    before = notifier.observer_count()
    cursor.close()

    assert notifier.observer_count() == before - 1
    with pytest.raises(RuntimeError):
        cursor.fetchall()
    provider.insert("/pets", {"name": "Rex", "gender": 0})
    assert seen == []


def test_closing_one_cursor_keeps_other_observers(provider):
    seen = []
    first = provider.query("/pets")
    second = provider.query("/pets")
    first.register_observer(seen.append)
    second.register_observer(seen.append)

    first.close()
    provider.insert("/pets", {"name": "Rex", "gender": 0})
    assert seen == ["/pets"]


def test_cursor_unregister_keeps_direct_observers(provider, notifier):
    seen = []
    notifier.register_observer("/pets", seen.append)
    cursor = provider.query("/pets")
    cursor.register_observer(seen.append)

    cursor.unregister_observer(seen.append)
    provider.insert("/pets", {"name": "Rex", "gender": 0})
    assert seen == ["/pets"]
