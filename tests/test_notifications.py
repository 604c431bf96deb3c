from petstore.notifications import ChangeNotifier


def test_exact_path_notified(notifier):
    seen = []
    notifier.register_observer("/pets/3", seen.append)
    notifier.notify_change("/pets/3")
    assert seen == ["/pets/3"]


def test_descendant_changes_reach_parent_observer(notifier):
    seen = []
    notifier.register_observer("/pets", seen.append, notify_for_descendants=True)
    notifier.notify_change("/pets/3")
    assert seen == ["/pets/3"]


def test_descendant_changes_skipped_without_flag(notifier):
    seen = []
    notifier.register_observer("/pets", seen.append, notify_for_descendants=False)
    notifier.notify_change("/pets/3")
    notifier.notify_change("/pets")
    assert seen == ["/pets"]


def test_parent_change_reaches_child_observers(notifier):
    seen = []
    notifier.register_observer("/pets/3", seen.append, notify_for_descendants=False)
    notifier.notify_change("/pets")
    assert seen == ["/pets"]


def test_unrelated_paths_not_notified(notifier):
    seen = []
    notifier.register_observer("/pets/3", seen.append)
    notifier.notify_change("/pets/4")
    notifier.notify_change("/owners")
    assert seen == []


def test_authority_is_ignored_when_keying_paths(notifier):
    seen = []
    notifier.register_observer("/pets", seen.append)
    notifier.notify_change("content://com.example.android.pets/pets/1")
    assert len(seen) == 1


def test_failing_observer_does_not_block_others():
    notifier = ChangeNotifier()
    seen = []

    def broken(uri):
        raise RuntimeError("boom")

    notifier.register_observer("/pets", broken)
    notifier.register_observer("/pets", seen.append)
    notifier.notify_change("/pets")
    assert seen == ["/pets"]


def test_unregister(notifier):
    seen = []
    notifier.register_observer("/pets", seen.append)
    notifier.register_observer("/pets/1", seen.append)
    notifier.unregister_observer(seen.append)
    assert notifier.observer_count() == 0
    notifier.notify_change("/pets")
    assert seen == []


def test_unregister_single_registration(notifier):
    seen = []
    first = notifier.register_observer("/pets", seen.append)
    notifier.register_observer("/pets", seen.append)

    notifier.unregister(first)
    assert notifier.observer_count() == 1
    notifier.notify_change("/pets")
    assert seen == ["/pets"]
