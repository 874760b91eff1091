import threading

from line_engine.buffer import UndoEntry, UndoHistory


def make_history(*states: tuple[str, int]) -> UndoHistory:
    history = UndoHistory()
    for text, cursor_position in states:
        history.save(text, cursor_position)
    return history


def test_save_pushes_distinct_texts() -> None:
    history = make_history(("one", 3), ("two", 3))

    assert history.undo_stack == [UndoEntry("one", 3), UndoEntry("two", 3)]
    assert history.can_undo()
    assert not history.can_redo()


def test_save_with_same_text_only_updates_cursor() -> None:
    history = make_history(("hello", 1), ("hello", 4))

    assert len(history) == 1
    assert history.undo_stack[-1] == UndoEntry("hello", 4)


def test_pop_undo_skips_entries_matching_current_text() -> None:
    history = make_history(("a", 1), ("b", 1))

    entry = history.pop_undo("b", 1)

    assert entry == UndoEntry("a", 1)
    assert history.redo_stack == [UndoEntry("b", 1)]
    assert history.undo_stack == []


def test_pop_undo_on_empty_stack() -> None:
    history = UndoHistory()

    assert history.pop_undo("text", 0) is None
    assert history.redo_stack == []


def test_pop_undo_clamps_cursor() -> None:
    history = UndoHistory()
    history.save("ab", 2)

    assert history.pop_undo("abcdef", 6) == UndoEntry("ab", 2)
    assert UndoEntry("ab", 9).clamped() == UndoEntry("ab", 2)


def test_pop_redo_saves_current_state() -> None:
    history = make_history(("one", 3))
    history.pop_undo("two", 3)

    entry = history.pop_redo("one", 3)

    assert entry == UndoEntry("two", 3)
    assert history.undo_stack == [UndoEntry("one", 3)]
    assert not history.can_redo()


def test_pop_redo_on_empty_stack_changes_nothing() -> None:
    history = make_history(("one", 3))

    assert history.pop_redo("two", 3) is None
    assert history.undo_stack == [UndoEntry("one", 3)]


def test_fresh_save_discards_redo_branch() -> None:
    history = make_history(("one", 3))
    history.pop_undo("two", 3)

    history.save("one", 2)

    assert not history.can_redo()


def test_save_can_keep_redo_branch() -> None:
    history = make_history(("one", 3))
    history.pop_undo("two", 3)

    history.save("other", 0, clear_redo_stack=False)

    assert history.can_redo()


def test_clear() -> None:
    history = make_history(("one", 3), ("two", 3))
    history.pop_undo("three", 5)

    history.clear()

    assert not history.can_undo()
    assert not history.can_redo()


def test_concurrent_saves_lose_nothing() -> None:
    history = UndoHistory()
    barrier = threading.Barrier(4)

    def worker(prefix: str) -> None:
        barrier.wait()
        for i in range(200):
            history.save(f"{prefix}{i}", i)

    threads = [threading.Thread(target=worker, args=(name,)) for name in "abcd"]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    texts = [entry.text for entry in history.undo_stack]
    assert len(set(texts)) == 800
