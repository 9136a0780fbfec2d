from PySide6.QtCore import Qt

from folio.models.gallery_navigation import GalleryNavigator


def test_next_and_previous_wrap_when_looping():
    nav = GalleryNavigator(item_count=3, loop=True)

    nav.go_to_previous()
    assert nav.current_index == 2
    nav.go_to_next()
    assert nav.current_index == 0
    nav.go_to_next()
    assert nav.current_index == 1


def test_navigation_stops_at_edges_without_loop():
    nav = GalleryNavigator(item_count=3, initial_index=2, loop=False)

    nav.go_to_next()
    assert nav.current_index == 2
    nav.go_to_index(0)
    nav.go_to_previous()
    assert nav.current_index == 0


def test_single_item_does_not_move():
    nav = GalleryNavigator(item_count=1, loop=True)

    nav.go_to_next()
    nav.go_to_previous()

    assert nav.current_index == 0


def test_go_to_index_ignores_out_of_range():
    nav = GalleryNavigator(item_count=3, loop=True)

    nav.go_to_index(5)
    nav.go_to_index(-1)
    assert nav.current_index == 0
    nav.go_to_index(2)
    assert nav.current_index == 2


def test_shrinking_item_count_clamps_index():
    nav = GalleryNavigator(item_count=5, initial_index=4, loop=True)
    emitted = []
    nav.index_changed.connect(emitted.append)

    nav.set_item_count(2)
    assert nav.current_index == 1
    nav.set_item_count(0)
    assert nav.current_index == 0
    assert emitted == [1, 0]


def test_handle_key_arrows_and_escape():
    nav = GalleryNavigator(item_count=3, loop=True)
    closed = []
    nav.close_requested.connect(lambda: closed.append(True))

    assert nav.handle_key(Qt.Key.Key_Right) is True
    assert nav.current_index == 1
    assert nav.handle_key(Qt.Key.Key_Left) is True
    assert nav.current_index == 0
    assert nav.handle_key(Qt.Key.Key_Escape) is True
    assert closed == [True]
    assert nav.handle_key(Qt.Key.Key_A) is False


def test_custom_keys_take_precedence():
    calls = []
    nav = GalleryNavigator(item_count=3, loop=True,
                           custom_keys={Qt.Key.Key_Right: lambda: calls.append("right")})

    assert nav.handle_key(Qt.Key.Key_Right) is True
    assert calls == ["right"]
    assert nav.current_index == 0
