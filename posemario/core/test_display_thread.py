import threading

from posemario.core.display_thread import DisplayThread
from posemario.utils import LatestValue


def make_display(on_pause_toggle=None):
    return DisplayThread(LatestValue(), LatestValue(), [], threading.Event(), on_pause_toggle=on_pause_toggle)


def test_quit_keys_stop_application():
    for key in (27, ord('q')):
        display = make_display()

        assert not display.handle_key(key)
        assert display.stop_event.is_set()


def test_pause_key_requests_toggle():
    toggles = []
    display = make_display(on_pause_toggle=lambda: toggles.append(True))

    assert display.handle_key(ord('p'))
    assert toggles == [True]
    assert not display.stop_event.is_set()


def test_other_keys_ignored():
    display = make_display()

    assert display.handle_key(ord('x'))
    assert not display.stop_event.is_set()
