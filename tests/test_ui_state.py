from device_store import DeviceRepository
from ui_state import clear_history, get_history, get_repository, push_history, set_repository


def test_repository_seeded_once():
    state = {}
    repo = get_repository(state)
    assert len(repo) == 3
    assert get_repository(state) is repo


def test_set_repository():
    state = {}
    set_repository(DeviceRepository(), state)
    assert len(get_repository(state)) == 0


def test_history_newest_first_and_capped():
    state = {}
    for i in range(5):
        push_history("h", i, limit=3, state=state)
    assert get_history("h", state) == [4, 3, 2]
    clear_history("h", state)
    assert get_history("h", state) == []
