from karaoke_sync.lrc.model import Timeline, TimedLine
from karaoke_sync.sync.tracker import LineTracker


def test_tracker_changed_only_on_change():
    tl = Timeline(
        (
            TimedLine(500, "a"),
            TimedLine(1000, "b"),
            TimedLine(2000, "c"),
        )
    )
    tr = LineTracker(tl)
    # before the first line, the first line is still the active one
    assert tr.changed_index(0) == 0
    assert tr.changed_index(10) is None
    assert tr.changed_index(999) is None
    assert tr.changed_index(1000) == 1
    assert tr.changed_index(1500) is None
    assert tr.changed_index(2500) == 2
    # seeking back is a change too
    assert tr.changed_index(600) == 0


def test_tracker_reset():
    tr = LineTracker(Timeline((TimedLine(0, "a"),)))
    assert tr.changed_index(5) == 0
    assert tr.changed_index(5) is None
    tr.reset()
    assert tr.changed_index(5) == 0


def test_tracker_empty_timeline():
    tr = LineTracker(Timeline())
    assert tr.current_index(1234) == 0
    assert tr.changed_index(1234) == 0
    assert tr.changed_index(5678) is None
