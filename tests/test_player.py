import pytest

from treeviz import PlaybackState, TracePlayer

from tests.helpers import build


@pytest.fixture
def player():
    tree = build("avl", [10, 20])
    return TracePlayer(tree.insert(30, trace=True).steps)


def test_navigation(player):
    assert player.at_start and not player.at_end
    first = player.current
    second = player.next()
    assert player.index == 1 and second is player.steps[1]
    assert player.prev() is first
    assert player.prev() is first          # clamps at the start

    last = player.go_end()
    assert player.at_end and last is player.steps[-1]
    assert player.next() is last           # clamps at the end
    assert player.reset() is first


def test_seek(player):
    assert player.seek(-1) is player.steps[-1]
    assert player.seek(2) is player.steps[2]
    with pytest.raises(IndexError):
        player.seek(player.total)
    with pytest.raises(IndexError):
        player.seek(-player.total - 1)


def test_autoplay_runs_to_the_end(player):
    assert player.play()
    assert player.playing
    visited = [player.current]
    while player.playing:
        step = player.tick()
        if step is not None:
            visited.append(step)
    assert visited == list(player.steps)
    assert player.state is PlaybackState.IDLE
    assert player.tick() is None


def test_pause_and_resume(player):
    player.play()
    player.tick()
    assert player.toggle() is PlaybackState.PAUSED
    assert player.tick() is None
    assert player.index == 1
    assert player.toggle() is PlaybackState.PLAYING
    player.tick()
    assert player.index == 2


def test_play_at_end_restarts(player):
    player.go_end()
    player.play()
    assert player.index == 0


def test_stop_keeps_position(player):
    player.play()
    player.tick()
    player.stop()
    assert player.state is PlaybackState.IDLE
    assert player.index == 1


def test_remaining_time(player):
    total = sum(s.suggested_duration_ms for s in player.steps)
    assert player.remaining_ms() == total - player.current.suggested_duration_ms
    player.go_end()
    assert player.remaining_ms() == 0


def test_empty_trace():
    player = TracePlayer(None)
    assert player.current is None
    assert len(player) == 0
    assert player.at_end
    assert not player.play()
    assert player.next() is None
    with pytest.raises(IndexError):
        player.seek(0)


def test_replay_never_touches_the_tree():
    tree = build("redblack", [10, 20])
    steps = tree.insert(30, trace=True).steps
    before = tree.traverse("levelorder")
    player = TracePlayer(steps)
    player.go_end()
    player.reset()
    assert tree.traverse("levelorder") == before
    assert list(player) == list(steps)
