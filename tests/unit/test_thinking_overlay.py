from __future__ import annotations

from pathlib import Path

from channel_voice.state.settings import OverlaySettings
from channel_voice.pipeline.thinking_overlay import ThinkingOverlay
from tests.utils.transport import FakeConnection


def _settings(path: Path, *, enabled: bool = True) -> OverlaySettings:
    return OverlaySettings(enabled=enabled, path=path, volume=0.7, stop_delay_ms=0)


def _asset(tmp_path: Path) -> Path:
    path = tmp_path / "thinking.mp3"
    path.write_bytes(b"ID3-cue")
    return path


def test_overlay_loops_on_its_own_player(tmp_path: Path) -> None:
    connection = FakeConnection()
    main = connection.create_player()
    overlay = ThinkingOverlay(_settings(_asset(tmp_path)))

    overlay.start(connection, main)

    cue_player = connection.players[-1]
    assert cue_player is not main
    assert connection.subscribed is cue_player
    assert len(cue_player.played) == 1
    assert cue_player.played[0].volume == 0.7
    assert cue_player.played[0].format == "mp3"

    cue_player.finish()
    cue_player.finish()
    assert len(cue_player.played) == 3


def test_stop_halts_loop_and_restores_main(tmp_path: Path) -> None:
    connection = FakeConnection()
    main = connection.create_player()
    stop = ThinkingOverlay(_settings(_asset(tmp_path))).start(connection, main)
    cue_player = connection.players[-1]

    stop()

    assert connection.subscribed is main
    assert cue_player.stops == 1
    assert not cue_player.playing
    assert cue_player.listener_count("idle") == 0
    assert cue_player.listener_count("error") == 0
    cue_player.finish()
    assert len(cue_player.played) == 1


def test_stop_restores_main_on_every_call(tmp_path: Path) -> None:
    connection = FakeConnection()
    main = connection.create_player()
    stop = ThinkingOverlay(_settings(_asset(tmp_path))).start(connection, main)

    stop()
    other = connection.create_player()
    connection.subscribe(other)
    stop()

    assert connection.subscribed is main


def test_missing_asset_only_restores_main(tmp_path: Path) -> None:
    connection = FakeConnection()
    main = connection.create_player()
    stop = ThinkingOverlay(_settings(tmp_path / "nope.mp3")).start(connection, main)

    assert connection.players == [main]
    stop()
    assert connection.subscribed is main


def test_disabled_overlay_creates_no_player(tmp_path: Path) -> None:
    connection = FakeConnection()
    main = connection.create_player()
    stop = ThinkingOverlay(_settings(_asset(tmp_path), enabled=False)).start(connection, main)

    assert connection.players == [main]
    stop()
    assert connection.subscribed is main
