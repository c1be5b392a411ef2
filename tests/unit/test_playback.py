from __future__ import annotations

import asyncio

import pytest

from channel_voice.errors import ProviderRequestError
from channel_voice.pipeline.playback import PlaybackController
from tests.utils.transport import FakePlayer
from tests.utils.providers import FakeSynthesizer, FakeStreamSynthesizer


async def _until(predicate, timeout: float = 1.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.001)

    await asyncio.wait_for(_poll(), timeout=timeout)


def _controller(synthesizer=None) -> tuple[PlaybackController, FakePlayer, list[bool]]:
    player = FakePlayer()
    changes: list[bool] = []
    controller = PlaybackController(player, synthesizer or FakeSynthesizer(), on_change=changes.append)
    return controller, player, changes


@pytest.mark.asyncio
async def test_speak_plays_payload_and_clears_on_idle() -> None:
    controller, player, changes = _controller()

    task = asyncio.create_task(controller.speak("hi"))
    await _until(lambda: len(player.played) == 1)
    assert controller.speaking
    assert player.played[0].data == b"audio:hi"
    assert player.played[0].format == "mp3"

    player.finish()
    await task

    assert not controller.speaking
    assert changes == [True, False]
    assert player.listener_count("idle") == 0
    assert player.listener_count("error") == 0


@pytest.mark.asyncio
async def test_new_speak_supersedes_and_clears_exactly_once() -> None:
    controller, player, changes = _controller()

    first = asyncio.create_task(controller.speak("one"))
    await _until(lambda: len(player.played) == 1)
    second = asyncio.create_task(controller.speak("two"))
    await _until(lambda: len(player.played) == 2)

    await first
    assert controller.speaking
    assert player.played[1].data == b"audio:two"

    player.finish()
    await second

    assert changes == [True, False]
    assert not controller.speaking


@pytest.mark.asyncio
async def test_stop_is_synchronous_and_clears_once() -> None:
    controller, player, changes = _controller()

    task = asyncio.create_task(controller.speak("long answer"))
    await _until(lambda: player.playing)

    assert controller.stop() is True
    assert not controller.speaking
    assert not player.playing
    await task

    assert changes == [True, False]
    assert controller.stop() is False


@pytest.mark.asyncio
async def test_provider_error_clears_speaking_and_reaches_caller() -> None:
    synthesizer = FakeSynthesizer(error=ProviderRequestError("tts down", provider="openai", status=503))
    controller, player, changes = _controller(synthesizer)

    with pytest.raises(ProviderRequestError):
        await controller.speak("hi")

    assert not controller.speaking
    assert changes == [True, False]
    assert player.played == []


@pytest.mark.asyncio
async def test_player_error_ends_the_run() -> None:
    controller, player, changes = _controller()

    task = asyncio.create_task(controller.speak("hi"))
    await _until(lambda: player.playing)
    player.fail(RuntimeError("encoder crashed"))
    await task

    assert not controller.speaking
    assert changes == [True, False]


@pytest.mark.asyncio
async def test_streaming_synthesis_starts_from_first_frame() -> None:
    synthesizer = FakeStreamSynthesizer(frames=(b"a", b"b", b"c"))
    controller, player, _changes = _controller(synthesizer)

    task = asyncio.create_task(controller.speak("hi"))
    await _until(lambda: len(player.played) == 1)

    source = player.played[0]
    assert source.streamed
    assert source.format == "opus"
    frames = [frame async for frame in source.data]
    assert frames == [b"a", b"b", b"c"]

    player.finish()
    await task
    assert not controller.speaking


@pytest.mark.asyncio
async def test_close_stops_and_waits_for_the_run() -> None:
    controller, player, changes = _controller()

    task = asyncio.create_task(controller.speak("hi"))
    await _until(lambda: player.playing)
    await controller.close()
    await task

    assert not controller.speaking
    assert changes == [True, False]


@pytest.mark.asyncio
async def test_superseded_and_stopped_streams_are_closed() -> None:
    synthesizer = FakeStreamSynthesizer()
    controller, player, _changes = _controller(synthesizer)

    first = asyncio.create_task(controller.speak("one"))
    await _until(lambda: len(player.played) == 1)
    second = asyncio.create_task(controller.speak("two"))
    await _until(lambda: len(player.played) == 2)
    await first

    assert synthesizer.closes == 1

    assert controller.stop() is True
    await second

    assert synthesizer.closes == 2
    assert not controller.speaking
