import asyncio

import pytest

from mytube.common.errors import ProcessError
from mytube.media.ffmpeg import (
    FfmpegService,
    build_concat_args,
    format_duration,
    thumbnail_candidates,
)
from mytube.media.ffprobe import MediaProber
from mytube.media.process_runner import ProcessResult


class ScriptedRunner:
    def __init__(self, outputs):
        self.outputs = outputs
        self.calls = []

    async def run(self, command, args, timeout=None):
        self.calls.append((command, list(args), timeout))
        output = self.outputs[args[-1]]
        if isinstance(output, Exception):
            raise output
        return ProcessResult(stdout=output, stderr="")


@pytest.mark.parametrize(
    "stdout, expected",
    [
        ("audio\n", True),
        ("audio", True),
        ("", False),
        ("video\n", False),
        ("audio\naudio\n", False),
    ],
)
def test_has_audio_only_on_exact_marker(stdout, expected) -> None:
    prober = MediaProber(ScriptedRunner({"in.mp4": stdout}))
    assert asyncio.run(prober.has_audio_stream("in.mp4")) is expected


def test_probe_failure_means_no_audio() -> None:
    prober = MediaProber(ScriptedRunner({"in.mp4": ProcessError("ffprobe exited with code 1")}))
    assert asyncio.run(prober.has_audio_stream("in.mp4")) is False


def test_probe_restricts_to_first_audio_stream() -> None:
    runner = ScriptedRunner({"in.mp4": "audio"})
    asyncio.run(MediaProber(runner, ffprobe_binary="/opt/ffprobe").has_audio_stream("in.mp4"))
    command, args, _ = runner.calls[0]
    assert command == "/opt/ffprobe"
    assert args[args.index("-select_streams") + 1] == "a:0"


def test_audio_flags_keep_input_order() -> None:
    runner = ScriptedRunner({"a.mp4": "audio", "b.mp4": "", "c.mp4": ProcessError("x"), "d.mp4": "audio"})
    flags = asyncio.run(MediaProber(runner).probe_audio_flags(["a.mp4", "b.mp4", "c.mp4", "d.mp4"]))
    assert flags == [True, False, False, True]


@pytest.mark.parametrize(
    "stdout, expected",
    [("12.5\n", 12.5), ("N/A", None), ("0", None), ("", None)],
)
def test_duration_probe(stdout, expected) -> None:
    prober = MediaProber(ScriptedRunner({"out.mp4": stdout}))
    assert asyncio.run(prober.get_duration_seconds("out.mp4")) == expected


def test_concat_args_order_and_profile() -> None:
    args = build_concat_args(["/s/in0.mp4", "/s/in1.mp4"], "GRAPH", "/s/out.mp4")

    assert args[:4] == ["-i", "/s/in0.mp4", "-i", "/s/in1.mp4"]
    assert args[args.index("-filter_complex") + 1] == "GRAPH"
    maps = [args[i + 1] for i, a in enumerate(args) if a == "-map"]
    assert maps == ["[vout]", "[aout]"]
    assert args[args.index("-c:v") + 1] == "libx264"
    assert args[args.index("-crf") + 1] == "22"
    assert args[args.index("-c:a") + 1] == "aac"
    assert args[args.index("-b:a") + 1] == "128k"
    assert args[args.index("-movflags") + 1] == "+faststart"
    assert args[-1] == "/s/out.mp4"


def test_format_duration() -> None:
    assert format_duration(6.0) == "0:06"
    assert format_duration(87.4) == "1:27"
    assert format_duration(3725) == "1:02:05"
    assert format_duration(None) is None


def test_thumbnail_candidates() -> None:
    assert thumbnail_candidates(None) == [30, 10, 3, 1]
    assert thumbnail_candidates(120) == [60, 30, 10, 3, 1]
    # short clips clamp every candidate inside the video
    assert thumbnail_candidates(6) == [3, 5, 1]


def test_thumbnail_falls_back_to_next_candidate(tmp_path) -> None:
    class FlakyRunner:
        def __init__(self):
            self.seconds = []

        async def run(self, command, args, timeout=None):
            second = int(args[args.index("-ss") + 1])
            self.seconds.append(second)
            if second == 60:
                raise ProcessError("seek past end")
            return ProcessResult(stdout="", stderr="")

    runner = FlakyRunner()
    service = FfmpegService(runner, MediaProber(runner))
    used = asyncio.run(service.generate_thumbnail("v.mp4", str(tmp_path / "t.jpg"), 120))

    assert used == 30
    assert runner.seconds == [60, 30]


def test_thumbnail_raises_when_every_candidate_fails(tmp_path) -> None:
    class BrokenRunner:
        async def run(self, command, args, timeout=None):
            raise ProcessError("no frames")

    runner = BrokenRunner()
    service = FfmpegService(runner, MediaProber(runner))
    with pytest.raises(ProcessError):
        asyncio.run(service.generate_thumbnail("v.mp4", str(tmp_path / "t.jpg"), None))
