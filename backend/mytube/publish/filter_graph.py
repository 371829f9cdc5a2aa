# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from decimal import Decimal
from typing import List, Sequence

from mytube.publish.dto.publish_dto import ClipSpec

VIDEO_OUT = "[vout]"
AUDIO_OUT = "[aout]"


def format_seconds(value: float) -> str:
    """3.0 -> "3", 2.5 -> "2.5", 1e-05 -> "0.00001". ffmpeg rejects exponents."""
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def build_concat_filter(clips: Sequence[ClipSpec], audio_flags: Sequence[bool]) -> str:
    """
    Builds the -filter_complex program that plays the clips back to back.

    Input i of the ffmpeg command must be the source of clips[i]. Timeline
    start offsets are ignored: the output lasts exactly the sum of the clip
    durations. Every clip yields a video and an audio pad, with silence of
    the clip's own duration standing in when its source has no audio.
    """
    if not clips:
        raise ValueError("Cannot build a filter graph for an empty timeline")
    if len(audio_flags) != len(clips):
        raise ValueError(
            f"Expected {len(clips)} audio flags, got {len(audio_flags)}"
        )

    filter_chains: List[str] = []
    concat_inputs: List[str] = []

    for i, clip in enumerate(clips):
        start = format_seconds(clip.trim_in)
        duration = format_seconds(max(0.0, clip.duration))

        filter_chains.append(
            f"[{i}:v]trim=start={start}:duration={duration},setpts=PTS-STARTPTS[v{i}]"
        )

        if audio_flags[i]:
            filter_chains.append(
                f"[{i}:a]atrim=start={start}:duration={duration},asetpts=PTS-STARTPTS[a{i}]"
            )
        else:
            filter_chains.append(f"aevalsrc=0:d={duration}[a{i}]")

        # concat wants the pads interleaved per segment
        concat_inputs.append(f"[v{i}][a{i}]")

    filter_chains.append(
        f"{''.join(concat_inputs)}concat=n={len(clips)}:v=1:a=1{VIDEO_OUT}{AUDIO_OUT}"
    )
    return ";".join(filter_chains)
