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

import logging
import math
import os
from typing import List, Optional, Sequence

from mytube.common.errors import ProcessError
from mytube.media.ffprobe import MediaProber
from mytube.media.process_runner import ProcessRunner

logger = logging.getLogger(__name__)

# H.264 / AAC, moov atom up front for progressive playback
ENCODE_PROFILE = [
    "-c:v", "libx264",
    "-preset", "veryfast",
    "-crf", "22",
    "-c:a", "aac",
    "-b:a", "128k",
    "-movflags", "+faststart",
]


def build_concat_args(
    input_paths: Sequence[str],
    filter_graph: str,
    output_path: str,
    video_label: str = "[vout]",
    audio_label: str = "[aout]",
) -> List[str]:
    args: List[str] = []
    for path in input_paths:
        args.extend(["-i", path])
    args.extend([
        "-y",
        "-hide_banner",
        "-loglevel", "error",
        "-filter_complex", filter_graph,
        "-map", video_label,
        "-map", audio_label,
        *ENCODE_PROFILE,
        output_path,
    ])
    return args


def format_duration(seconds: Optional[float]) -> Optional[str]:
    """87.4 -> "1:27", 3725 -> "1:02:05"."""
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        return None
    total = int(round(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def thumbnail_candidates(duration: Optional[float]) -> List[int]:
    """Seconds to try grabbing a frame at, best first."""
    if not duration or duration <= 0:
        return [30, 10, 3, 1]

    last = max(0, math.floor(duration - 0.25))
    half = min(max(math.floor(duration * 0.5), 1), max(1, math.floor(duration - 1)))

    candidates: List[int] = []
    for t in (half, 30, 10, 3, 1):
        t = min(max(t, 0), last)
        if t not in candidates:
            candidates.append(t)
    return candidates


class FfmpegService:
    def __init__(
        self,
        runner: ProcessRunner,
        prober: MediaProber,
        ffmpeg_binary: str = "ffmpeg",
    ):
        self.runner = runner
        self.prober = prober
        self.ffmpeg_binary = ffmpeg_binary

    async def concat(
        self,
        input_paths: Sequence[str],
        filter_graph: str,
        output_path: str,
        timeout: Optional[float] = None,
    ) -> str:
        args = build_concat_args(input_paths, filter_graph, output_path)
        await self.runner.run(self.ffmpeg_binary, args, timeout=timeout)
        return output_path

    async def generate_thumbnail(
        self, video_path: str, thumb_path: str, duration: Optional[float] = None
    ) -> int:
        """
        Grabs one 640px-wide frame, halfway through when the duration is
        known. Returns the second used; raises the last ProcessError when
        every candidate fails.
        """
        last_error: Optional[ProcessError] = None
        for second in thumbnail_candidates(duration):
            try:
                await self.runner.run(
                    self.ffmpeg_binary,
                    [
                        "-y",
                        "-hide_banner",
                        "-loglevel", "error",
                        "-ss", str(second),
                        "-i", video_path,
                        "-frames:v", "1",
                        "-vf", "scale=640:-1",
                        "-q:v", "3",
                        thumb_path,
                    ],
                )
                return second
            except ProcessError as e:
                last_error = e
                if os.path.exists(thumb_path):
                    os.remove(thumb_path)
        raise last_error or ProcessError("Thumbnail generation failed")
