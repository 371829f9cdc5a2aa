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

import asyncio
import logging
import math
from typing import List, Optional, Sequence

from mytube.common.errors import ProcessError
from mytube.media.process_runner import ProcessRunner

logger = logging.getLogger(__name__)


class MediaProber:
    """Best-effort stream inspection with ffprobe. Never raises."""

    def __init__(self, runner: ProcessRunner, ffprobe_binary: str = "ffprobe"):
        self.runner = runner
        self.ffprobe_binary = ffprobe_binary

    async def has_audio_stream(self, path: str) -> bool:
        """
        True only when ffprobe reports exactly "audio" for the first audio
        stream. Probe failures count as no audio, so the caller falls back
        to synthesized silence.
        """
        try:
            result = await self.runner.run(
                self.ffprobe_binary,
                [
                    "-v", "error",
                    "-select_streams", "a:0",
                    "-show_entries", "stream=codec_type",
                    "-of", "default=noprint_wrappers=1:nokey=1",
                    path,
                ],
            )
        except ProcessError as e:
            logger.warning(f"Audio probe failed for {path}: {e}")
            return False
        return result.stdout.strip() == "audio"

    async def probe_audio_flags(self, paths: Sequence[str]) -> List[bool]:
        # gather preserves argument order
        return list(await asyncio.gather(*(self.has_audio_stream(p) for p in paths)))

    async def get_duration_seconds(self, path: str) -> Optional[float]:
        try:
            result = await self.runner.run(
                self.ffprobe_binary,
                [
                    "-v", "error",
                    "-show_entries", "format=duration",
                    "-of", "default=noprint_wrappers=1:nokey=1",
                    path,
                ],
            )
        except ProcessError as e:
            logger.warning(f"Duration probe failed for {path}: {e}")
            return None

        try:
            duration = float(result.stdout.strip())
        except ValueError:
            return None
        if not math.isfinite(duration) or duration <= 0:
            return None
        return duration
