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
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from mytube.common.errors import ProcessError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    stdout: str
    stderr: str


class ProcessRunner:
    """
    Runs one external command to completion and captures its output.

    Success means exit status 0. Anything else, including a missing binary
    or an expired timeout, raises ProcessError. There are no retries.
    """

    async def run(
        self,
        command: str,
        args: Sequence[str],
        timeout: Optional[float] = None,
    ) -> ProcessResult:
        cmd = [command, *args]
        try:
            # subprocess.run kills the child itself when the timeout expires
            process = await asyncio.to_thread(
                subprocess.run,
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=timeout,
            )
        except FileNotFoundError as e:
            raise ProcessError(f"{command} not found: {e}") from e
        except subprocess.TimeoutExpired as e:
            logger.error(f"{command} killed after {timeout}s")
            raise ProcessError(f"{command} timed out after {timeout}s") from e
        except OSError as e:
            raise ProcessError(f"{command} could not be started: {e}") from e

        stdout = process.stdout.decode(errors="replace")
        stderr = process.stderr.decode(errors="replace")

        if process.returncode != 0:
            message = stderr.strip() or f"{command} exited with code {process.returncode}"
            raise ProcessError(message, returncode=process.returncode)

        return ProcessResult(stdout=stdout, stderr=stderr)
