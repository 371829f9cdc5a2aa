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
import os
import secrets
import shutil
import tempfile
import time
from typing import List, Optional

from mytube.publish.dto.publish_dto import ClipSpec, StagedInput

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "mytube-export-"


def make_output_name() -> str:
    """export-<epoch ms>-<12 hex chars>.mp4"""
    return f"export-{int(time.time() * 1000)}-{secrets.token_hex(6)}.mp4"


class ExportJob:
    """
    Working context of one publish request.

    Owns a fresh scratch directory with `inputs/` and `out/`. Use it as a
    context manager: the directory is removed on every exit path, and a
    failed removal is logged without hiding the error that got us there.
    """

    def __init__(self, scratch_root: Optional[str] = None):
        self.scratch_dir = tempfile.mkdtemp(prefix=SCRATCH_PREFIX, dir=scratch_root)
        self.inputs_dir = os.path.join(self.scratch_dir, "inputs")
        self.out_dir = os.path.join(self.scratch_dir, "out")
        os.makedirs(self.inputs_dir, exist_ok=True)
        os.makedirs(self.out_dir, exist_ok=True)

        self.clips: List[ClipSpec] = []
        self.staged_inputs: List[StagedInput] = []
        self.output_path: Optional[str] = None

    def input_path(self, index: int, source_id: str) -> str:
        safe_id = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in source_id)
        return os.path.join(self.inputs_dir, f"src-{index}-{safe_id}.mp4")

    def cleanup(self) -> None:
        try:
            shutil.rmtree(self.scratch_dir)
            logger.info(f"Cleaned up temp dir: {self.scratch_dir}")
        except Exception as e:
            logger.error(f"Failed to cleanup temp dir {self.scratch_dir}: {e}")

    def __enter__(self) -> "ExportJob":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
