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

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClipSpec(BaseModel):
    """One trimmed source clip on a normalized timeline."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    timeline_start: float
    trim_in: float
    trim_out: float

    @property
    def duration(self) -> float:
        return self.trim_out - self.trim_in


class StagedInput(BaseModel):
    """A downloaded source file; `index` is its position on the timeline."""

    index: int
    local_path: str
    has_audio: bool = False


class PublishRequestDto(BaseModel):
    """
    Body of POST /api/generate/publish. The timeline is kept raw on purpose:
    malformed entries are dropped by the normalizer instead of failing the
    whole request.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = ""
    tags: Optional[str] = ""
    visibility: Optional[str] = "public"
    timeline_name: Optional[str] = Field(default="Timeline", alias="timelineName")
    timeline: Any = None

    @field_validator("title", "description", "tags", "visibility", "timeline_name", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> Any:
        # Loose clients send tag arrays, numeric titles and the like
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (list, tuple)):
            return ",".join(str(item) for item in value)
        return str(value)


class PublishResponseDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    video_id: int = Field(serialization_alias="videoId")
    timeline_name: Optional[str] = Field(default=None, serialization_alias="timelineName")
    playback_url: Optional[str] = Field(default=None, serialization_alias="playbackUrl")
