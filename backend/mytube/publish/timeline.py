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

"""Coercion of client-submitted timelines, tags and visibility."""

import math
from typing import Any, List, Optional

from mytube.publish.dto.publish_dto import ClipSpec
from mytube.videos.schema.video_model import VisibilityEnum

MAX_TAGS = 30


def _coerce_source_id(entry: dict) -> str:
    # videoId wins over id, but only when it is non-empty
    for field in ("videoId", "id"):
        value = entry.get(field)
        if value is None:
            continue
        text = str(value)
        if text:
            return text
    return ""


def _coerce_number(value: Any) -> float:
    """
    Missing values become 0. Anything that is not a number or a numeric
    string becomes NaN so the clip gets dropped.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # ints beyond float range
            return math.nan
    if isinstance(value, str):
        if not value.strip():
            return 0.0
        try:
            return float(value)
        except ValueError:
            return math.nan
    return math.nan


def normalize_timeline(raw: Any) -> List[ClipSpec]:
    """
    Turns whatever the client sent into a clean, start-sorted clip list.

    Entries are dropped when they have no source id, a non-finite number,
    `out <= in` or a negative start. A non-list input yields an empty list;
    emptiness is for the caller to reject.
    """
    if not isinstance(raw, list):
        return []

    clips = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        source_id = _coerce_source_id(entry)
        start = _coerce_number(entry.get("start"))
        trim_in = _coerce_number(entry.get("in"))
        trim_out = _coerce_number(entry.get("out"))

        if not source_id:
            continue
        if not all(math.isfinite(n) for n in (start, trim_in, trim_out)):
            continue
        if trim_out <= trim_in or start < 0:
            continue

        clips.append(
            ClipSpec(
                source_id=source_id,
                timeline_start=start,
                trim_in=trim_in,
                trim_out=trim_out,
            )
        )

    # sorted() is stable, ties keep input order
    return sorted(clips, key=lambda c: c.timeline_start)


def normalize_tags(raw: Optional[str], limit: int = MAX_TAGS) -> List[str]:
    """Comma-separated tags -> trimmed, lowercased, unique, at most `limit`."""
    tags: List[str] = []
    seen = set()
    for part in str(raw or "").split(","):
        tag = part.strip().lower()
        if not tag or tag in seen:
            continue
        seen.add(tag)
        tags.append(tag)
        if len(tags) == limit:
            break
    return tags


def normalize_visibility(raw: Optional[str]) -> VisibilityEnum:
    try:
        return VisibilityEnum(str(raw or "").strip().lower())
    except ValueError:
        return VisibilityEnum.PUBLIC
