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

import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field
from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from mytube.common.base_repository import BaseDocument
from mytube.database import Base

DEFAULT_CATEGORY = "Other"
PLACEHOLDER_THUMB = "placeholder.jpg"


class VisibilityEnum(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    UNLISTED = "unlisted"


class Video(Base):
    """
    SQLAlchemy model for the 'videos' table.
    `filename` holds the object-storage key of the playable file.
    """
    __tablename__ = "videos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False, default="")
    category: Mapped[str] = mapped_column(String, nullable=False, default=DEFAULT_CATEGORY)
    visibility: Mapped[str] = mapped_column(String, nullable=False, default=VisibilityEnum.PUBLIC.value)
    filename: Mapped[str] = mapped_column(String, nullable=False)
    thumb: Mapped[str] = mapped_column(String, nullable=False, default=PLACEHOLDER_THUMB)
    duration_text: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tags: Mapped[List[str]] = mapped_column(ARRAY(String), nullable=False, default=list)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=func.now(),
        server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=func.now(),
        onupdate=func.now(),
        server_default=func.now()
    )


class VideoModel(BaseDocument):
    """A published video row."""

    user_id: int
    title: str
    description: str = ""
    category: str = DEFAULT_CATEGORY
    visibility: VisibilityEnum = VisibilityEnum.PUBLIC
    filename: str
    thumb: str = PLACEHOLDER_THUMB
    duration_text: Optional[str] = None
    views: int = 0
    tags: List[str] = Field(default_factory=list)


class SourceAssetModel(BaseModel):
    """A stored video that a timeline clip points at."""

    source_id: str
    storage_key: str
