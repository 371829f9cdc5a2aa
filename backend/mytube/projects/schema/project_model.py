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
from typing import Any, List

from pydantic import Field
from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from mytube.common.base_repository import BaseDocument
from mytube.database import Base

DEFAULT_PROJECT_TITLE = "Untitled Project"


class Project(Base):
    """
    SQLAlchemy model for the 'projects' table.
    A saved, still-editable timeline. The timeline is stored exactly as the
    editor sent it; it is only normalized when published.
    """
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False, default=DEFAULT_PROJECT_TITLE)
    timeline: Mapped[List[Any]] = mapped_column(JSONB, nullable=False, default=list)

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


class ProjectModel(BaseDocument):
    user_id: int
    title: str = DEFAULT_PROJECT_TITLE
    timeline: List[Any] = Field(default_factory=list)
