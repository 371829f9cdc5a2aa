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

from typing import List, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mytube.common.base_repository import BaseRepository
from mytube.database import get_db
from mytube.projects.schema.project_model import Project, ProjectModel


class ProjectRepository(BaseRepository[Project, ProjectModel]):
    """Handles persistence for saved timeline projects in PostgreSQL."""

    def __init__(self, db: AsyncSession = Depends(get_db)):
        super().__init__(model=Project, schema=ProjectModel, db=db)

    async def list_for_user(self, user_id: int) -> List[ProjectModel]:
        query = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.updated_at.desc())
        )
        result = await self.db.execute(query)
        return [self.schema.model_validate(p) for p in result.scalars().all()]

    async def get_for_user(self, project_id: int, user_id: int) -> Optional[ProjectModel]:
        query = select(self.model).where(
            self.model.id == project_id,
            self.model.user_id == user_id,
        )
        result = await self.db.execute(query)
        project = result.scalar_one_or_none()
        if project is None:
            return None
        return self.schema.model_validate(project)
