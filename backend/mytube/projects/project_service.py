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
from typing import List

from fastapi import Depends

from mytube.common.errors import NotFoundError
from mytube.projects.dto.project_dto import (
    ProjectCreateDto,
    ProjectDetailDto,
    ProjectSummaryDto,
    ProjectUpdateDto,
)
from mytube.projects.repository.project_repository import ProjectRepository
from mytube.projects.schema.project_model import ProjectModel
from mytube.users.user_model import UserModel

logger = logging.getLogger(__name__)


class ProjectService:
    """Saved timelines, scoped to their owner."""

    def __init__(self, project_repository: ProjectRepository = Depends()):
        self.project_repository = project_repository

    async def list_projects(self, user: UserModel) -> List[ProjectSummaryDto]:
        projects = await self.project_repository.list_for_user(user.id)
        return [
            ProjectSummaryDto(
                id=p.id,
                title=p.title,
                created_at=p.created_at,
                updated_at=p.updated_at,
            )
            for p in projects
        ]

    async def create_project(self, dto: ProjectCreateDto, user: UserModel) -> int:
        created = await self.project_repository.create(
            ProjectModel(user_id=user.id, title=dto.title, timeline=[])
        )
        logger.info(f"Created project {created.id} for user {user.id}")
        return created.id

    async def get_project(self, project_id: int, user: UserModel) -> ProjectDetailDto:
        project = await self.project_repository.get_for_user(project_id, user.id)
        if project is None:
            raise NotFoundError("Not found")
        return ProjectDetailDto(id=project.id, title=project.title, timeline=project.timeline)

    async def save_project(self, project_id: int, dto: ProjectUpdateDto, user: UserModel) -> None:
        # Ownership check first; update() alone would touch anyone's project
        project = await self.project_repository.get_for_user(project_id, user.id)
        if project is None:
            raise NotFoundError("Not found")

        update_data = dto.model_dump(exclude_none=True)
        if not update_data:
            return
        await self.project_repository.update(project_id, update_data)
