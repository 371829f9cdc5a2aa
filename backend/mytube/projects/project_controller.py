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

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from mytube.auth.auth_guard import get_current_user
from mytube.common.errors import NotFoundError
from mytube.projects.dto.project_dto import (
    ProjectCreateDto,
    ProjectCreatedDto,
    ProjectDetailDto,
    ProjectSummaryDto,
    ProjectUpdateDto,
)
from mytube.projects.project_service import ProjectService
from mytube.users.user_model import UserModel

router = APIRouter(
    prefix="/api/generate/projects",
    tags=["Generate Projects"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[ProjectSummaryDto])
async def list_projects(
    current_user: UserModel = Depends(get_current_user),
    service: ProjectService = Depends(),
):
    """Lists the caller's projects, most recently edited first."""
    return await service.list_projects(current_user)


@router.post("", response_model=ProjectCreatedDto)
async def create_project(
    project_data: ProjectCreateDto,
    current_user: UserModel = Depends(get_current_user),
    service: ProjectService = Depends(),
):
    project_id = await service.create_project(project_data, current_user)
    return ProjectCreatedDto(id=project_id)


@router.get("/{project_id}", response_model=ProjectDetailDto)
async def get_project(
    project_id: int,
    current_user: UserModel = Depends(get_current_user),
    service: ProjectService = Depends(),
):
    try:
        return await service.get_project(project_id, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=e.public_message)


@router.patch("/{project_id}")
async def save_project(
    project_id: int,
    project_data: ProjectUpdateDto,
    current_user: UserModel = Depends(get_current_user),
    service: ProjectService = Depends(),
):
    """Saves the title and/or timeline of an existing project."""
    try:
        await service.save_project(project_id, project_data, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=e.public_message)
    return {"ok": True}
