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
from typing import Any, List, Optional

from pydantic import BaseModel

from mytube.projects.schema.project_model import DEFAULT_PROJECT_TITLE


class ProjectCreateDto(BaseModel):
    title: str = DEFAULT_PROJECT_TITLE


class ProjectUpdateDto(BaseModel):
    title: Optional[str] = None
    timeline: Optional[List[Any]] = None


class ProjectSummaryDto(BaseModel):
    id: int
    title: str
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


class ProjectDetailDto(BaseModel):
    id: int
    title: str
    timeline: List[Any]


class ProjectCreatedDto(BaseModel):
    id: int
