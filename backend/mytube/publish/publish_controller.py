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

from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as Status

from mytube.auth.auth_guard import get_current_user
from mytube.common.errors import MyTubeError, ValidationError
from mytube.publish.dto.publish_dto import PublishRequestDto, PublishResponseDto
from mytube.publish.publish_service import PublishService
from mytube.users.user_model import UserModel

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/generate",
    tags=["Generate"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/publish",
    response_model=PublishResponseDto,
    response_model_by_alias=True,
)
async def publish_timeline(
    publish_request: PublishRequestDto,
    current_user: UserModel = Depends(get_current_user),
    service: PublishService = Depends(),
):
    """Renders the submitted timeline and publishes it as a new video."""
    try:
        return await service.publish(publish_request, current_user)
    except ValidationError as validation_error:
        raise HTTPException(
            status_code=validation_error.status_code,
            detail=validation_error.public_message,
        )
    except MyTubeError as e:
        logger.exception(f"POST /api/generate/publish failed: {e}")
        raise HTTPException(status_code=e.status_code, detail=e.public_message)
    except Exception as e:
        logger.exception(f"POST /api/generate/publish error: {e}")
        raise HTTPException(
            status_code=Status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to publish generated video",
        )
