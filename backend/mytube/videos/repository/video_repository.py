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

from typing import Dict, Iterable

from fastapi import Depends
from sqlalchemy import String, cast, select
from sqlalchemy.ext.asyncio import AsyncSession

from mytube.common.base_repository import BaseRepository
from mytube.database import get_db
from mytube.videos.schema.video_model import SourceAssetModel, Video, VideoModel


class VideoRepository(BaseRepository[Video, VideoModel]):
    """Handles persistence for published videos in PostgreSQL."""

    def __init__(self, db: AsyncSession = Depends(get_db)):
        super().__init__(model=Video, schema=VideoModel, db=db)

    async def find_source_assets(
        self, source_ids: Iterable[str]
    ) -> Dict[str, SourceAssetModel]:
        """
        Looks up storage keys for a batch of video ids in one query.
        Ids with no row are simply absent from the result.
        """
        distinct_ids = sorted(set(source_ids))
        if not distinct_ids:
            return {}

        query = select(self.model.id, self.model.filename).where(
            cast(self.model.id, String).in_(distinct_ids)
        )
        result = await self.db.execute(query)

        return {
            str(row.id): SourceAssetModel(
                source_id=str(row.id), storage_key=row.filename or ""
            )
            for row in result.all()
        }
