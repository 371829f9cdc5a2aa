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
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from mytube.database import Base


class BaseDocument(BaseModel):
    """Pydantic view of a row with an integer primary key."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: Optional[int] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None


ModelT = TypeVar("ModelT", bound=Base)
SchemaT = TypeVar("SchemaT", bound=BaseDocument)


class BaseRepository(Generic[ModelT, SchemaT]):
    """
    Generic CRUD over one SQLAlchemy model, returning pydantic schemas.
    Subclasses add the feature-specific queries.
    """

    def __init__(self, model: Type[ModelT], schema: Type[SchemaT], db: AsyncSession):
        self.model = model
        self.schema = schema
        self.db = db

    async def create(self, data: SchemaT | Dict[str, Any]) -> SchemaT:
        values = data if isinstance(data, dict) else data.model_dump(
            mode="json", exclude_none=True, exclude={"created_at", "updated_at"}
        )
        row = self.model(**values)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return self.schema.model_validate(row)

    async def update(self, item_id: Any, update_data: SchemaT | Dict[str, Any]) -> Optional[SchemaT]:
        row = await self.db.get(self.model, item_id)
        if row is None:
            return None
        values = update_data if isinstance(update_data, dict) else update_data.model_dump(
            mode="json", exclude_unset=True, exclude={"id", "created_at", "updated_at"}
        )
        for key, value in values.items():
            setattr(row, key, value)
        await self.db.commit()
        await self.db.refresh(row)
        return self.schema.model_validate(row)
