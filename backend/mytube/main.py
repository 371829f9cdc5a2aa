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
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from mytube.common.logging_setup import setup_logging
from mytube.config.config_service import config_service
from mytube.database import dispose_engine
from mytube.projects.project_controller import router as project_router
from mytube.publish.publish_controller import router as publish_router

setup_logging(config_service)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        f"Starting MyTube API (storage={config_service.STORAGE_BACKEND.value}, "
        f"uploads bucket={config_service.UPLOADS_BUCKET or 'unset'})"
    )
    yield
    await dispose_engine()


app = FastAPI(
    title="MyTube API",
    description="Video sharing backend with timeline export",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(publish_router)
app.include_router(project_router)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "healthy"}
