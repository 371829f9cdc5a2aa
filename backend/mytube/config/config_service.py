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

import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env file from backend directory
_backend_dir = Path(__file__).parent.parent.parent
load_dotenv(_backend_dir / ".env")


class StorageBackendEnum(str, Enum):
    """Where uploaded and exported media lives."""

    AWS = "aws"
    GCS = "gcs"
    LOCAL = "local"


class ConfigService(BaseModel):
    """Process-wide settings, read once from the environment."""

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "postgresql+asyncpg://localhost/mytube"

    # --- Object storage ---
    STORAGE_BACKEND: StorageBackendEnum = StorageBackendEnum.LOCAL
    UPLOADS_BUCKET: Optional[str] = None
    ASSETS_BUCKET: Optional[str] = None
    AWS_REGION: Optional[str] = None
    CDN_UPLOADS_BASE_URL: str = ""
    DATA_ROOT: str = os.path.join(tempfile.gettempdir(), "mytube")

    # --- Media tooling ---
    FFMPEG_BINARY: str = "ffmpeg"
    FFPROBE_BINARY: str = "ffprobe"
    EXPORT_TIMEOUT_SECONDS: Optional[float] = None

    @field_validator("CDN_UPLOADS_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("UPLOADS_BUCKET", "ASSETS_BUCKET", "AWS_REGION", "EXPORT_TIMEOUT_SECONDS", mode="before")
    @classmethod
    def empty_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


def load_config(environ: Optional[dict] = None) -> ConfigService:
    """Builds a ConfigService from environment variables.

    Only variables named like a ConfigService field are picked up; anything
    unset falls back to the field default.
    """
    environ = os.environ if environ is None else environ
    values = {
        name: environ[name]
        for name in ConfigService.model_fields
        if name in environ
    }
    return ConfigService(**values)


config_service = load_config()
