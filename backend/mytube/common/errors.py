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

from fastapi import status


class MyTubeError(Exception):
    """Base class for failures that map onto an HTTP response.

    ``public_message`` is what the client sees; ``str(error)`` keeps the
    full detail for the server log.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class ValidationError(MyTubeError):
    """The request itself is wrong; the message is safe to echo back."""

    status_code = status.HTTP_400_BAD_REQUEST

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return str(self)


class NotFoundError(ValidationError):
    status_code = status.HTTP_404_NOT_FOUND


class ConfigError(MyTubeError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Server is not configured for publishing"


class ProcessError(MyTubeError):
    """An external tool (ffmpeg/ffprobe) was missing, crashed or exited non-zero."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Failed to publish generated video"

    def __init__(self, message: str | None = None, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class StorageError(MyTubeError):
    status_code = status.HTTP_502_BAD_GATEWAY
    public_message = "Failed to transfer media to storage"
