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
import sys

from mytube.config.config_service import ConfigService


def setup_logging(cfg: ConfigService) -> None:
    """
    Production ships records to Cloud Logging; everywhere else they go to
    stdout.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(cfg.LOG_LEVEL.upper())

    # Clear any handlers installed before us (uvicorn reloads, tests)
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    if cfg.ENVIRONMENT == "production":
        from google.cloud.logging import Client as LoggerClient
        from google.cloud.logging.handlers import CloudLoggingHandler

        handler = CloudLoggingHandler(LoggerClient(), name="mytube")
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    root_logger.addHandler(handler)
