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
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

from fastapi import Depends

from mytube.common.errors import ConfigError, ProcessError, StorageError, ValidationError
from mytube.common.storage_service import (
    StorageService,
    get_storage_service,
    playback_base_url,
)
from mytube.config.config_service import config_service
from mytube.media.ffmpeg import FfmpegService, format_duration
from mytube.media.ffprobe import MediaProber
from mytube.media.process_runner import ProcessRunner
from mytube.publish.dto.publish_dto import (
    ClipSpec,
    PublishRequestDto,
    PublishResponseDto,
    StagedInput,
)
from mytube.publish.export_job import ExportJob, make_output_name
from mytube.publish.filter_graph import build_concat_filter
from mytube.publish.timeline import (
    normalize_tags,
    normalize_timeline,
    normalize_visibility,
)
from mytube.users.user_model import UserModel
from mytube.videos.repository.video_repository import VideoRepository
from mytube.videos.schema.video_model import (
    DEFAULT_CATEGORY,
    PLACEHOLDER_THUMB,
    SourceAssetModel,
    VideoModel,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportSettings:
    """Everything the export pipeline needs from configuration."""

    uploads_bucket: Optional[str]
    assets_bucket: Optional[str] = None
    ffmpeg_binary: str = "ffmpeg"
    ffprobe_binary: str = "ffprobe"
    encode_timeout_seconds: Optional[float] = None
    playback_base_url: Optional[str] = None
    scratch_root: Optional[str] = None


def get_export_settings() -> ExportSettings:
    return ExportSettings(
        uploads_bucket=config_service.UPLOADS_BUCKET,
        assets_bucket=config_service.ASSETS_BUCKET,
        ffmpeg_binary=config_service.FFMPEG_BINARY,
        ffprobe_binary=config_service.FFPROBE_BINARY,
        encode_timeout_seconds=config_service.EXPORT_TIMEOUT_SECONDS,
        playback_base_url=playback_base_url(config_service),
    )


class PublishService:
    """Renders a timeline of trimmed clips into a new published video."""

    def __init__(
        self,
        video_repository: VideoRepository = Depends(),
        storage_service: StorageService = Depends(get_storage_service),
        settings: ExportSettings = Depends(get_export_settings),
        runner: ProcessRunner = Depends(),
    ):
        self.video_repository = video_repository
        self.storage_service = storage_service
        self.settings = settings
        self.prober = MediaProber(runner, settings.ffprobe_binary)
        self.ffmpeg = FfmpegService(runner, self.prober, settings.ffmpeg_binary)

    async def publish(self, request: PublishRequestDto, user: UserModel) -> PublishResponseDto:
        """
        Runs the whole export for one request. The scratch directory is
        created first and removed on every way out of this method.
        """
        with ExportJob(self.settings.scratch_root) as job:
            # 1. Validate the request
            title = str(request.title or "").strip()
            job.clips = normalize_timeline(request.timeline)

            if not title:
                raise ValidationError("Title is required")
            if not job.clips:
                raise ValidationError("Timeline is empty")

            bucket = self.settings.uploads_bucket
            if not bucket:
                raise ConfigError("Missing uploads bucket configuration")

            # 2. Resolve every clip before touching storage
            sources = await self._resolve_sources(job.clips)

            # 3. Download in timeline order; position is the ffmpeg input index
            for index, clip in enumerate(job.clips):
                local_path = job.input_path(index, clip.source_id)
                await self.storage_service.download(
                    bucket, sources[clip.source_id].storage_key, local_path
                )
                job.staged_inputs.append(StagedInput(index=index, local_path=local_path))

            # 4. Probe only once every input is on disk
            input_paths = [staged.local_path for staged in job.staged_inputs]
            audio_flags = await self.prober.probe_audio_flags(input_paths)
            for staged, has_audio in zip(job.staged_inputs, audio_flags):
                staged.has_audio = has_audio

            # 5. Build the graph and encode
            filter_graph = build_concat_filter(job.clips, audio_flags)
            logger.info(f"Export filter graph for user {user.id}: {filter_graph}")

            output_name = make_output_name()
            job.output_path = os.path.join(job.out_dir, output_name)
            await self.ffmpeg.concat(
                input_paths,
                filter_graph,
                job.output_path,
                timeout=self.settings.encode_timeout_seconds,
            )

            # 6. Upload and persist
            upload_key = f"uploads/{user.id}/{output_name}"
            await self.storage_service.upload(bucket, upload_key, job.output_path, "video/mp4")

            duration = await self.prober.get_duration_seconds(job.output_path)
            thumb = await self._publish_thumbnail(job, output_name, duration, user)

            video = await self.video_repository.create(
                VideoModel(
                    user_id=user.id,
                    title=title,
                    description=str(request.description or "").strip(),
                    category=DEFAULT_CATEGORY,
                    visibility=normalize_visibility(request.visibility),
                    filename=upload_key,
                    thumb=thumb,
                    duration_text=format_duration(duration),
                    views=0,
                    tags=normalize_tags(request.tags),
                )
            )
            logger.info(f"Published export {upload_key} as video {video.id}")

            return PublishResponseDto(
                video_id=video.id,
                timeline_name=request.timeline_name,
                playback_url=self._playback_url(upload_key),
            )

    async def _resolve_sources(self, clips: List[ClipSpec]) -> Dict[str, SourceAssetModel]:
        """
        One batch lookup. Every id must resolve before any storage key is
        checked, so an unknown id wins over an earlier empty key.
        """
        sources = await self.video_repository.find_source_assets(
            clip.source_id for clip in clips
        )
        for clip in clips:
            if clip.source_id not in sources:
                raise ValidationError(f"Unknown clip videoId {clip.source_id}")
        for clip in clips:
            if not sources[clip.source_id].storage_key:
                raise ValidationError(f"Missing filename for {clip.source_id}")
        return sources

    async def _publish_thumbnail(
        self,
        job: ExportJob,
        output_name: str,
        duration: Optional[float],
        user: UserModel,
    ) -> str:
        """Returns the stored thumbnail key, or the placeholder when that is not possible."""
        if not self.settings.assets_bucket or job.output_path is None:
            return PLACEHOLDER_THUMB

        stem = os.path.splitext(output_name)[0]
        thumb_path = os.path.join(job.out_dir, f"{stem}.jpg")
        thumb_key = f"thumbs/{user.id}/{stem}.jpg"
        try:
            await self.ffmpeg.generate_thumbnail(job.output_path, thumb_path, duration)
            await self.storage_service.upload(
                self.settings.assets_bucket, thumb_key, thumb_path, "image/jpeg"
            )
        except (ProcessError, StorageError) as e:
            logger.warning(f"Thumbnail for {output_name} skipped: {e}")
            return PLACEHOLDER_THUMB
        return thumb_key

    def _playback_url(self, key: str) -> Optional[str]:
        if not self.settings.playback_base_url:
            return None
        return f"{self.settings.playback_base_url}/{key}"
