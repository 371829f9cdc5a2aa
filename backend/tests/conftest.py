"""Shared fakes for the publish pipeline tests."""

from __future__ import annotations

import os
from typing import Callable, Dict, List, Optional, Sequence

import pytest

from mytube.common.errors import ProcessError, StorageError
from mytube.common.storage_service import StorageService
from mytube.media.process_runner import ProcessResult
from mytube.publish.publish_service import ExportSettings, PublishService
from mytube.users.user_model import UserModel
from mytube.videos.schema.video_model import SourceAssetModel, VideoModel


class FakeRunner:
    """Stands in for ffmpeg/ffprobe. Records every call."""

    def __init__(self, audio_by_name: Optional[Dict[str, bool]] = None, duration: str = "6.0"):
        self.audio_by_name = audio_by_name or {}
        self.duration = duration
        self.calls: List[List[str]] = []
        self.fail: Optional[Callable[[str, Sequence[str]], bool]] = None

    async def run(self, command, args, timeout=None):
        self.calls.append([command, *args])
        if self.fail is not None and self.fail(command, args):
            raise ProcessError(f"{command} exited with code 1", returncode=1)

        if "stream=codec_type" in args:
            path = args[-1]
            for name, has_audio in self.audio_by_name.items():
                if name in os.path.basename(path):
                    return ProcessResult(stdout="audio\n" if has_audio else "", stderr="")
            return ProcessResult(stdout="", stderr="")
        if "format=duration" in args:
            return ProcessResult(stdout=f"{self.duration}\n", stderr="")

        # ffmpeg: materialize the output file
        with open(args[-1], "wb") as f:
            f.write(b"encoded")
        return ProcessResult(stdout="", stderr="")

    def commands(self, binary: str) -> List[List[str]]:
        return [c for c in self.calls if c[0] == binary]


class FakeStorage(StorageService):
    def __init__(self, objects: Optional[Dict[str, bytes]] = None):
        self.objects = dict(objects or {})
        self.downloads: List[tuple] = []
        self.uploads: List[tuple] = []
        self.fail_download = False
        self.fail_upload_bucket: Optional[str] = None

    def download_file(self, bucket, key, dest):
        if self.fail_download:
            raise StorageError(f"download failed for {key}")
        self.downloads.append((bucket, key, dest))
        with open(dest, "wb") as f:
            f.write(self.objects.get(key, b"source"))
        return dest

    def upload_file(self, bucket, key, path, content_type=None):
        if self.fail_upload_bucket == bucket:
            raise StorageError(f"upload failed for {key}")
        with open(path, "rb") as f:
            self.uploads.append((bucket, key, content_type, f.read()))


class FakeVideoRepository:
    def __init__(self, sources: Optional[Dict[str, str]] = None):
        self.sources = dict(sources or {})
        self.lookups: List[List[str]] = []
        self.created: List[VideoModel] = []
        self.fail_create = False

    async def find_source_assets(self, source_ids):
        ids = sorted(set(source_ids))
        self.lookups.append(ids)
        return {
            i: SourceAssetModel(source_id=i, storage_key=self.sources[i])
            for i in ids
            if i in self.sources
        }

    async def create(self, video: VideoModel) -> VideoModel:
        if self.fail_create:
            raise RuntimeError("insert failed")
        saved = video.model_copy(update={"id": 100 + len(self.created)})
        self.created.append(saved)
        return saved


@pytest.fixture
def user() -> UserModel:
    return UserModel(id=7, username="editor")


@pytest.fixture
def scratch_root(tmp_path):
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner(audio_by_name={"-A.mp4": True, "-B.mp4": False})


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def video_repository() -> FakeVideoRepository:
    return FakeVideoRepository({"A": "uploads/1/a.mp4", "B": "uploads/1/b.mp4"})


@pytest.fixture
def make_service(runner, storage, video_repository, scratch_root):
    def _make(**overrides) -> PublishService:
        settings = ExportSettings(
            uploads_bucket=overrides.pop("uploads_bucket", "uploads-bucket"),
            assets_bucket=overrides.pop("assets_bucket", None),
            playback_base_url=overrides.pop("playback_base_url", None),
            encode_timeout_seconds=overrides.pop("encode_timeout_seconds", None),
            scratch_root=str(scratch_root),
        )
        return PublishService(
            video_repository=video_repository,
            storage_service=storage,
            settings=settings,
            runner=runner,
        )

    return _make
