from __future__ import annotations

import os
import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

from gcloud_mcp.config import GCloudSettings
from gcloud_mcp.execution import Executor

_GCLOUD_ENV_KEYS = (
    "GCLOUD_PROJECT",
    "GCLOUD_REGION",
    "GCLOUD_ZONE",
    "GCLOUD_PATH",
    "GCLOUD_TIMEOUT",
    "GCLOUD_LOG_LEVEL",
)


@dataclass
class RecordingGCloud:
    path: str
    args_file: Path

    def args(self) -> list[str]:
        return self.args_file.read_text().splitlines()


@pytest.fixture
def clean_gcloud_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _GCLOUD_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def gcloud_settings() -> GCloudSettings:
    return GCloudSettings(
        project="default-project",
        region="us-central1",
        zone="us-central1-a",
        gcloud_path="gcloud",
        command_timeout_seconds=300.0,
    )


@pytest.fixture
def executor(gcloud_settings: GCloudSettings) -> Executor:
    return Executor(gcloud_settings)


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str], str]:
    """Write an executable ``sh`` script standing in for gcloud."""

    counter = {"n": 0}

    def _write(body: str) -> str:
        counter["n"] += 1
        path = tmp_path / f"fake-gcloud-{counter['n']}"
        path.write_text("#!/bin/sh\n" + body + "\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return os.fspath(path)

    return _write


@pytest.fixture
def recording_gcloud(tmp_path: Path, write_script: Callable[[str], str]) -> RecordingGCloud:
    """A fake gcloud that records one argument per line and prints ``[]``."""

    args_file = tmp_path / "args.txt"
    script = write_script(
        'for arg in "$@"; do printf \'%s\\n\' "$arg"; done > "' + os.fspath(args_file) + '"\n'
        "echo '[]'"
    )
    return RecordingGCloud(path=script, args_file=args_file)


@pytest.fixture
def recording_executor(
    gcloud_settings: GCloudSettings,
    recording_gcloud: RecordingGCloud,
) -> Executor:
    return Executor(gcloud_settings.model_copy(update={"gcloud_path": recording_gcloud.path}))
