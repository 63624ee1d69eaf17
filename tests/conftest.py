# -*- coding: utf-8 -*-
import pytest

from llmswitch import constant
from llmswitch.config import ConfigStore, SecretStore

_KEY_ENVS = (
    "AZURE_OPENAI_API_KEY",
    "OPENAI_API_KEY",
    "DEEPSEEK_API_KEY",
    "OPENROUTER_API_KEY",
    "OLLAMA_API_KEY",
    "GOOGLE_API_KEY",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep the real home directory and provider keys out of every test."""
    monkeypatch.delenv(constant.CONFIG_PATH_ENV, raising=False)
    monkeypatch.delenv("LLMSWITCH_FALLBACK_KEY_ENVS", raising=False)
    for name in _KEY_ENVS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(constant, "WORKING_DIR", tmp_path / "home")
    project = tmp_path / "repo" / "project"
    project.mkdir(parents=True)
    monkeypatch.chdir(project)


@pytest.fixture
def home_dir(tmp_path):
    return tmp_path / "home"


@pytest.fixture
def project_dir(tmp_path):
    return tmp_path / "repo" / "project"


@pytest.fixture
def store(home_dir, project_dir):
    return ConfigStore(
        user_path=home_dir / "config.yaml",
        project_path=project_dir / "config.yaml",
        parent_path=project_dir.parent / "config.yaml",
    )


@pytest.fixture
def secrets(home_dir):
    return SecretStore(home_dir / ".env")
