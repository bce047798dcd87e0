# phalconautocomplete/src/phalconautocomplete/core/config.py

from pathlib import Path
from typing import Optional, Union

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Upstream release
    repo: str = Field(default="phalcon/ide-stubs")
    archive_url_template: str = Field(
        default="https://github.com/{repo}/archive/refs/tags/v{version}.zip"
    )
    accept_header: str = Field(default="application/vnd.github.v3+json")
    user_agent: str = Field(default="Mozilla/5.0")
    download_timeout: Optional[float] = Field(default=None)
    download_chunk_size: int = Field(default=1024 * 1024)

    # Local layout, relative paths are anchored at the invocation directory
    meta_dir: Path = Field(default=Path("meta"))
    dist_dir: Path = Field(default=Path("dist"))
    descriptor_name: str = Field(default="plugin.xml")

    # Artifact
    artifact_prefix: str = Field(default="phalconautocomplete")
    workspace_prefix: str = Field(default="phalconautocomplete-")
    require_placeholders: bool = Field(default=True)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "PHALCONAUTOCOMPLETE_",
        "extra": "ignore"
    }

    def archive_url(self, version: str) -> str:
        return self.archive_url_template.format(repo=self.repo, version=version)

    def artifact_name(self, version: str) -> str:
        return f"{self.artifact_prefix}-{version}.jar"

    @staticmethod
    def resolve(path: Union[str, Path], base: Optional[Path] = None) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = (base or Path.cwd()) / path
        return path.absolute()


def get_settings(**overrides) -> Settings:
    """Build a fresh settings object, letting keyword overrides win over the environment."""
    return Settings(**overrides)
