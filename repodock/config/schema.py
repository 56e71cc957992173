# Repodock Configuration Schema
# Pydantic models for configuration validation

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repodock.git.branches import DEFAULT_BRANCH
from repodock.git.scanner import GIT_MARKER, WorkingCopy, working_copy_from_path


class RepositoryEntry(BaseModel):
    """A repository listed explicitly in the configuration."""

    path: str = Field(default="", description="Repository path")
    name: str = Field(default="", description="Display name")

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser()) if v else v

    def to_working_copy(self) -> WorkingCopy:
        """Convert to a working copy."""
        return working_copy_from_path(Path(self.path), self.name or None)


class DockerConfig(BaseModel):
    """Docker Compose settings. Keys are camelCase in the file, like the top level."""

    model_config = ConfigDict(populate_by_name=True)

    project_name: str = Field(default="microservices", alias="projectName", description="Compose project name (-p)")
    dependencies_file: str = Field(
        default="docker-compose.dependencies.yml",
        alias="dependenciesFile",
        description="Compose file for shared dependencies",
    )
    services_file: str = Field(
        default="docker-compose.services.yml", alias="servicesFile", description="Compose file for microservices"
    )
    health_timeout: float = Field(
        default=300.0, gt=0, alias="healthTimeout", description="Seconds to wait for healthy services"
    )
    health_interval: float = Field(default=10.0, gt=0, alias="healthInterval", description="Seconds between health polls")
    daemon_timeout: float = Field(
        default=60.0, gt=0, alias="daemonTimeout", description="Seconds to wait for the docker daemon"
    )
    daemon_interval: float = Field(default=2.0, gt=0, alias="daemonInterval", description="Seconds between daemon polls")


class OutputConfig(BaseModel):
    """Output configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")


class RepodockConfig(BaseModel):
    """Root configuration model for repodock."""

    model_config = ConfigDict(populate_by_name=True)

    repositories: list[RepositoryEntry] = Field(default_factory=list, description="Explicit repository list")
    git_branch: str = Field(default=DEFAULT_BRANCH, alias="gitBranch", description="Branch to check out and pull")
    scan_directory: Optional[str] = Field(
        default=None, alias="scanDirectory", description="Default directory for sync and docker commands"
    )
    docker: DockerConfig = Field(default_factory=DockerConfig, description="Docker Compose settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("git_branch")
    @classmethod
    def default_branch(cls, v: str) -> str:
        """An empty branch means the default branch."""
        return v.strip() or DEFAULT_BRANCH

    @field_validator("scan_directory")
    @classmethod
    def expand_scan_directory(cls, v: Optional[str]) -> Optional[str]:
        """Expand ~ in the scan directory."""
        if not v:
            return None
        return str(Path(v).expanduser())

    def validate_repositories(self) -> list[str]:
        """
        Check the configured repository list.

        Returns:
            List of error messages, empty if every entry is usable.
        """
        if not self.repositories:
            return ["no repositories configured"]

        errors: list[str] = []
        for i, repo in enumerate(self.repositories):
            if not repo.path:
                errors.append(f"repository {i}: path is required")
                continue
            if not repo.name:
                errors.append(f"repository {i}: name is required")
                continue

            path = Path(repo.path)
            if not path.exists():
                errors.append(f"repository {repo.name}: path {repo.path} does not exist")
            elif not path.is_dir():
                errors.append(f"repository {repo.name}: path {repo.path} is not a directory")
            elif not (path / GIT_MARKER).exists():
                errors.append(f"repository {repo.name}: path {repo.path} is not a git repository")

        return errors

    def working_copies(self) -> list[WorkingCopy]:
        """Return the configured repositories as working copies, in order."""
        return [repo.to_working_copy() for repo in self.repositories]
