# Repodock Test Fixtures
# Pytest fixtures for repodock tests

import shutil
import subprocess
import tempfile
import threading
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Union

import pytest

from repodock.git.operations import CommandResult, GitError
from repodock.git.scanner import WorkingCopy

Response = Union[tuple[str, int], GitError, list]


class FakeGitRunner:
    """
    Scripted stand-in for GitRunner.

    Responses are keyed by the git argument tuple. A list response is
    consumed one entry per call (the last entry repeats); a GitError
    response is raised as a launch failure. Responses set with
    set_for() apply only to the working copy with that directory name
    and take precedence over the shared ones.
    """

    def __init__(self, responses: dict[tuple[str, ...], Response] | None = None, default: Response = ("", 0)):
        self.responses: dict[tuple[str, ...], Response] = dict(responses or {})
        self.default = default
        self.path_responses: dict[tuple[str, tuple[str, ...]], Response] = {}
        self.calls: list[tuple[Path, tuple[str, ...]]] = []
        self._lock = threading.Lock()

    def set(self, *args: str, output: str = "", returncode: int = 0) -> None:
        self.responses[args] = (output, returncode)

    def set_for(self, name: str, *args: str, output: str = "", returncode: int = 0) -> None:
        self.path_responses[(name, args)] = (output, returncode)

    def run(self, cwd: Path, *args: str) -> CommandResult:
        with self._lock:
            self.calls.append((Path(cwd), args))
            response = self.path_responses.get((Path(cwd).name, args))
            if response is None:
                response = self.responses.get(args, self.default)
            if isinstance(response, list):
                response = response.pop(0) if len(response) > 1 else response[0]

        if isinstance(response, GitError):
            raise response
        output, returncode = response
        return CommandResult(args=args, output=output, returncode=returncode)

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [args for _, args in self.calls]

    def called(self, *args: str) -> bool:
        return args in self.commands

    def called_subcommand(self, name: str) -> bool:
        return any(args and args[0] == name for args in self.commands)


CLEAN_ON_MAIN: dict[tuple[str, ...], Response] = {
    ("diff", "--cached", "--quiet"): ("", 0),
    ("diff", "--quiet"): ("", 0),
    ("symbolic-ref", "refs/remotes/origin/HEAD"): ("refs/remotes/origin/main\n", 0),
    ("branch", "--show-current"): ("main\n", 0),
    ("pull",): ("Already up to date.\n", 0),
}


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_git() -> FakeGitRunner:
    """Fake runner for a clean working copy on main with origin/HEAD -> main."""
    return FakeGitRunner(dict(CLEAN_ON_MAIN))


@pytest.fixture
def make_git_runner() -> Callable[..., FakeGitRunner]:
    """Build a fake runner from a response table."""

    def _make(responses: dict[tuple[str, ...], Response] | None = None, default: Response = ("", 0)) -> FakeGitRunner:
        return FakeGitRunner(responses, default=default)

    return _make


@pytest.fixture
def working_copy(temp_dir: Path) -> WorkingCopy:
    """A working copy value pointing at a directory with a .git marker."""
    path = temp_dir / "service-a"
    (path / ".git").mkdir(parents=True)
    return WorkingCopy(path=path, name="service-a")


@pytest.fixture
def make_workspace(temp_dir: Path) -> Callable[..., Path]:
    """Create a workspace with fake working copies (directories with .git)."""

    def _make(*repos: str, plain_dirs: tuple[str, ...] = (), files: tuple[str, ...] = ()) -> Path:
        root = temp_dir / "workspace"
        root.mkdir(exist_ok=True)
        for name in repos:
            (root / name / ".git").mkdir(parents=True)
        for name in plain_dirs:
            (root / name).mkdir()
        for name in files:
            (root / name).write_text("not a repository", encoding="utf-8")
        return root

    return _make


def _git(cwd: Path, *args: str) -> None:
    subprocess.run(
        [
            "git",
            "-c",
            "user.email=test@example.com",
            "-c",
            "user.name=Test User",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )


@pytest.fixture
def git_repo(temp_dir: Path) -> Callable[..., Path]:
    """Create real local-only git repositories (skips when git is missing)."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    def _create(name: str, branch: str = "main", parent: Path | None = None) -> Path:
        repo = (parent or temp_dir) / name
        repo.mkdir(parents=True)
        _git(repo, "init", "-q")
        _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
        (repo / "README.md").write_text(f"# {name}\n", encoding="utf-8")
        _git(repo, "add", ".")
        _git(repo, "commit", "-q", "-m", "Initial commit")
        if branch != "main":
            _git(repo, "checkout", "-q", "-b", branch)
        return repo

    return _create
