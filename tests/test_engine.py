# Tests for repodock.sync.engine
# Parallel sync orchestration

import threading
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console as RichConsole

from repodock.git.scanner import NotFoundError, WorkingCopy
from repodock.output.console import Console
from repodock.sync.classify import ClassifiedFailure, FailureKind
from repodock.sync.engine import Syncer
from repodock.sync.operation import SyncOperation
from repodock.sync.result import BatchResult, SyncOutcome


class ReversedOperation:
    """
    Fake operation that finishes working copies in reverse order.

    Each working copy waits until the one after it has finished. Names in
    ``failing`` produce a failed outcome.
    """

    def __init__(self, names: list[str], failing: frozenset[str] = frozenset()):
        self.failing = failing
        self.done = {name: threading.Event() for name in names}
        self.waits_for = {name: nxt for name, nxt in zip(names, names[1:])}
        self.completed: list[str] = []
        self._lock = threading.Lock()

    def sync(self, working_copy: WorkingCopy, branch: str = "main") -> SyncOutcome:
        successor = self.waits_for.get(working_copy.name)
        if successor is not None:
            assert self.done[successor].wait(timeout=10)

        if working_copy.name in self.failing:
            outcome = SyncOutcome.failure(
                working_copy,
                ClassifiedFailure(kind=FailureKind.REMOTE_INACCESSIBLE, message="Remote repository not accessible or not found"),
            )
        else:
            outcome = SyncOutcome.success(working_copy, f"Already on '{branch}', pulled latest changes")

        with self._lock:
            self.completed.append(working_copy.name)
        self.done[working_copy.name].set()
        return outcome


class ExplodingOperation:
    def sync(self, working_copy: WorkingCopy, branch: str = "main") -> SyncOutcome:
        raise RuntimeError("worker crashed")


def _make_console(verbose: bool = False) -> Console:
    """Create a console with captured output."""
    console = Console(verbose=verbose, colored=False)
    console._console = RichConsole(file=StringIO(), no_color=True, soft_wrap=True)
    return console


def _get_output(console: Console) -> str:
    """Get captured output from console."""
    console._console.file.seek(0)
    return console._console.file.read()


def _working_copies(root: Path, *names: str) -> list[WorkingCopy]:
    return [WorkingCopy(path=root / name, name=name) for name in names]


class TestSyncRepositories:
    """Tests for Syncer.sync_repositories."""

    def test_empty_list(self):
        console = _make_console()
        result = Syncer(console=console).sync_repositories([])

        assert result == BatchResult()
        assert result.total == result.succeeded == result.failed == 0
        assert result.outcomes == ()
        assert _get_output(console) == ""

    def test_results_follow_input_order(self, temp_dir: Path):
        names = ["a", "b", "c", "d", "e"]
        operation = ReversedOperation(names, failing=frozenset({"b", "e"}))

        result = Syncer(operation=operation).sync_repositories(_working_copies(temp_dir, *names))

        assert operation.completed == ["e", "d", "c", "b", "a"]
        assert [o.name for o in result.outcomes] == names
        assert [o.succeeded for o in result.outcomes] == [True, False, True, True, False]

    def test_progress_in_completion_order(self, temp_dir: Path):
        names = ["a", "b", "c"]
        seen: list[str] = []

        Syncer(operation=ReversedOperation(names), on_outcome=lambda o: seen.append(o.name)).sync_repositories(
            _working_copies(temp_dir, *names)
        )

        assert sorted(seen) == names
        assert seen == ["c", "b", "a"]

    def test_counts_add_up(self, temp_dir: Path):
        names = [f"repo-{i}" for i in range(8)]
        failing = frozenset(names[::3])

        result = Syncer(operation=ReversedOperation(names, failing)).sync_repositories(
            _working_copies(temp_dir, *names)
        )

        assert result.total == len(result.outcomes) == 8
        assert result.succeeded + result.failed == result.total
        assert result.failed == len(failing)
        assert not result.success
        assert [o.name for o in result.failures] == sorted(failing, key=names.index)

    def test_console_output(self, temp_dir: Path):
        console = _make_console()
        names = ["api", "web"]

        Syncer(console=console, operation=ReversedOperation(names, frozenset({"web"}))).sync_repositories(
            _working_copies(temp_dir, *names)
        )

        output = _get_output(console)
        assert "Found 2 repositories" in output
        assert "✓ api - Already on 'main', pulled latest changes" in output
        assert "✗ web - Remote repository not accessible or not found" in output

    def test_worker_error_propagates(self, temp_dir: Path):
        with pytest.raises(RuntimeError, match="worker crashed"):
            Syncer(operation=ExplodingOperation()).sync_repositories(_working_copies(temp_dir, "a"))

    def test_branch_passed_to_operation(self, temp_dir: Path):
        result = Syncer(operation=ReversedOperation(["a"])).sync_repositories(_working_copies(temp_dir, "a"), "develop")
        assert result.outcomes[0].message == "Already on 'develop', pulled latest changes"


class TestSyncAll:
    """Tests for Syncer.sync_all."""

    def test_missing_root(self, temp_dir: Path):
        with pytest.raises(NotFoundError):
            Syncer().sync_all(temp_dir / "missing")

    def test_no_repositories(self, make_workspace):
        root = make_workspace(plain_dirs=("docs",), files=("README.md",))
        assert Syncer().sync_all(root).total == 0

    def test_with_fake_git(self, make_workspace, fake_git):
        root = make_workspace("billing", "accounts", plain_dirs=("docs",))

        result = Syncer(operation=SyncOperation(fake_git)).sync_all(root)

        assert result.success
        assert [o.name for o in result.outcomes] == ["accounts", "billing"]
        assert {cwd for cwd, _ in fake_git.calls} == {root / "accounts", root / "billing"}

    def test_one_dirty_repository_does_not_stop_others(self, make_workspace, fake_git):
        root = make_workspace("clean", "dirty")
        fake_git.set_for("dirty", "diff", "--quiet", returncode=1)

        result = Syncer(operation=SyncOperation(fake_git)).sync_all(root)

        assert result.total == 2
        assert result.outcomes[0].succeeded
        assert result.outcomes[1].failure_kind == FailureKind.UNCOMMITTED_CHANGES


class TestSyncOne:
    def test_sync_one(self, working_copy: WorkingCopy, fake_git):
        outcome = Syncer(operation=SyncOperation(fake_git)).sync_one(working_copy.path)
        assert outcome.succeeded
        assert outcome.name == "service-a"


class TestEndToEnd:
    """Real git repositories without remotes."""

    def test_two_repositories_and_a_file(self, temp_dir: Path, git_repo):
        root = temp_dir / "workspace"
        git_repo("alpha", parent=root)
        git_repo("beta", branch="develop", parent=root)
        (root / "notes.txt").write_text("not a repository\n", encoding="utf-8")

        result = Syncer().sync_all(root)

        assert result.total == 2
        assert result.succeeded + result.failed == 2
        assert [o.name for o in result.outcomes] == ["alpha", "beta"]

    def test_uncommitted_changes_are_left_alone(self, temp_dir: Path, git_repo):
        root = temp_dir / "workspace"
        repo = git_repo("alpha", branch="develop", parent=root)
        (repo / "README.md").write_text("edited\n", encoding="utf-8")

        result = Syncer().sync_all(root)

        assert result.outcomes[0].failure_kind == FailureKind.UNCOMMITTED_CHANGES
        assert (repo / "README.md").read_text(encoding="utf-8") == "edited\n"
        assert (repo / ".git" / "HEAD").read_text(encoding="utf-8").strip() == "ref: refs/heads/develop"
