# Repodock Error Classification
# Map raw git failure text to user-facing failure kinds

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from repodock.git.branches import DEFAULT_BRANCH


class FailureKind(str, Enum):
    """Categories of a failed repository sync."""

    UNCOMMITTED_CHANGES = "uncommitted_changes"
    ALREADY_CURRENT = "already_current"
    BRANCH_NOT_FOUND = "branch_not_found"
    NOT_A_REPOSITORY = "not_a_repository"
    PATH_NOT_FOUND = "path_not_found"
    PERMISSION_DENIED = "permission_denied"
    REMOTE_INACCESSIBLE = "remote_inaccessible"
    NO_TRACKING_BRANCH = "no_tracking_branch"
    COMMAND_FAILED = "command_failed"


UNCOMMITTED_MESSAGE = "Repository has uncommitted changes. Please commit or stash changes first."


@dataclass(frozen=True)
class ClassifiedFailure:
    """A failure kind together with its user-facing message."""

    kind: FailureKind
    message: str
    raw: str = ""
    command: str = ""


@dataclass(frozen=True)
class ClassificationRule:
    """One row of the classification table."""

    matches: Callable[[str, str], bool]
    kind: FailureKind
    template: str

    def render(self, raw: str, command: str, branch: str) -> str:
        return self.template.format(raw=raw, command=command, branch=branch)


def _contains(*phrases: str) -> Callable[[str, str], bool]:
    return lambda text, branch: any(phrase in text for phrase in phrases)


# Order matters: first match wins.
CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        _contains("uncommitted changes", "would be overwritten"),
        FailureKind.UNCOMMITTED_CHANGES,
        UNCOMMITTED_MESSAGE,
    ),
    ClassificationRule(
        lambda text, branch: "already on" in text and DEFAULT_BRANCH in text,
        FailureKind.ALREADY_CURRENT,
        f"Already on '{DEFAULT_BRANCH}' branch",
    ),
    ClassificationRule(
        lambda text, branch: "did not match any file" in text or ("pathspec" in text and "did not match" in text),
        FailureKind.BRANCH_NOT_FOUND,
        "Branch '{branch}' does not exist in this repository",
    ),
    ClassificationRule(
        _contains("not a git repository"),
        FailureKind.NOT_A_REPOSITORY,
        "Not a valid Git repository",
    ),
    ClassificationRule(
        _contains("no such file or directory"),
        FailureKind.PATH_NOT_FOUND,
        "Repository path not found",
    ),
    ClassificationRule(
        _contains("permission denied"),
        FailureKind.PERMISSION_DENIED,
        "Permission denied. Check repository permissions and credentials",
    ),
    ClassificationRule(
        _contains("repository not found", "could not read from remote"),
        FailureKind.REMOTE_INACCESSIBLE,
        "Remote repository not accessible or not found",
    ),
    ClassificationRule(
        _contains("no tracking information"),
        FailureKind.NO_TRACKING_BRANCH,
        "No tracking branch configured for the current branch",
    ),
    ClassificationRule(
        _contains("your local changes to the following files"),
        FailureKind.UNCOMMITTED_CHANGES,
        UNCOMMITTED_MESSAGE,
    ),
)


def classify(raw_output: str, command: str, branch: str = DEFAULT_BRANCH) -> ClassifiedFailure:
    """
    Classify the output of a failed git command.

    Matching is a case-insensitive substring search over the combined
    output, evaluated against ``CLASSIFICATION_RULES`` in order.

    Args:
        raw_output: Combined stdout/stderr of the failed command.
        command: The git subcommand that was attempted, e.g. "pull".
        branch: Branch involved in the command, used in messages.

    Returns:
        ClassifiedFailure with kind and message.
    """
    raw = raw_output.strip()
    text = raw.lower()

    for rule in CLASSIFICATION_RULES:
        if rule.matches(text, branch):
            return ClassifiedFailure(
                kind=rule.kind,
                message=rule.render(raw, command, branch),
                raw=raw,
                command=command,
            )

    return ClassifiedFailure(
        kind=FailureKind.COMMAND_FAILED,
        message=f"Git {command} failed: {raw}" if raw else f"Git {command} failed",
        raw=raw,
        command=command,
    )
