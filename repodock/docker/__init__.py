# Repodock Docker Module
# Docker daemon checks and docker-compose service groups

from repodock.docker.compose import ComposeProject
from repodock.docker.daemon import (
    check_docker_compose,
    check_docker_daemon,
    get_compose_command,
    is_daemon_running,
    start_docker_daemon,
    wait_for_docker_daemon,
)
from repodock.docker.manager import DockerManager
from repodock.docker.runner import CommandRunner, DockerError, ProcessResult

__all__ = [
    # Runner
    "CommandRunner",
    "ProcessResult",
    "DockerError",
    # Daemon
    "is_daemon_running",
    "check_docker_daemon",
    "start_docker_daemon",
    "wait_for_docker_daemon",
    "get_compose_command",
    "check_docker_compose",
    # Compose
    "ComposeProject",
    "DockerManager",
]
