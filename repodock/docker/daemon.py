# Repodock Docker Daemon Checks
# Make sure the docker daemon and a compose CLI are available

import platform
import time
from typing import Optional

from repodock.docker.runner import CommandRunner, DockerError, get_default_runner
from repodock.output.console import Console, create_console

DAEMON_TIMEOUT = 60.0
DAEMON_POLL_INTERVAL = 2.0


def is_daemon_running(runner: Optional[CommandRunner] = None) -> bool:
    """Check whether ``docker info`` succeeds."""
    runner = runner or get_default_runner()
    try:
        return runner.run(["docker", "info"]).ok
    except DockerError:
        return False


def check_docker_daemon(
    *,
    runner: Optional[CommandRunner] = None,
    console: Optional[Console] = None,
    timeout: float = DAEMON_TIMEOUT,
    interval: float = DAEMON_POLL_INTERVAL,
) -> None:
    """
    Ensure the docker daemon is running, starting it if needed.

    Args:
        runner: Optional command runner.
        console: Optional output console.
        timeout: Seconds to wait for a started daemon.
        interval: Seconds between polls.

    Raises:
        DockerError: If the daemon is down and cannot be started.
    """
    console = console or create_console()
    console.print_info("Checking Docker daemon status...")

    if is_daemon_running(runner):
        console.print_success("Docker daemon is running")
        return

    console.print_warning("Docker daemon is not running")
    start_docker_daemon(runner=runner, console=console, timeout=timeout, interval=interval)


def start_docker_daemon(
    *,
    runner: Optional[CommandRunner] = None,
    console: Optional[Console] = None,
    timeout: float = DAEMON_TIMEOUT,
    interval: float = DAEMON_POLL_INTERVAL,
) -> None:
    """
    Start Docker Desktop and wait for the daemon.

    Only macOS can be started automatically; elsewhere the daemon is
    managed by the system service manager.

    Raises:
        DockerError: If the daemon cannot be started in time.
    """
    runner = runner or get_default_runner()
    console = console or create_console()

    if platform.system() != "Darwin":
        raise DockerError("Docker daemon is not running. Start it with your service manager and retry.")

    console.print_info("Starting Docker daemon...")
    result = runner.run(["open", "-a", "Docker"])
    if not result.ok:
        raise DockerError(f"failed to start Docker daemon: {result.output.strip()}", returncode=result.returncode)

    wait_for_docker_daemon(runner=runner, console=console, timeout=timeout, interval=interval)


def wait_for_docker_daemon(
    *,
    runner: Optional[CommandRunner] = None,
    console: Optional[Console] = None,
    timeout: float = DAEMON_TIMEOUT,
    interval: float = DAEMON_POLL_INTERVAL,
) -> None:
    """
    Poll ``docker info`` until it succeeds.

    Raises:
        DockerError: On timeout.
    """
    console = console or create_console()
    console.print_info("Waiting for Docker daemon to start...")

    deadline = time.monotonic() + timeout
    while True:
        time.sleep(interval)
        if time.monotonic() >= deadline:
            raise DockerError("timeout waiting for Docker daemon to start")
        if is_daemon_running(runner):
            console.print_success("Docker daemon started successfully")
            return


def get_compose_command(runner: Optional[CommandRunner] = None) -> list[str]:
    """
    Pick the compose CLI flavour.

    Returns:
        ``["docker", "compose"]`` if the plugin works, else ``["docker-compose"]``.
    """
    runner = runner or get_default_runner()
    try:
        if runner.run(["docker", "compose", "version"]).ok:
            return ["docker", "compose"]
    except DockerError:
        pass
    return ["docker-compose"]


def check_docker_compose(*, runner: Optional[CommandRunner] = None, console: Optional[Console] = None) -> str:
    """
    Verify that a compose CLI is available.

    Returns:
        Version string reported by the compose CLI.

    Raises:
        DockerError: If neither ``docker compose`` nor ``docker-compose`` works.
    """
    runner = runner or get_default_runner()
    console = console or create_console()
    console.print_info("Checking Docker Compose availability...")

    try:
        result = runner.run(["docker", "compose", "version"])
    except DockerError:
        result = None

    if result is not None and result.ok:
        version = result.output.strip()
        console.print_success(f"Docker Compose is available: {version}")
        return version

    try:
        standalone = runner.run(["docker-compose", "version"])
    except DockerError as e:
        raise DockerError(f"docker-compose not found: {e.message}")

    if not standalone.ok:
        raise DockerError(f"docker-compose not found: {standalone.output.strip()}", returncode=standalone.returncode)

    console.print_success("docker-compose (standalone) is available")
    return standalone.output.strip()
