# Repodock Compose Project
# Wrapper around one docker-compose file

import time
from pathlib import Path
from typing import Optional

from repodock.docker.daemon import get_compose_command
from repodock.docker.runner import CommandRunner, DockerError, get_default_runner
from repodock.output.console import Console, create_console

DEFAULT_PROJECT_NAME = "microservices"
HEALTH_TIMEOUT = 300.0
HEALTH_POLL_INTERVAL = 10.0

# Container states reported by `compose ps` that mean "not ready yet"
NOT_READY_MARKERS = ("unhealthy", "starting")


class ComposeProject:
    """
    A compose file started and stopped as one project.

    Args:
        file_path: Path to the compose file.
        project_name: Compose project name (``-p``).
        timeout: Seconds to wait for services to become healthy.
        interval: Seconds between health polls.
        runner: Optional command runner.
        console: Optional output console.
    """

    def __init__(
        self,
        file_path: Path,
        project_name: str = DEFAULT_PROJECT_NAME,
        *,
        timeout: float = HEALTH_TIMEOUT,
        interval: float = HEALTH_POLL_INTERVAL,
        runner: Optional[CommandRunner] = None,
        console: Optional[Console] = None,
    ):
        self.file_path = Path(file_path)
        self.project_name = project_name
        self.timeout = timeout
        self.interval = interval
        self.runner = runner or get_default_runner()
        self.console = console or create_console()
        self._compose_command: Optional[list[str]] = None

    @property
    def compose_command(self) -> list[str]:
        """Compose CLI prefix, detected on first use."""
        if self._compose_command is None:
            self._compose_command = get_compose_command(self.runner)
        return self._compose_command

    def _args(self, *args: str) -> list[str]:
        return [*self.compose_command, "-f", str(self.file_path), "-p", self.project_name, *args]

    def validate_file(self) -> None:
        """Raise DockerError if the compose file does not exist."""
        if not self.file_path.is_file():
            raise DockerError(f"docker-compose file not found: {self.file_path}")

    def up(self) -> None:
        """
        Build and start the project detached, then wait for health checks.

        Raises:
            DockerError: If the file is missing or compose fails.
        """
        self.console.print_info(f"Starting services from {self.file_path.name}...")
        self.validate_file()

        result = self.runner.run(self._args("up", "-d", "--build"), capture=False)
        if not result.ok:
            raise DockerError(f"failed to start {self.file_path.name}", returncode=result.returncode)

        self.console.print_success(f"{self.file_path.name} started successfully")
        self.wait_for_health_checks()

    def wait_for_health_checks(self) -> None:
        """
        Poll the project until no container is starting or unhealthy.

        On timeout a warning and the current ``ps`` table are shown; this is
        not treated as an error.

        Raises:
            DockerError: If the status cannot be queried.
        """
        self.console.print_info("Waiting for services to become healthy...")

        deadline = time.monotonic() + self.timeout
        while True:
            time.sleep(self.interval)
            if time.monotonic() >= deadline:
                self.console.print_warning("Timeout waiting for all services to become healthy")
                self.show_status()
                return
            if self.all_services_healthy():
                self.console.print_success("All services are healthy")
                return
            self.console.print_info("Some services are still starting...")

    def all_services_healthy(self) -> bool:
        """
        Check the health of every container in the project.

        Returns:
            True if containers are listed and none is starting or unhealthy.

        Raises:
            DockerError: If ``compose ps`` fails.
        """
        # Only stdout is parsed; compose writes warnings to stderr
        result = self.runner.run(self._args("ps", "--format", "json"), merge_stderr=False)
        if not result.ok:
            reason = (result.error or result.output).strip()
            raise DockerError(f"failed to check service status: {reason}", returncode=result.returncode)

        output = result.output.strip()
        if not output:
            return False

        for line in output.splitlines():
            if any(marker in line for marker in NOT_READY_MARKERS):
                return False
        return True

    def show_status(self) -> None:
        """Print ``compose ps`` to the terminal."""
        result = self.runner.run(self._args("ps"), capture=False)
        if not result.ok:
            raise DockerError(f"failed to show status of {self.file_path.name}", returncode=result.returncode)

    def down(self) -> None:
        """
        Stop and remove the project's containers.

        Raises:
            DockerError: If compose fails.
        """
        self.console.print_info(f"Stopping services from {self.file_path.name}...")

        result = self.runner.run(self._args("down"), capture=False)
        if not result.ok:
            raise DockerError(f"failed to stop {self.file_path.name}", returncode=result.returncode)

        self.console.print_success(f"{self.file_path.name} stopped successfully")

    def logs(self, service_name: Optional[str] = None, *, follow: bool = True) -> None:
        """
        Show logs of the project or a single service.

        Args:
            service_name: Optional service to restrict the logs to.
            follow: Keep streaming new log lines.
        """
        args = ["logs"]
        if follow:
            args.append("-f")
        if service_name:
            args.append(service_name)

        result = self.runner.run(self._args(*args), capture=False)
        if not result.ok:
            raise DockerError(f"failed to show logs for {service_name or self.project_name}", returncode=result.returncode)
