# Repodock Docker Manager
# Start, stop and inspect the dependency and service compose groups

from pathlib import Path
from typing import Optional

from repodock.config.schema import DockerConfig
from repodock.docker.compose import ComposeProject
from repodock.docker.daemon import check_docker_compose, check_docker_daemon
from repodock.docker.runner import CommandRunner, DockerError, get_default_runner
from repodock.output.console import Console, create_console


class DockerManager:
    """
    Workflows over the two compose groups of a workspace.

    Dependencies (databases, queues) live in one compose file and the
    microservices in another, both under ``base_dir``.
    """

    def __init__(
        self,
        base_dir: Path,
        config: Optional[DockerConfig] = None,
        *,
        runner: Optional[CommandRunner] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize the manager.

        Args:
            base_dir: Directory containing the compose files.
            config: Docker settings (defaults if not provided).
            runner: Optional command runner.
            console: Optional output console.
        """
        self.base_dir = Path(base_dir)
        self.config = config or DockerConfig()
        self.runner = runner or get_default_runner()
        self.console = console or create_console()

    @property
    def dependencies_file(self) -> Path:
        return self.base_dir / self.config.dependencies_file

    @property
    def services_file(self) -> Path:
        return self.base_dir / self.config.services_file

    def _project(self, file_path: Path) -> ComposeProject:
        return ComposeProject(
            file_path,
            self.config.project_name,
            timeout=self.config.health_timeout,
            interval=self.config.health_interval,
            runner=self.runner,
            console=self.console,
        )

    def dependencies(self) -> ComposeProject:
        """Compose project for shared dependencies."""
        return self._project(self.dependencies_file)

    def services(self) -> ComposeProject:
        """Compose project for microservices."""
        return self._project(self.services_file)

    def start_dependencies(self) -> None:
        """
        Check the daemon and compose CLI, then start dependencies.

        Raises:
            DockerError: If any step fails.
        """
        self.console.print_info("Starting Docker dependencies workflow...")

        try:
            check_docker_daemon(
                runner=self.runner,
                console=self.console,
                timeout=self.config.daemon_timeout,
                interval=self.config.daemon_interval,
            )
        except DockerError as e:
            raise DockerError(f"docker daemon check failed: {e.message}", returncode=e.returncode)

        try:
            check_docker_compose(runner=self.runner, console=self.console)
        except DockerError as e:
            raise DockerError(f"docker compose check failed: {e.message}", returncode=e.returncode)

        try:
            self.dependencies().up()
        except DockerError as e:
            raise DockerError(f"failed to start dependencies: {e.message}", returncode=e.returncode)

        self.console.print_success("Dependencies workflow completed successfully")

    def start_services(self) -> None:
        """
        Start microservices.

        Raises:
            DockerError: If compose fails.
        """
        self.console.print_info("Starting microservices...")

        try:
            self.services().up()
        except DockerError as e:
            raise DockerError(f"failed to start services: {e.message}", returncode=e.returncode)

        self.console.print_success("Services started successfully")

    def start_all(self) -> None:
        """Start dependencies, then microservices."""
        self.start_dependencies()
        self.start_services()
        self.console.print_success("All services started successfully")

    def stop(self) -> None:
        """
        Stop microservices, then dependencies.

        A failure to stop the services is reported as a warning so the
        dependencies are still stopped.

        Raises:
            DockerError: If the dependencies cannot be stopped.
        """
        self.console.print_info("Stopping all services...")

        try:
            self.services().down()
        except DockerError as e:
            self.console.print_warning(f"Failed to stop services: {e.message}")

        try:
            self.dependencies().down()
        except DockerError as e:
            raise DockerError(f"failed to stop dependencies: {e.message}", returncode=e.returncode)

        self.console.print_success("All services stopped successfully")

    def status(self) -> None:
        """Show ``ps`` for both groups; failures are warnings."""
        self.console.print_info("Checking service status...")

        self.console.print_info("Dependencies status:")
        try:
            self.dependencies().show_status()
        except DockerError:
            self.console.print_warning("Failed to get dependencies status")

        self.console.print_info("Services status:")
        try:
            self.services().show_status()
        except DockerError:
            self.console.print_warning("Failed to get services status")

    def logs(self, service_name: Optional[str] = None) -> None:
        """Follow logs of the dependencies project, optionally for one service."""
        self.dependencies().logs(service_name)
