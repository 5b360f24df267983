"""Runners for package-manager build steps"""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict

from ..constants import DEFAULT_PACKAGE_MANAGER, PACKAGE_FILE

logger = logging.getLogger(__name__)

# Exit status reported when the package manager executable cannot be found
COMMAND_NOT_FOUND = 127


class StepRunner(ABC):
    """Run named steps in a directory and report their exit status

    Any tool that can install a directory's declared dependencies and run
    a named step there satisfies this contract. Calls block until the
    process exits; there is no timeout.
    """

    @abstractmethod
    def install(self, cwd: Path) -> int:
        """
        Install the dependencies declared in a directory

        Args:
            cwd: Working directory

        Returns:
            Process exit status
        """
        pass

    @abstractmethod
    def has_step(self, cwd: Path, name: str) -> bool:
        """
        Check whether a directory declares a named step

        Args:
            cwd: Working directory
            name: Step name, e.g. ``compile`` or ``build``

        Returns:
            True if the step is declared
        """
        pass

    @abstractmethod
    def run_step(self, cwd: Path, name: str) -> int:
        """
        Run a named step

        Args:
            cwd: Working directory
            name: Step name

        Returns:
            Process exit status
        """
        pass


class NpmStepRunner(StepRunner):
    """Step runner backed by npm-compatible ``install`` and ``run``"""

    def __init__(self, executable: str = DEFAULT_PACKAGE_MANAGER):
        self.executable = executable

    def install(self, cwd: Path) -> int:
        return self._run([self.executable, 'install'], cwd)

    def has_step(self, cwd: Path, name: str) -> bool:
        scripts = self._read_package(cwd).get('scripts') or {}
        return isinstance(scripts, dict) and bool(scripts.get(name))

    def run_step(self, cwd: Path, name: str) -> int:
        return self._run([self.executable, 'run', name], cwd)

    @staticmethod
    def _read_package(cwd: Path) -> Dict[str, Any]:
        package_file = cwd / PACKAGE_FILE
        if not package_file.is_file():
            return {}
        try:
            with open(package_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot parse {package_file}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _run(command, cwd: Path) -> int:
        logger.info(f"Running {' '.join(command)} in {cwd}")
        try:
            # Output goes straight to the terminal; only the status is used
            completed = subprocess.run(command, cwd=cwd)
        except FileNotFoundError:
            logger.error(f"Command not found: {command[0]}")
            return COMMAND_NOT_FOUND
        logger.debug(f"{' '.join(command)} exited with {completed.returncode}")
        return completed.returncode
