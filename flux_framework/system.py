"""Flux — Host helpers used by modules and the CLI.

Security notes:
  - ``run_command`` always uses ``create_subprocess_exec``; commands are argv
    lists, never shell strings.
  - ``write_config_file`` keeps a ``.flux.bak`` copy of any file it replaces.
"""

from __future__ import annotations

import asyncio
import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path

from flux_framework.exceptions import CommandFailedError
from flux_framework.logging import get_logger

log = get_logger(__name__)

BACKUP_SUFFIX = ".flux.bak"


@dataclass
class CommandResult:
    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


async def run_command(
    command: list[str],
    check: bool = True,
    timeout: float | None = None,
    stdin: str | None = None,
) -> CommandResult:
    """Run *command* and wait for it to finish.

    Raises:
        CommandFailedError: The command exited non-zero and *check* is set.
        FileNotFoundError:  The executable does not exist.
    """
    log.debug("command_started", command=command)
    proc = await asyncio.create_subprocess_exec(
        *command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        stdin=asyncio.subprocess.PIPE if stdin is not None else None,
    )
    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            proc.communicate(input=stdin.encode() if stdin is not None else None),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        proc.kill()
        await proc.communicate()
        raise TimeoutError(f"Command timed out after {timeout}s: {' '.join(command)}")

    result = CommandResult(
        command=command,
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout_bytes.decode(errors="replace") if stdout_bytes else "",
        stderr=stderr_bytes.decode(errors="replace") if stderr_bytes else "",
    )
    log.debug("command_finished", command=command, returncode=result.returncode)
    if check and not result.success:
        raise CommandFailedError(command, result.returncode, result.stderr)
    return result


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None


def is_root() -> bool:
    return os.geteuid() == 0


def detect_package_manager() -> str | None:
    """Return ``apt-get``, ``dnf`` or ``yum``, whichever is installed first."""
    for candidate in ("apt-get", "dnf", "yum"):
        if command_exists(candidate):
            return candidate
    return None


def write_config_file(path: Path, content: str, mode: int = 0o644) -> bool:
    """Write *content* to *path*, backing up the previous version.

    Returns:
        False when the file already had exactly this content, True otherwise.
    """
    if path.exists():
        if path.read_text() == content:
            return False
        shutil.copy2(path, path.with_name(path.name + BACKUP_SUFFIX))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(mode)
    log.info("config_file_written", path=str(path))
    return True


# ---------------------------------------------------------------------------
# Reboot detection
# ---------------------------------------------------------------------------


class RebootChecker:
    """Detects whether the host needs a reboot to finish applying changes.

    Checked in order, the first positive answer wins:
      1. ``/var/run/reboot-required`` exists (Debian family)
      2. ``needs-restarting -r`` exits 1 (RHEL family)
      3. The running kernel (``/proc/version``) is not the newest installed one
    """

    def __init__(
        self,
        marker: Path = Path("/var/run/reboot-required"),
        proc_version: Path = Path("/proc/version"),
    ) -> None:
        self._marker = marker
        self._proc_version = proc_version

    async def check(self) -> bool:
        if self._marker.exists():
            return True
        if command_exists("needs-restarting"):
            result = await run_command(["needs-restarting", "-r"], check=False)
            if result.returncode == 1:
                return True
        return await self._kernel_outdated()

    async def _kernel_outdated(self) -> bool:
        try:
            running = self._proc_version.read_text()
        except OSError:
            return False
        installed = await installed_kernel_version()
        if installed is None:
            return False
        log.debug("kernel_versions", installed=installed)
        return installed not in running


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in re.findall(r"\d+", version))


async def installed_kernel_version() -> str | None:
    """Return the newest installed kernel release, or None if unknown."""
    if command_exists("dpkg-query"):
        result = await run_command(
            ["dpkg-query", "-W", "-f", "${Status} ${Package}\n", "linux-image-*"],
            check=False,
        )
        versions = [
            package.removeprefix("linux-image-")
            for status, _, package in (
                line.rpartition(" ") for line in result.stdout.splitlines()
            )
            if status == "install ok installed" and re.match(r"linux-image-\d", package)
        ]
        if versions:
            return max(versions, key=_version_key)

    if command_exists("rpm"):
        result = await run_command(
            ["rpm", "-q", "kernel", "--queryformat", "%{VERSION}-%{RELEASE}.%{ARCH}\n"],
            check=False,
        )
        versions = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if result.success and versions:
            return max(versions, key=_version_key)

    return None
