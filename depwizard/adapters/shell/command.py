"""
Shell command adapter — execute shell commands.

Runs the package manager's install command and every post-install
script. Commands are opaque strings handed to the shell; their output
is captured and returned in the Receipt.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from depwizard.adapters.base import Adapter, ExecutionContext
from depwizard.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute shell commands and capture output.

    Action params:
        command (str): The command to execute.
        timeout (int | None): Timeout in seconds (default: no timeout).
        cwd (str): Override working directory (default: context.project_root).
    """

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("sh") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        command = context.action.params.get("command", "")
        if not command:
            return False, "Missing required param: 'command'"

        cwd = context.working_dir
        if cwd and not Path(cwd).is_dir():
            return False, f"Working directory does not exist: {cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        command = params.get("command", "")
        timeout = params.get("timeout")
        action_id = context.action.id
        meta: dict = {"command": command}

        logger.debug("$ %s  [cwd=%s]", command, context.working_dir)
        start = time.monotonic()

        try:
            proc = subprocess.run(
                command,
                shell=True,
                cwd=context.working_dir,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            meta["timeout"] = timeout
            return Receipt.failure(
                adapter=self.name, action_id=action_id,
                error=f"'{command}' timed out after {timeout}s", metadata=meta,
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name, action_id=action_id,
                error=f"Could not start '{command}': {e}", metadata=meta,
            )

        duration_ms = int((time.monotonic() - start) * 1000)
        stdout, stderr = proc.stdout.strip(), proc.stderr.strip()
        meta["return_code"] = proc.returncode
        logger.debug("'%s' exited %d in %dms", command, proc.returncode, duration_ms)

        if proc.returncode != 0:
            meta["stdout"] = stdout
            return Receipt.failure(
                adapter=self.name, action_id=action_id,
                error=stderr or f"Command exited with code {proc.returncode}",
                duration_ms=duration_ms, metadata=meta,
            )

        meta["stderr"] = stderr
        return Receipt.success(
            adapter=self.name, action_id=action_id, output=stdout,
            duration_ms=duration_ms, metadata=meta,
        )
