"""Subprocess bridge to Node.js.

Tailwind runs in Node, so every interaction with its runtime goes through
a ``node -e <script>`` child process. The payload is sent as JSON on stdin
and the script answers with one JSON document on stdout. Unlike optional
enrichment tools, a failing bridge call is an error for the caller.
"""

import json
import logging
import subprocess
from typing import Any, Dict, Optional

from ..errors import BuildExecutionError

logger = logging.getLogger(__name__)


class NodeBridge:
    """Runs bundled Node scripts and parses their JSON output.

    Attributes:
        node_binary: Executable name or path of node
        timeout: Optional subprocess timeout in seconds (None = unbounded)
    """

    def __init__(self, node_binary: str = "node", timeout: Optional[float] = None):
        self.node_binary = node_binary
        self.timeout = timeout

    def run_script(self, script: str, payload: Dict[str, Any], cwd: Optional[str] = None) -> Any:
        """Run ``script`` with ``payload`` on stdin and return its JSON output.

        Args:
            script: JavaScript source executed with ``node -e``
            payload: JSON-serializable input
            cwd: Working directory of the child process

        Returns:
            Parsed JSON value printed by the script

        Raises:
            BuildExecutionError: node is missing, exits non-zero, times out or
                prints something that is not JSON
        """
        cmd = [self.node_binary, "-e", script]
        try:
            proc = subprocess.run(
                cmd,
                input=json.dumps(payload),
                capture_output=True,
                text=True,
                cwd=cwd,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise BuildExecutionError(f"Node.js executable not found: {self.node_binary}") from e
        except subprocess.TimeoutExpired as e:
            raise BuildExecutionError(f"Node.js bridge timed out after {self.timeout}s") from e

        if proc.returncode != 0:
            stderr = proc.stderr.strip()
            logger.debug(f"Node bridge failed (exit {proc.returncode}): {stderr[:500]}")
            raise BuildExecutionError(
                f"Node.js bridge failed (exit {proc.returncode}): {_last_line(stderr)}",
                stderr=stderr,
            )

        output = proc.stdout.strip()
        if not output:
            raise BuildExecutionError("Node.js bridge produced no output", stderr=proc.stderr)

        try:
            # Tailwind may log warnings to stdout; the result is the last line
            return json.loads(output.splitlines()[-1])
        except json.JSONDecodeError as e:
            raise BuildExecutionError(f"Node.js bridge produced invalid JSON: {e}", stderr=proc.stderr) from e


def _last_line(text: str) -> str:
    lines = [line for line in text.splitlines() if line.strip()]
    return lines[-1] if lines else "no error output"
