"""
Move package build invocation

Runs `sui move build --dump-bytecode-as-base64` and turns its JSON output
into a CompiledPackage.
"""

import json
import base64
import binascii
import logging
import subprocess
from dataclasses import dataclass
from typing import List, Tuple

from .errors import BuildFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledPackage:
    """Compiled module bytecode plus the package ids it depends on"""
    modules: Tuple[bytes, ...]
    dependencies: Tuple[str, ...]


def parse_build_output(stdout: str) -> CompiledPackage:
    """
    Parse the compiler's bytecode dump

    Args:
        stdout: Captured standard output of the build command

    Returns:
        CompiledPackage with base64-decoded modules
    """
    lines = [line for line in stdout.splitlines() if line.strip()]
    if not lines:
        raise BuildFailure("Build produced no output")

    # Progress lines may precede the JSON document
    try:
        data = json.loads(lines[-1])
    except json.JSONDecodeError as e:
        raise BuildFailure(f"Build output is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise BuildFailure("Build output must be a JSON object")
    modules = data.get("modules")
    dependencies = data.get("dependencies")
    if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
        raise BuildFailure("Build output has no 'modules' list of strings")
    if not isinstance(dependencies, list) or not all(isinstance(d, str) for d in dependencies):
        raise BuildFailure("Build output has no 'dependencies' list of strings")

    decoded: List[bytes] = []
    for index, module in enumerate(modules):
        try:
            decoded.append(base64.b64decode(module, validate=True))
        except binascii.Error as e:
            raise BuildFailure(f"Module {index} is not valid base64: {e}") from e

    return CompiledPackage(modules=tuple(decoded), dependencies=tuple(dependencies))


class SuiBuildInvoker:
    """Builds a Move package with the Sui CLI"""

    def __init__(self, cli_path: str = "sui"):
        self.cli_path = cli_path

    def command(self, package_path: str) -> List[str]:
        return [self.cli_path, "move", "build", "--dump-bytecode-as-base64", "--path", package_path]

    def build(self, package_path: str) -> CompiledPackage:
        cmd = self.command(package_path)
        logger.info(f"Building package: {' '.join(cmd)}")
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as e:
            raise BuildFailure(f"Could not run {self.cli_path}: {e}") from e

        if proc.returncode != 0:
            # sui move build reports some errors on stdout
            raise BuildFailure(
                f"{self.cli_path} move build exited with status {proc.returncode}",
                stderr=proc.stderr or proc.stdout,
            )

        package = parse_build_output(proc.stdout)
        logger.info(f"Built {len(package.modules)} modules with {len(package.dependencies)} dependencies")
        return package
