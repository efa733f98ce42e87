"""
Error types raised by the deployer.

None of these are recovered inside the workflow; they propagate to the
entry point, which logs them and exits non-zero.
"""

from typing import Optional


class DeploymentError(Exception):
    """Base class for all deployer errors"""


class ConfigurationError(DeploymentError):
    """Missing or malformed configuration (key material, env values)"""


class BuildFailure(DeploymentError):
    """The Move compiler failed or produced output we cannot parse"""

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)


class InvalidArgument(DeploymentError, ValueError):
    """A transaction was built with an argument it cannot accept"""


class SubmissionFailure(DeploymentError):
    """Transport or RPC level failure while talking to the network"""


class ExecutionFailure(DeploymentError):
    """The transaction was accepted but aborted on-chain"""

    def __init__(self, digest: Optional[str], reason: str):
        self.digest = digest
        self.reason = reason
        super().__init__(f"Transaction {digest} failed on-chain: {reason}")


class ResolutionError(DeploymentError):
    """An expected object could not be uniquely found after publish"""

    def __init__(self, handle: str, expected: str, matches: int):
        self.handle = handle
        self.expected = expected
        self.matches = matches
        super().__init__(
            f"Could not resolve {handle}: expected exactly one object change "
            f"matching {expected!r}, found {matches}"
        )
