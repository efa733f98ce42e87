"""
Ticketland deployment workflow

build -> publish -> resolve created objects -> update_config -> done.
Every step runs once; any failure propagates and ends the run. Running
the workflow again publishes a new, separate package.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .build import CompiledPackage
from .resolver import ExecutionResult, ResolvedDeploymentHandles, resolve
from .transactions import TransactionBuilder, TransactionSpec

logger = logging.getLogger(__name__)

CONFIG_MODULE = "event_registry"
CONFIG_FUNCTION = "update_config"
DEFAULT_FEE = 100


class DeploymentState(Enum):
    IDLE = "idle"
    BUILT = "built"
    PUBLISHED = "published"
    RESOLVED = "resolved"
    CONFIGURED = "configured"
    DONE = "done"


@dataclass(frozen=True)
class DeploymentReport:
    publish_digest: str
    handles: ResolvedDeploymentHandles
    config_digest: str


def build_publish_transaction(package: CompiledPackage, recipient: str) -> TransactionSpec:
    """Publish the package and keep the UpgradeCap with the deployer"""
    txb = TransactionBuilder()
    upgrade_cap = txb.publish(package.modules, package.dependencies)
    txb.transfer_objects([upgrade_cap], txb.pure(recipient, "address"))
    return txb.build()


def build_config_transaction(handles: ResolvedDeploymentHandles, supported_coins: Sequence[str],
                             deployer: str, fee: int = DEFAULT_FEE) -> TransactionSpec:
    """
    Build the event_registry::update_config call

    Argument order is fixed by the on-chain function signature:
    admin cap, config, supported coins, fee, fee recipient, operators.
    """
    txb = TransactionBuilder()
    txb.move_call(
        f"{handles.package_id}::{CONFIG_MODULE}::{CONFIG_FUNCTION}",
        [
            txb.object(handles.admin_cap_id),
            txb.object(handles.config_id),
            txb.pure(list(supported_coins), "vector<string>"),
            txb.pure(fee, "u64"),
            txb.pure(deployer, "address"),
            txb.pure([deployer], "vector<address>"),
        ],
    )
    return txb.build()


def log_handles(handles: ResolvedDeploymentHandles):
    logger.info(f"packageId: {handles.package_id}")
    logger.info(f"adminCapId: {handles.admin_cap_id}")
    logger.info(f"operatorCapId: {handles.operator_cap_id}")
    logger.info(f"attendanceConfigId: {handles.attendance_config_id}")
    logger.info(f"nftRepository: {handles.nft_repository_id}")
    logger.info(f"configId: {handles.config_id}")
    logger.info(f"exchangeRateId: {handles.exchange_rate_id}")


class Deployer:
    """Runs the Ticketland deployment workflow once"""

    def __init__(self, build_invoker, client, signer, package_path: str,
                 supported_coins: Sequence[str], fee: int = DEFAULT_FEE):
        """
        Args:
            build_invoker: Object with build(package_path) -> CompiledPackage
            client: Object with submit(spec, signer) -> ExecutionResult
            signer: SigningIdentity of the deployer
            package_path: Move package to build
            supported_coins: Payment coin types passed to update_config
            fee: Fee parameter passed to update_config
        """
        self.build_invoker = build_invoker
        self.client = client
        self.signer = signer
        self.package_path = package_path
        self.supported_coins: List[str] = list(supported_coins)
        self.fee = fee
        self.state = DeploymentState.IDLE
        self.publish_result: Optional[ExecutionResult] = None
        self.handles: Optional[ResolvedDeploymentHandles] = None

    def _require(self, expected: DeploymentState):
        if self.state is not expected:
            raise RuntimeError(f"Deployment is in state {self.state.value}, expected {expected.value}")

    def _enter(self, state: DeploymentState):
        self.state = state
        logger.debug(f"Deployment state: {state.value}")

    def build(self) -> CompiledPackage:
        self._require(DeploymentState.IDLE)
        package = self.build_invoker.build(self.package_path)
        self._enter(DeploymentState.BUILT)
        return package

    def publish(self, package: CompiledPackage) -> ExecutionResult:
        self._require(DeploymentState.BUILT)
        spec = build_publish_transaction(package, self.signer.address)
        result = self.client.submit(spec, self.signer)
        self._enter(DeploymentState.PUBLISHED)
        self.publish_result = result
        logger.info(f"Published package in transaction {result.digest}")
        return result

    def resolve(self, result: ExecutionResult) -> ResolvedDeploymentHandles:
        self._require(DeploymentState.PUBLISHED)
        handles = resolve(result)
        self._enter(DeploymentState.RESOLVED)
        self.handles = handles
        log_handles(handles)
        return handles

    def configure(self, handles: ResolvedDeploymentHandles) -> ExecutionResult:
        self._require(DeploymentState.RESOLVED)
        spec = build_config_transaction(handles, self.supported_coins, self.signer.address, self.fee)
        result = self.client.submit(spec, self.signer)
        self._enter(DeploymentState.CONFIGURED)
        logger.info(f"Updated config: {result.digest}")
        return result

    def run(self) -> DeploymentReport:
        logger.info(f"Deployer: {self.signer.address}")
        package = self.build()
        publish_result = self.publish(package)
        handles = self.resolve(publish_result)
        config_result = self.configure(handles)
        self._enter(DeploymentState.DONE)
        return DeploymentReport(
            publish_digest=publish_result.digest,
            handles=handles,
            config_digest=config_result.digest,
        )
