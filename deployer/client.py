"""
Sui chain client

Translates a TransactionSpec into a pysui SyncTransaction, which resolves
object inputs and gas, signs with the deployer key and executes the
transaction on the fullnode.
"""

import logging
from typing import Any, List
import httpx
from pysui import SyncClient
from pysui.sui.sui_txn import SyncTransaction
from pysui.sui.sui_types import bcs
from pysui.sui.sui_types.address import SuiAddress
from pysui.sui.sui_types.collections import SuiArray
from pysui.sui.sui_types.scalars import (
    ObjectID, SuiBoolean, SuiString, SuiU8, SuiU16, SuiU32, SuiU64, SuiU128, SuiU256,
)

from .config import DEFAULT_GAS_BUDGET
from .errors import ExecutionFailure, SubmissionFailure
from .resolver import ExecutionResult
from .signer import SigningIdentity
from .transactions import (
    Input, MoveCall, ObjectInput, Publish, PureInput, TransactionSpec, TransferObjects,
)

logger = logging.getLogger(__name__)

SCALAR_TYPES = {
    "bool": SuiBoolean,
    "u8": SuiU8,
    "u16": SuiU16,
    "u32": SuiU32,
    "u64": SuiU64,
    "u128": SuiU128,
    "u256": SuiU256,
    "address": SuiAddress,
    "string": SuiString,
}

EXECUTE_OPTIONS = {
    "showEffects": True,
    "showObjectChanges": True,
    "showEvents": False,
    "showInput": False,
    "showRawInput": False,
    "showBalanceChanges": False,
}


def to_sui_value(value: Any, type_tag: str) -> Any:
    """Wrap a validated pure value in the pysui type for its Move type"""
    if type_tag.startswith("vector<"):
        inner = type_tag[len("vector<"):-1]
        return SuiArray([to_sui_value(item, inner) for item in value])
    return SCALAR_TYPES[type_tag](value)


class SuiClient:
    """Submits built transactions through pysui"""

    def __init__(self, client: SyncClient, gas_budget: int = DEFAULT_GAS_BUDGET):
        self.client = client
        self.gas_budget = gas_budget

    @classmethod
    def connect(cls, signer: SigningIdentity, gas_budget: int = DEFAULT_GAS_BUDGET) -> "SuiClient":
        """Open a pysui client on the signer's configuration"""
        return cls(SyncClient(signer.config), gas_budget=gas_budget)

    def transaction(self, spec: TransactionSpec, signer: SigningIdentity) -> SyncTransaction:
        """
        Replay a TransactionSpec onto a new pysui transaction

        Args:
            spec: Built transaction
            signer: Sender identity, also the gas owner

        Returns:
            SyncTransaction ready to execute
        """
        txn = SyncTransaction(client=self.client, initial_sender=signer.sui_address)
        inputs: List[Any] = []
        for item in spec.inputs:
            if isinstance(item, ObjectInput):
                inputs.append(ObjectID(item.object_id))
            else:
                inputs.append(to_sui_value(item.value, item.type_tag))

        results: List[Any] = []

        def argument(arg):
            return inputs[arg.index] if isinstance(arg, Input) else results[arg.index]

        for command in spec.commands:
            if isinstance(command, Publish):
                handle = txn.builder.publish(
                    [list(module) for module in command.modules],
                    [bcs.Address.from_str(dep) for dep in command.dependencies],
                )
            elif isinstance(command, TransferObjects):
                handle = txn.transfer_objects(
                    transfers=[argument(o) for o in command.objects],
                    recipient=argument(command.address),
                )
            elif isinstance(command, MoveCall):
                handle = txn.move_call(
                    target=command.target,
                    arguments=[argument(a) for a in command.arguments],
                    type_arguments=list(command.type_arguments),
                )
            else:
                raise TypeError(f"Unsupported command: {command!r}")
            results.append(handle)
        return txn

    def submit(self, spec: TransactionSpec, signer: SigningIdentity) -> ExecutionResult:
        """
        Sign and execute a transaction

        Args:
            spec: Built transaction
            signer: Sender identity, also the gas owner

        Returns:
            ExecutionResult including object changes

        Raises:
            SubmissionFailure: transport or RPC failure, or an unusable response
            ExecutionFailure: the transaction aborted on-chain
        """
        logger.info(f"Submitting transaction with {len(spec.commands)} commands (gas budget {self.gas_budget})")
        try:
            txn = self.transaction(spec, signer)
            response = txn.execute(gas_budget=str(self.gas_budget), options=EXECUTE_OPTIONS)
        except (httpx.HTTPError, OSError) as e:
            raise SubmissionFailure(f"Transaction submission failed: {e}") from e

        if isinstance(response, Exception):
            raise SubmissionFailure(f"Transaction submission failed: {response}")
        if not response.is_ok():
            raise SubmissionFailure(f"Transaction submission failed: {response.result_string}")

        result = ExecutionResult.from_response(response.result_data)
        if result.status is None:
            raise SubmissionFailure(f"Transaction {result.digest} response has no execution status")
        if not result.succeeded:
            raise ExecutionFailure(result.digest, result.error or "unknown error")
        logger.info(f"Transaction executed: {result.digest}")
        return result
