"""
Programmable transaction building

TransactionBuilder accumulates inputs and commands in order and yields an
immutable TransactionSpec. Pure inputs keep their value and Move type;
object inputs keep only the id. The client hands both to the Sui SDK,
which resolves ownership and versions and encodes the transaction.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple, Union

from .errors import InvalidArgument

UNSIGNED_BITS = {"u8": 8, "u16": 16, "u32": 32, "u64": 64, "u128": 128, "u256": 256}
SCALAR_TYPES = set(UNSIGNED_BITS) | {"bool", "address", "string"}
_VECTOR = re.compile(r"^vector<(.+)>$")


# --- Argument handles ---

@dataclass(frozen=True)
class Input:
    index: int


@dataclass(frozen=True)
class Result:
    index: int


Argument = Union[Input, Result]


# --- Inputs ---

@dataclass(frozen=True)
class PureInput:
    value: Any
    type_tag: str


@dataclass(frozen=True)
class ObjectInput:
    object_id: str


# --- Commands ---

@dataclass(frozen=True)
class Publish:
    modules: Tuple[bytes, ...]
    dependencies: Tuple[str, ...]


@dataclass(frozen=True)
class TransferObjects:
    objects: Tuple[Argument, ...]
    address: Argument


@dataclass(frozen=True)
class MoveCall:
    package: str
    module: str
    function: str
    type_arguments: Tuple[str, ...]
    arguments: Tuple[Argument, ...]

    @property
    def target(self) -> str:
        return f"{self.package}::{self.module}::{self.function}"


Command = Union[Publish, TransferObjects, MoveCall]


@dataclass(frozen=True)
class TransactionSpec:
    inputs: Tuple[Union[PureInput, ObjectInput], ...]
    commands: Tuple[Command, ...]

    def object_ids(self) -> List[str]:
        return [i.object_id for i in self.inputs if isinstance(i, ObjectInput)]


def object_key(object_id: str) -> str:
    """Canonical form of an object id: lowercase hex without 0x or leading zeros"""
    value = object_id.strip().lower()
    if value.startswith("0x"):
        value = value[2:]
    return value.lstrip("0") or "0"


def check_pure(value: Any, type_tag: str) -> Any:
    """
    Validate a literal against its Move type

    Args:
        value: Python value (int, bool, str or a sequence for vectors)
        type_tag: Move type such as "u64", "address" or "vector<string>"

    Returns:
        The value, with sequences frozen to tuples
    """
    vector = _VECTOR.match(type_tag)
    if vector:
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            raise InvalidArgument(f"{type_tag} needs a list, got {value!r}")
        return tuple(check_pure(item, vector.group(1)) for item in value)

    if type_tag not in SCALAR_TYPES:
        raise InvalidArgument(f"Unsupported pure type {type_tag!r}")
    if type_tag == "bool":
        if not isinstance(value, bool):
            raise InvalidArgument(f"bool needs True or False, got {value!r}")
    elif type_tag in UNSIGNED_BITS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{type_tag} needs an integer, got {value!r}")
        if not 0 <= value < 2 ** UNSIGNED_BITS[type_tag]:
            raise InvalidArgument(f"{value} does not fit in {type_tag}")
    elif not isinstance(value, str) or not value:
        raise InvalidArgument(f"{type_tag} needs a non-empty string, got {value!r}")
    return value


class TransactionBuilder:
    """Append-only builder for a single programmable transaction"""

    def __init__(self):
        self._inputs: List[Union[PureInput, ObjectInput]] = []
        self._commands: List[Command] = []

    def _add_input(self, value: Union[PureInput, ObjectInput]) -> Input:
        self._inputs.append(value)
        return Input(len(self._inputs) - 1)

    def _add_command(self, command: Command) -> Result:
        self._commands.append(command)
        return Result(len(self._commands) - 1)

    def _check_argument(self, arg: Any) -> Argument:
        if isinstance(arg, Input):
            if not 0 <= arg.index < len(self._inputs):
                raise InvalidArgument(f"Input {arg.index} was not added to this transaction")
            return arg
        if isinstance(arg, Result):
            if not 0 <= arg.index < len(self._commands):
                raise InvalidArgument(f"Result of command {arg.index} is not produced before it is used")
            return arg
        raise InvalidArgument(f"Not a transaction argument: {arg!r}")

    def pure(self, value: Any, type_tag: str) -> Input:
        return self._add_input(PureInput(check_pure(value, type_tag), type_tag))

    def object(self, object_id: str) -> Input:
        """Reference an on-chain object; the same object always maps to the same input"""
        if not object_id:
            raise InvalidArgument("Object id must not be empty")
        key = object_key(object_id)
        for index, existing in enumerate(self._inputs):
            if isinstance(existing, ObjectInput) and object_key(existing.object_id) == key:
                return Input(index)
        return self._add_input(ObjectInput(object_id))

    def publish(self, modules: Sequence[bytes], dependencies: Sequence[str]) -> Result:
        if not modules:
            raise InvalidArgument("Publish requires at least one module")
        return self._add_command(Publish(tuple(modules), tuple(dependencies)))

    def transfer_objects(self, objects: Sequence[Argument], address: Union[Argument, str]) -> Result:
        if not objects:
            raise InvalidArgument("TransferObjects requires at least one object")
        checked = tuple(self._check_argument(o) for o in objects)
        if isinstance(address, str):
            address = self.pure(address, "address")
        return self._add_command(TransferObjects(checked, self._check_argument(address)))

    def move_call(self, target: str, arguments: Sequence[Argument],
                  type_arguments: Sequence[str] = ()) -> Result:
        parts = target.split("::")
        if len(parts) != 3 or not all(parts):
            raise InvalidArgument(f"Move call target must be package::module::function, got {target!r}")
        checked = tuple(self._check_argument(a) for a in arguments)
        return self._add_command(MoveCall(parts[0], parts[1], parts[2], tuple(type_arguments), checked))

    def build(self) -> TransactionSpec:
        return TransactionSpec(inputs=tuple(self._inputs), commands=tuple(self._commands))
