"""
Data model of the pytket JSON circuit format (SerialCircuit) as far as it is needed for simulation.

The classes only hold and validate the data, they do not know anything about gates. Parsing is strict about the fields
the simulation relies on (qubits, bits, commands, op types and args) and tolerant about everything else, which is kept
in ``extra`` so that a circuit round-trips through ``to_dict``.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class UnitID(object):
    """A qubit or bit label, serialised as ``[register_name, [index, ...]]``.

    Example:
        .. code:: python

            q0 = UnitID.from_list(["q", [0]])
            q0.to_list()  # Gives ["q", [0]]
    """
    reg_name: str
    index: tuple = ()

    @classmethod
    def from_list(cls, data) -> "UnitID":
        if not isinstance(data, (list, tuple)) or len(data) != 2:
            raise ValueError(f"Expected unit id of the form [name, [index, ...]] but found {data!r}.")
        name, index = data
        if not isinstance(name, str):
            raise ValueError(f"Expected register name to be a string but found {name!r}.")
        if not isinstance(index, (list, tuple)):
            raise ValueError(f"Expected register index to be a list but found {index!r}.")
        return cls(reg_name=name, index=tuple(index))

    def to_list(self) -> list:
        return [self.reg_name, list(self.index)]


@dataclass
class Operation(object):
    """ An operation of a command: the op type tag and its symbolic parameters. """
    type: str
    params: Optional[List[str]] = None
    n_qb: Optional[int] = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "Operation":
        if not isinstance(data, dict) or "type" not in data:
            raise ValueError(f"Expected an operation object with a 'type' field but found {data!r}.")
        params = data.get("params")
        if params is not None:
            params = [str(p) for p in params]
        extra = {k: v for k, v in data.items() if k not in ("type", "params", "n_qb")}
        return cls(type=data["type"], params=params, n_qb=data.get("n_qb"), extra=extra)

    def to_dict(self) -> dict:
        data = {"type": self.type}
        if self.n_qb is not None:
            data["n_qb"] = self.n_qb
        if self.params is not None:
            data["params"] = list(self.params)
        data.update(self.extra)
        return data


@dataclass
class Command(object):
    """ One operation applied to an ordered list of qubit and bit arguments. """
    op: Operation
    args: List[UnitID] = field(default_factory=list)
    opgroup: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Command":
        if not isinstance(data, dict) or "op" not in data:
            raise ValueError(f"Expected a command object with an 'op' field but found {data!r}.")
        return cls(
            op=Operation.from_dict(data["op"]),
            args=[UnitID.from_list(a) for a in data.get("args", [])],
            opgroup=data.get("opgroup"),
        )

    def to_dict(self) -> dict:
        data = {"op": self.op.to_dict(), "args": [a.to_list() for a in self.args]}
        if self.opgroup is not None:
            data["opgroup"] = self.opgroup
        return data


@dataclass
class SerialCircuit(object):
    """A circuit in the pytket JSON format.

    Attributes:
        qubits (list[UnitID]): Declared qubits, their count is the width of the simulated state.
        bits (list[UnitID]): Declared classical bits, their count is the width of the outcome record.
        commands (list[Command]): Commands in program order.
        name (str): Optional circuit name.
        phase (str): Global phase as symbolic string, not used by the simulation.
        implicit_permutation (list): Kept as is.
    """
    qubits: List[UnitID] = field(default_factory=list)
    bits: List[UnitID] = field(default_factory=list)
    commands: List[Command] = field(default_factory=list)
    name: Optional[str] = None
    phase: str = "0.0"
    implicit_permutation: list = field(default_factory=list)
    extra: dict = field(default_factory=dict)

    _known = ("qubits", "bits", "commands", "name", "phase", "implicit_permutation")

    @classmethod
    def from_dict(cls, data: dict) -> "SerialCircuit":
        if not isinstance(data, dict):
            raise ValueError(f"Expected circuit to be a JSON object but found {type(data)}.")
        missing = [k for k in ("qubits", "bits", "commands") if k not in data]
        if missing:
            raise ValueError(f"Circuit is missing the field(s) {missing}.")
        try:
            return cls(
                qubits=[UnitID.from_list(q) for q in data["qubits"]],
                bits=[UnitID.from_list(b) for b in data["bits"]],
                commands=[Command.from_dict(c) for c in data["commands"]],
                name=data.get("name"),
                phase=str(data.get("phase", "0.0")),
                implicit_permutation=list(data.get("implicit_permutation", [])),
                extra={k: v for k, v in data.items() if k not in cls._known},
            )
        except (TypeError, KeyError, AttributeError) as e:
            raise ValueError(f"Malformed circuit {data.get('name') or '<unnamed>'}: {type(e).__name__}: {e}.") from e

    def to_dict(self) -> dict:
        data = {
            "phase": self.phase,
            "commands": [c.to_dict() for c in self.commands],
            "qubits": [q.to_list() for q in self.qubits],
            "bits": [b.to_list() for b in self.bits],
            "implicit_permutation": self.implicit_permutation,
        }
        if self.name is not None:
            data["name"] = self.name
        data.update(self.extra)
        return data
