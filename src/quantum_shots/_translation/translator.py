"""
Translates the commands of a SerialCircuit into primitive gates of the statevector simulator.

Supported operations are X, Y, Z, H, CX, PhasedX, ZZPhase and Measure. The source format measures angles in half turns
and rotates in the opposite direction of the simulator, so the angles of PhasedX and ZZPhase are scaled by -pi.
How Measure is realized depends on the shot strategy: a seeded measurement gate when every shot is simulated on its
own, an identity when all shots are sampled from one final state.
"""

import logging

import numpy as np

from .._circuit.serial import Command, SerialCircuit
from .._gates.primitives import (
    Gate,
    Pauli,
    X,
    Y,
    Z,
    H,
    CNOT,
    RX,
    RZ,
    PauliRotation,
    DiagonalMatrix,
    merge,
)
from .._simulation.circuit import QuantumCircuit
from .._utility.errors import ArgumentError, UnsupportedOperationError
from .evaluator import Evaluator


logger = logging.getLogger(__name__)

# Qubit and bit indices of the simulator are unsigned 32 bit integers.
MAX_INDEX = 2**32 - 1

ZZ_PHASE_REALIZATIONS = ("pauli_rotation", "diagonal")


def get_arg(command: Command, index: int) -> int:
    """Returns the register index of the argument at position index of the command.

    Raises:
        ArgumentError: If there is no such argument or its index does not fit into an unsigned 32 bit integer.
    """
    if not 0 <= index < len(command.args):
        raise ArgumentError(f"Operation {command.op.type} has no argument at position {index}, found {len(command.args)}.")
    unit = command.args[index]
    if len(unit.index) == 0:
        raise ArgumentError(f"Argument {unit.to_list()} of operation {command.op.type} has no index.")
    value = unit.index[0]
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ArgumentError(f"Argument {unit.to_list()} of operation {command.op.type} has a non integer index.")
    if not 0 <= value <= MAX_INDEX:
        raise ArgumentError(f"Argument index {value} of operation {command.op.type} does not fit into 32 bits.")
    return int(value)


class GateTranslator(object):
    """Builds one primitive gate per command.

    Args:
        strategy: Shot strategy deciding how Measure commands are realized, see quantum_shots.simulators.
        rng (np.random.Generator): Random stream, seeds of measurement gates are drawn from it in command order.
        zz_phase (str): Realization of ZZPhase, either "pauli_rotation" (default) or "diagonal".

    Example:
        .. code:: python

            translator = GateTranslator(strategy=PerShotStrategy(), rng=new_rng(1))
            gate = translator.translate(command)

    Attributes:
        evaluator (Evaluator): Evaluates the symbolic parameters.
    """

    def __init__(self, strategy, rng: np.random.Generator, zz_phase: str = "pauli_rotation"):
        if zz_phase not in ZZ_PHASE_REALIZATIONS:
            raise ValueError(f"Expected zz_phase to be one of {ZZ_PHASE_REALIZATIONS} but found {zz_phase!r}.")
        self.strategy = strategy
        self.rng = rng
        self.zz_phase = zz_phase
        self.evaluator = Evaluator()
        self._dispatch = {
            "X": self._pauli_x,
            "Y": self._pauli_y,
            "Z": self._pauli_z,
            "H": self._hadamard,
            "CX": self._cnot,
            "PhasedX": self._phased_x,
            "ZZPhase": self._zz_phase,
            "Measure": self._measure,
        }

    @property
    def supported_operations(self) -> list:
        return list(self._dispatch)

    def translate(self, command: Command) -> Gate:
        """ Translates a single command. Raises UnsupportedOperationError for unknown op types. """
        op_type = command.op.type
        if op_type not in self._dispatch:
            raise UnsupportedOperationError(f"Operation {op_type} is not supported, expected one of {self.supported_operations}.")
        gate = self._dispatch[op_type](command)
        logger.debug("Translated %s to %r.", op_type, gate)
        return gate

    def _pauli_x(self, command: Command) -> Gate:
        return X(get_arg(command, 0))

    def _pauli_y(self, command: Command) -> Gate:
        return Y(get_arg(command, 0))

    def _pauli_z(self, command: Command) -> Gate:
        return Z(get_arg(command, 0))

    def _hadamard(self, command: Command) -> Gate:
        return H(get_arg(command, 0))

    def _cnot(self, command: Command) -> Gate:
        control = get_arg(command, 0)
        target = get_arg(command, 1)
        return CNOT(control, target)

    def _phased_x(self, command: Command) -> Gate:
        index = get_arg(command, 0)
        # Simulator rotations turn the other way.
        alpha = -self.evaluator.eval_param(command, 0) * np.pi
        beta = -self.evaluator.eval_param(command, 1) * np.pi
        return merge(RZ(index, beta), RX(index, alpha), RZ(index, -beta))

    def _zz_phase(self, command: Command) -> Gate:
        index_1 = get_arg(command, 0)
        index_2 = get_arg(command, 1)
        if self.zz_phase == "diagonal":
            return zz_phase_diagonal(index_1, index_2, self.evaluator.eval_param(command, 0))
        alpha = -self.evaluator.eval_param(command, 0) * np.pi
        return PauliRotation([index_1, index_2], [Pauli.Z, Pauli.Z], alpha)

    def _measure(self, command: Command) -> Gate:
        index = get_arg(command, 0)
        register = get_arg(command, 1)
        return self.strategy.measurement_gate(index, register, self.rng)


def zz_phase_diagonal(index_1: int, index_2: int, alpha: float) -> DiagonalMatrix:
    """ ZZPhase(alpha) = exp(-i pi alpha Z Z / 2) as diagonal matrix, alpha in half turns. """
    even = np.exp(-0.5J * np.pi * alpha)
    odd = np.exp(0.5J * np.pi * alpha)
    return DiagonalMatrix([index_1, index_2], [even, odd, odd, even])


def convert_circuit(circuit: SerialCircuit, rng: np.random.Generator, strategy, zz_phase: str = "pauli_rotation") -> QuantumCircuit:
    """Translates a SerialCircuit into a simulator circuit.

    Args:
        circuit (SerialCircuit): Circuit to translate.
        rng (np.random.Generator): Random stream for the seeds of measurement gates.
        strategy: Shot strategy deciding how Measure commands are realized.
        zz_phase (str): Realization of ZZPhase.

    Returns:
        The QuantumCircuit with one gate per command, in program order.
    """
    sim_circuit = QuantumCircuit(nqubit=len(circuit.qubits), nbit=len(circuit.bits))
    translator = GateTranslator(strategy=strategy, rng=rng, zz_phase=zz_phase)
    for command in circuit.commands:
        sim_circuit.add_gate(translator.translate(command))
        if command.op.type == "Measure":
            sim_circuit.record_measurement(get_arg(command, 0), get_arg(command, 1))
    logger.debug("Converted circuit %s with %d command(s).", circuit.name or "<unnamed>", len(circuit.commands))
    return sim_circuit
