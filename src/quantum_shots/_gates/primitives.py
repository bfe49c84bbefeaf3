"""
Primitive gates understood by the statevector simulator.

The vocabulary is closed: X, Y, Z, H, CNOT, RX, RZ, PauliRotation, DiagonalMatrix, Identity and Measurement. Composite
gates are built with merge(), which keeps the primitive gates in application order.

Conventions of the simulator:
    - Qubit k is bit k of the basis state index (little endian). A gate acting on targets [t0, t1, ...] is given as a
      matrix over the basis where t0 is the least significant bit.
    - Rotations turn in the positive direction: RX(theta) = exp(+i theta X / 2), RZ(theta) = exp(+i theta Z / 2) and
      PauliRotation(theta) = exp(+i theta P / 2).
"""

from enum import IntEnum
import functools as ft

import numpy as np
import scipy.linalg

from .._utility.errors import SimulationError


class Pauli(IntEnum):
    I = 0
    X = 1
    Y = 2
    Z = 3


_PAULI_MATRICES = {
    Pauli.I: np.eye(2, dtype=complex),
    Pauli.X: np.array([[0, 1], [1, 0]], dtype=complex),
    Pauli.Y: np.array([[0, -1J], [1J, 0]], dtype=complex),
    Pauli.Z: np.array([[1, 0], [0, -1]], dtype=complex),
}


def _frozen(matrix) -> np.array:
    matrix = np.array(matrix, dtype=complex)
    matrix.setflags(write=False)
    return matrix


class Gate(object):
    """Base class of the primitive gates.

    A gate is immutable once constructed. Applying it to a QuantumState does not change the gate.

    Args:
        targets (tuple[int]): Indices of the qubits the gate acts on, ordered from least to most significant.

    Attributes:
        name (str): Short name of the gate.
        targets (tuple[int]): Target qubits.
    """

    name = "Gate"

    def __init__(self, targets):
        targets = tuple(int(t) for t in targets)
        if len(set(targets)) != len(targets):
            raise SimulationError(f"{self.name} got repeated target qubits {targets}.")
        if any(t < 0 for t in targets):
            raise SimulationError(f"{self.name} got negative target qubits {targets}.")
        self.targets = targets

    def matrix(self) -> np.array:
        raise NotImplementedError(f"{self.name} does not have a matrix representation.")

    def update_quantum_state(self, state, rng: np.random.Generator = None):
        """ Applies the gate to the state in place. """
        state.apply_matrix(self.targets, self.matrix())

    def __repr__(self):
        return f"{self.name}(targets={list(self.targets)})"


class MatrixGate(Gate):
    """ A gate given by a fixed matrix over its targets. """

    def __init__(self, targets, matrix):
        super().__init__(targets)
        dim = 2**len(self.targets)
        matrix = _frozen(matrix)
        if matrix.shape != (dim, dim):
            raise SimulationError(f"{self.name} on {len(self.targets)} qubit(s) expects a {dim}x{dim} matrix but found shape {matrix.shape}.")
        self._matrix = matrix

    def matrix(self) -> np.array:
        return self._matrix


class X(MatrixGate):
    name = "X"

    def __init__(self, index: int):
        super().__init__([index], _PAULI_MATRICES[Pauli.X])


class Y(MatrixGate):
    name = "Y"

    def __init__(self, index: int):
        super().__init__([index], _PAULI_MATRICES[Pauli.Y])


class Z(MatrixGate):
    name = "Z"

    def __init__(self, index: int):
        super().__init__([index], _PAULI_MATRICES[Pauli.Z])


class H(MatrixGate):
    name = "H"

    def __init__(self, index: int):
        super().__init__([index], np.array([[1, 1], [1, -1]]) / np.sqrt(2))


class Identity(MatrixGate):
    name = "Identity"

    def __init__(self, index: int):
        super().__init__([index], _PAULI_MATRICES[Pauli.I])

    def update_quantum_state(self, state, rng: np.random.Generator = None):
        state.check_targets(self.targets)


class CNOT(MatrixGate):
    """ Controlled not, flips target if control is one. """
    name = "CNOT"

    def __init__(self, control: int, target: int):
        # Basis over [control, target] with control as least significant bit: |c=1,t=0> = 1 <-> |c=1,t=1> = 3
        matrix = np.array(
            [[1, 0, 0, 0],
             [0, 0, 0, 1],
             [0, 0, 1, 0],
             [0, 1, 0, 0]]
        )
        super().__init__([control, target], matrix)
        self.control = int(control)
        self.target = int(target)


class RX(MatrixGate):
    """ Rotation about X, RX(theta) = exp(+i theta X / 2). """
    name = "RX"

    def __init__(self, index: int, angle: float):
        self.angle = float(angle)
        c, s = np.cos(self.angle / 2), np.sin(self.angle / 2)
        super().__init__([index], [[c, 1J * s], [1J * s, c]])


class RZ(MatrixGate):
    """ Rotation about Z, RZ(theta) = exp(+i theta Z / 2). """
    name = "RZ"

    def __init__(self, index: int, angle: float):
        self.angle = float(angle)
        super().__init__([index], np.diag([np.exp(0.5J * self.angle), np.exp(-0.5J * self.angle)]))


class PauliRotation(MatrixGate):
    """Rotation generated by a Pauli string, exp(+i theta P / 2).

    Args:
        targets (list[int]): Target qubits.
        paulis (list[Pauli]): One Pauli operator per target.
        angle (float): Rotation angle theta.
    """
    name = "PauliRotation"

    def __init__(self, targets, paulis, angle: float):
        paulis = tuple(Pauli(p) for p in paulis)
        if len(paulis) != len(tuple(targets)):
            raise SimulationError(f"PauliRotation got {len(tuple(targets))} targets but {len(paulis)} Pauli operators.")
        self.paulis = paulis
        self.angle = float(angle)

        # Most significant target first in the Kronecker product.
        generator = ft.reduce(np.kron, [_PAULI_MATRICES[p] for p in reversed(paulis)])
        super().__init__(targets, scipy.linalg.expm(0.5J * self.angle * generator))


class DiagonalMatrix(MatrixGate):
    """ Gate with a diagonal matrix, given by its diagonal. """
    name = "DiagonalMatrix"

    def __init__(self, targets, diagonal):
        diagonal = np.asarray(diagonal, dtype=complex)
        super().__init__(targets, np.diag(diagonal))
        self.diagonal = self._matrix.diagonal()

    def update_quantum_state(self, state, rng: np.random.Generator = None):
        state.apply_diagonal(self.targets, self.diagonal)


class Measurement(Gate):
    """Projective Z measurement of one qubit into one classical register slot.

    The outcome is drawn from the gate's own random stream, which is seeded once at construction and advances with every
    application. If no seed is given, the stream passed to update_quantum_state() is used instead.

    Args:
        index (int): Measured qubit.
        register (int): Classical register slot receiving the outcome.
        seed (int): Seed of the gate's random stream.
    """
    name = "Measurement"

    def __init__(self, index: int, register: int, seed: int = None):
        super().__init__([index])
        self.register = int(register)
        self.seed = seed
        self._random = None if seed is None else np.random.default_rng(seed)

    def update_quantum_state(self, state, rng: np.random.Generator = None):
        random = self._random if self._random is not None else rng
        if random is None:
            raise SimulationError("Measurement needs either a seed or a random stream.")
        state.measure(self.targets[0], self.register, random.random())

    def __repr__(self):
        return f"Measurement(target={self.targets[0]}, register={self.register})"


class MergedGate(Gate):
    """Sequence of primitive gates that realizes one abstract gate.

    The gates are applied left to right, so the matrix of MergedGate([a, b]) is b.matrix() @ a.matrix().

    Attributes:
        gates (tuple[Gate]): The primitive gates in application order.
    """
    name = "Merged"

    def __init__(self, gates):
        self.gates = tuple(gates)
        if not self.gates:
            raise SimulationError("Cannot merge an empty list of gates.")
        targets = []
        for gate in self.gates:
            targets += [t for t in gate.targets if t not in targets]
        super().__init__(targets)

    def matrix(self) -> np.array:
        if any(gate.targets != self.targets for gate in self.gates):
            raise NotImplementedError("Matrix of a merged gate is only available if all gates share their targets.")
        return ft.reduce(lambda acc, gate: gate.matrix() @ acc, self.gates[1:], self.gates[0].matrix())

    def update_quantum_state(self, state, rng: np.random.Generator = None):
        for gate in self.gates:
            gate.update_quantum_state(state, rng)

    def __repr__(self):
        return "Merged(" + ", ".join(repr(g) for g in self.gates) + ")"


def merge(*gates) -> MergedGate:
    """Merges gates into one, applied in the given order.

    Merging is associative, nested merged gates are flattened: merge(merge(a, b), c) has the gates (a, b, c).
    """
    flat = []
    for gate in gates:
        if isinstance(gate, MergedGate):
            flat += list(gate.gates)
        else:
            flat.append(gate)
    return MergedGate(flat)
