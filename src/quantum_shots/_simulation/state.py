"""
Statevector of an n qubit register together with its classical register.

Gates are applied as tensor contractions: the statevector is viewed as a tensor with one leg of dimension two per qubit
and the gate matrix is contracted with the legs of its targets only. This keeps the cost of a k qubit gate at
O(2**n * 2**k) instead of building the full 2**n x 2**n propagator.

Qubit k is bit k of the basis state index. With the statevector reshaped to (2,) * n in C order, qubit k therefore
lives on axis n - 1 - k.
"""

import logging

import numpy as np
import opt_einsum as oe

from .._utility.errors import SimulationError


logger = logging.getLogger(__name__)


class QuantumState(object):
    """Statevector simulation state.

    Args:
        nqubit (int): Number of qubits.
        nbit (int): Number of classical register slots.

    Example:
        .. code:: python

            from quantum_shots.simulators import QuantumState
            from quantum_shots.gates import X

            state = QuantumState(nqubit=2, nbit=2)
            X(0).update_quantum_state(state)
            state.vector  # Gives [0, 1, 0, 0]

    Attributes:
        nqubit (int): Number of qubits.
        nbit (int): Number of classical register slots.
        vector (np.array): The statevector of length 2**nqubit.
        classical_register (list[int]): Last measured value of each classical slot.
    """

    def __init__(self, nqubit: int, nbit: int = 0):
        if nqubit < 0 or nbit < 0:
            raise SimulationError(f"Expected non-negative register sizes but found nqubit={nqubit}, nbit={nbit}.")
        self.nqubit = nqubit
        self.nbit = nbit
        self.vector = np.zeros(2**nqubit, dtype=complex)
        self.classical_register = [0] * nbit
        self.set_zero_state()

    def set_zero_state(self):
        """ Resets the state to |0...0> and clears the classical register. """
        self.vector[:] = 0
        self.vector[0] = 1
        self.classical_register = [0] * self.nbit

    def check_targets(self, targets):
        for t in targets:
            if not 0 <= t < self.nqubit:
                raise SimulationError(f"Target qubit {t} is out of range for a state of {self.nqubit} qubit(s).")

    def apply_matrix(self, targets, matrix: np.array):
        """Applies a gate matrix to the target qubits.

        Args:
            targets (tuple[int]): Target qubits, the first one is the least significant bit of the matrix basis.
            matrix (np.array): Square matrix of dimension 2**len(targets).
        """
        self.check_targets(targets)
        m = len(targets)
        if matrix.shape != (2**m, 2**m):
            raise SimulationError(f"Expected matrix of shape {(2**m, 2**m)} for targets {list(targets)} but found {matrix.shape}.")

        n = self.nqubit
        state_legs = [oe.get_symbol(i) for i in range(n)]
        new_legs = [oe.get_symbol(n + j) for j in range(m)]

        # Most significant target first, matching the C order reshape of the matrix.
        matrix_out = [new_legs[j] for j in reversed(range(m))]
        matrix_in = [state_legs[n - 1 - targets[j]] for j in reversed(range(m))]
        result_legs = list(state_legs)
        for j in range(m):
            result_legs[n - 1 - targets[j]] = new_legs[j]

        contract_string = "".join(matrix_out + matrix_in) + "," + "".join(state_legs) + "->" + "".join(result_legs)
        psi = oe.contract(contract_string, matrix.reshape((2,) * (2 * m)), self.vector.reshape((2,) * n))
        self.vector = np.ascontiguousarray(psi).reshape(-1)

    def apply_diagonal(self, targets, diagonal: np.array):
        """ Multiplies each amplitude with the diagonal entry selected by the bits of its target qubits. """
        self.check_targets(targets)
        indices = np.arange(self.vector.size)
        selector = np.zeros(self.vector.size, dtype=np.int64)
        for j, t in enumerate(targets):
            selector |= ((indices >> t) & 1) << j
        self.vector = self.vector * np.asarray(diagonal)[selector]

    def probability_zero(self, index: int) -> float:
        """ Returns the probability to find the qubit in state zero. """
        self.check_targets([index])
        amplitudes = np.take(self.vector.reshape((2,) * self.nqubit), 0, axis=self.nqubit - 1 - index)
        return float(np.sum(np.square(np.abs(amplitudes))))

    def measure(self, index: int, register: int, r: float) -> int:
        """Projective measurement of one qubit, storing the outcome in the classical register.

        Args:
            index (int): Measured qubit.
            register (int): Classical register slot.
            r (float): Uniform random number in [0, 1) deciding the outcome.

        Returns:
            The outcome, 0 or 1.
        """
        if not 0 <= register < self.nbit:
            raise SimulationError(f"Classical register slot {register} is out of range for a register of {self.nbit} bit(s).")
        p0 = self.probability_zero(index)
        outcome = 0 if r < p0 else 1
        p = p0 if outcome == 0 else 1.0 - p0
        if p <= 0.0:
            raise SimulationError(f"Measured outcome {outcome} on qubit {index} has zero probability.")

        mask = ((np.arange(self.vector.size) >> index) & 1) == outcome
        self.vector = np.where(mask, self.vector, 0) / np.sqrt(p)
        self.classical_register[register] = outcome
        return outcome

    def get_classical_register(self) -> list:
        return list(self.classical_register)

    def probabilities(self) -> np.array:
        """ Born rule probabilities of the basis states, normalized. """
        probs = np.square(np.abs(self.vector))
        total = probs.sum()
        if not total > 0.0:
            raise SimulationError(f"Unphysical statevector with norm {total}.")
        return probs / total

    def sampling(self, n_shots: int, seed: int) -> list:
        """Samples basis states from the amplitudes without changing the state.

        Args:
            n_shots (int): Number of samples.
            seed (int): Seed of the sampling.

        Returns:
            List of basis state indices as int, qubit k is bit k.
        """
        rng = np.random.default_rng(seed)
        samples = rng.choice(self.vector.size, size=n_shots, p=self.probabilities())
        return [int(s) for s in samples]
