"""
Ordered list of primitive gates that can be applied to a QuantumState.
"""

import logging

import numpy as np

from .._gates.primitives import Gate
from .._utility.errors import SimulationError
from .state import QuantumState


logger = logging.getLogger(__name__)


class QuantumCircuit(object):
    """Circuit of primitive gates, sized to the qubits and bits declared by the source circuit.

    Args:
        nqubit (int): Number of qubits.
        nbit (int): Number of classical register slots.

    Example:
        .. code:: python

            from quantum_shots.circuits import QuantumCircuit
            from quantum_shots.gates import H, CNOT, Measurement

            circuit = QuantumCircuit(nqubit=2, nbit=2)
            circuit.add_gate(H(0))
            circuit.add_gate(CNOT(0, 1))
            circuit.add_gate(Measurement(0, 0, seed=1))
            circuit.add_gate(Measurement(1, 1, seed=2))

    Attributes:
        nqubit (int): Number of qubits.
        nbit (int): Number of classical register slots.
        gate_list (list[Gate]): The gates in application order.
        measurements (list[tuple[int, int]]): (qubit, register slot) of every measurement, in program order.
    """

    def __init__(self, nqubit: int, nbit: int = 0):
        self.nqubit = nqubit
        self.nbit = nbit
        self.gate_list = []
        self.measurements = []

    def record_measurement(self, index: int, register: int):
        """ Notes that the qubit is read into the register slot, whichever gate realizes the measurement. """
        if not 0 <= index < self.nqubit:
            raise SimulationError(f"Measured qubit {index} is out of range for a circuit of {self.nqubit} qubit(s).")
        if not 0 <= register < self.nbit:
            raise SimulationError(f"Classical register slot {register} is out of range for a register of {self.nbit} bit(s).")
        self.measurements.append((index, register))

    def add_gate(self, gate: Gate):
        """ Appends the gate, its targets must fit into the circuit. """
        if not isinstance(gate, Gate):
            raise ValueError(f"QuantumCircuit.add_gate() expected a Gate but found type {type(gate)}.")
        if any(t >= self.nqubit for t in gate.targets):
            raise SimulationError(f"Gate {gate!r} acts outside of the {self.nqubit} qubit(s) of the circuit.")
        self.gate_list.append(gate)

    def new_state(self) -> QuantumState:
        return QuantumState(self.nqubit, self.nbit)

    def update_quantum_state(self, state: QuantumState, seed: int):
        """Applies all gates in order to the state.

        Args:
            state (QuantumState): State to update in place.
            seed (int): Seed for gates that do not carry their own random stream.
        """
        if state.nqubit != self.nqubit:
            raise SimulationError(f"Circuit of {self.nqubit} qubit(s) cannot update a state of {state.nqubit} qubit(s).")
        rng = np.random.default_rng(seed)
        for gate in self.gate_list:
            gate.update_quantum_state(state, rng)

    def __len__(self):
        return len(self.gate_list)

    def __iter__(self):
        return iter(self.gate_list)
