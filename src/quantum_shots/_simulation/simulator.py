"""Runs translated circuits for many shots.

Two strategies exist and one of them is chosen when the Simulator is constructed:

- PerShotStrategy resets the state and applies the full circuit once per shot. Each Measure becomes a measurement gate
  with its own seed, the classical register is read back after every shot.
- BulkSamplingStrategy applies the circuit once and samples all shots from the final amplitudes. Measure becomes an
  identity, so measurements are effectively deferred to the end of the circuit. This is much cheaper, but mid-circuit
  collapse is lost and the random draws differ from PerShotStrategy, so only the distributions agree. Each sample is
  remapped so that the qubit of Measure(q, b) lands in register slot b.

Random draws happen in this order: one seed per Measure command while translating, then (per-shot) one seed per shot or
(bulk) one seed for the state update and one for the sampling.
"""

import logging
import time

import numpy as np

from .._circuit.serial import SerialCircuit
from .._gates.primitives import Gate, Identity, Measurement
from .._translation.translator import convert_circuit
from .._utility.rng import new_rng, draw_seed
from .circuit import QuantumCircuit
from .results import BackendResult, OutcomeArray, convert_shots, convert_samples


logger = logging.getLogger(__name__)


class ShotStrategy(object):
    """ Interface of the shot strategies. """

    name = "strategy"
    defers_measurement = False

    def measurement_gate(self, index: int, register: int, rng: np.random.Generator) -> Gate:
        raise NotImplementedError

    def run(self, circuit: QuantumCircuit, n_shots: int, rng: np.random.Generator) -> OutcomeArray:
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}()"


class PerShotStrategy(ShotStrategy):
    """ Simulates every shot from scratch, reading the classical register after each one. """

    name = "per-shot"

    def measurement_gate(self, index: int, register: int, rng: np.random.Generator) -> Gate:
        return Measurement(index, register, seed=draw_seed(rng))

    def run(self, circuit: QuantumCircuit, n_shots: int, rng: np.random.Generator) -> OutcomeArray:
        state = circuit.new_state()
        shots = []
        for shot in range(n_shots):
            state.set_zero_state()
            circuit.update_quantum_state(state, draw_seed(rng))
            shots.append(state.get_classical_register())
            logger.debug("Shot %d gave register %s.", shot, shots[-1])
        if not shots:
            return OutcomeArray(width=circuit.nbit, array=[])
        return convert_shots(shots)


class BulkSamplingStrategy(ShotStrategy):
    """ Simulates the circuit once and samples all shots from the final state. """

    name = "bulk"
    defers_measurement = True

    def measurement_gate(self, index: int, register: int, rng: np.random.Generator) -> Gate:
        # Mid-circuit measurement cannot be represented when sampling from one final state.
        return Identity(index)

    def run(self, circuit: QuantumCircuit, n_shots: int, rng: np.random.Generator) -> OutcomeArray:
        state = circuit.new_state()
        state.set_zero_state()
        circuit.update_quantum_state(state, draw_seed(rng))
        samples = state.sampling(n_shots, draw_seed(rng))
        return convert_samples(circuit.nbit, [remap_sample(s, circuit.measurements) for s in samples])


def remap_sample(sample: int, measurements) -> int:
    """Moves the measured qubits of a sampled basis state to their register slots.

    Qubit q read into slot b sets bit b of the result. Later measurements into the same slot win, slots that are never
    written stay zero, like the classical register of a per-shot run.

    Args:
        sample (int): Sampled basis state index, qubit k is bit k.
        measurements (list[tuple[int, int]]): (qubit, register slot) pairs in program order.
    """
    register = {}
    for index, slot in measurements:
        register[slot] = (sample >> index) & 1
    return sum(bit << slot for slot, bit in register.items())


STRATEGIES = {
    PerShotStrategy.name: PerShotStrategy,
    BulkSamplingStrategy.name: BulkSamplingStrategy,
}


def get_strategy(name: str) -> ShotStrategy:
    """ Returns a new strategy by its name, 'per-shot' or 'bulk'. """
    if name not in STRATEGIES:
        raise ValueError(f"Unknown shot strategy {name!r}, expected one of {list(STRATEGIES)}.")
    return STRATEGIES[name]()


class Simulator(object):
    """Translates pytket circuits and runs them for many shots.

    Args:
        strategy (ShotStrategy): How the shots are produced. Defaults to PerShotStrategy.
        zz_phase (str): Realization of ZZPhase gates, "pauli_rotation" or "diagonal".

    Example:
        .. code:: python

            from quantum_shots.simulators import Simulator, PerShotStrategy
            from quantum_shots.utilities import new_rng

            sim = Simulator(strategy=PerShotStrategy())
            result = sim.run(circuit, n_shots=10, rng=new_rng(1))
            result.shots.array  # Gives ten packed outcomes like [[0], [192], ...]

    Attributes:
        strategy (ShotStrategy): The shot strategy.
        zz_phase (str): Realization of ZZPhase gates.
    """

    def __init__(self, strategy: ShotStrategy = None, zz_phase: str = "pauli_rotation"):
        self.strategy = strategy if strategy is not None else PerShotStrategy()
        self.zz_phase = zz_phase

    def run(self, circuit: SerialCircuit, n_shots: int, rng: np.random.Generator) -> BackendResult:
        """Simulates one circuit.

        Args:
            circuit (SerialCircuit): Circuit to simulate.
            n_shots (int): Number of shots.
            rng (np.random.Generator): Random stream of the run.

        Returns:
            BackendResult with the qubits and bits of the circuit and the packed shots.
        """
        self._validate_input_of_run(circuit, n_shots)

        if self.strategy.defers_measurement and any(c.op.type == "Measure" for c in circuit.commands):
            logger.warning(
                "Strategy %s replaces the Measure commands of circuit %s by identities, outcomes are sampled from the final state.",
                self.strategy.name, circuit.name or "<unnamed>",
            )

        start = time.time()
        sim_circuit = convert_circuit(circuit, rng, self.strategy, zz_phase=self.zz_phase)
        shots = self.strategy.run(sim_circuit, n_shots, rng)
        logger.info(
            "Simulated %d shot(s) of a %d qubit circuit with %d gate(s) in %.3fs (%s).",
            n_shots, sim_circuit.nqubit, len(sim_circuit), time.time() - start, self.strategy.name,
        )
        return BackendResult(qubits=list(circuit.qubits), bits=list(circuit.bits), shots=shots)

    def run_many(self, circuits: list, n_shots: int, seed: int = None) -> list:
        """ Simulates the circuits in order, sharing one random stream created from the seed. """
        rng = new_rng(seed)
        return [self.run(circuit, n_shots, rng) for circuit in circuits]

    def _validate_input_of_run(self, circuit, n_shots):
        """ Performs sanity checks on the input of the run() method. Raises an Exception if any mistakes are found. """
        if not isinstance(circuit, SerialCircuit):
            raise ValueError(f"Expected argument circuit to be of type SerialCircuit, but found {type(circuit)}.")
        if isinstance(n_shots, bool) or not isinstance(n_shots, (int, np.integer)):
            raise ValueError(f"Expected argument n_shots to be of type int, but found {type(n_shots)}.")
        if n_shots < 0:
            raise ValueError(f"Expected non-negative number of shots but found {n_shots}.")


def simulate_circuit(circuit: SerialCircuit, n_shots: int, rng: np.random.Generator, strategy: ShotStrategy = None) -> BackendResult:
    """ Simulates one circuit with the given random stream. """
    return Simulator(strategy=strategy).run(circuit, n_shots, rng)


def simulate_circuits(circuits: list, n_shots: int, seed: int = None, strategy: ShotStrategy = None) -> list:
    """ Simulates many circuits with one random stream, results are in the order of the circuits. """
    return Simulator(strategy=strategy).run_many(circuits, n_shots, seed)
