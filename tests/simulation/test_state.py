import pytest
import numpy as np

from quantum_shots.simulators import QuantumState
from quantum_shots.circuits import QuantumCircuit
from quantum_shots.gates import X, H, CNOT, RX, DiagonalMatrix, Identity, Measurement
from quantum_shots.utilities import SimulationError
import tests.helpers.gates as helper_gates
from tests.helpers.functions import vector_almost_equal


""" Tests """


@pytest.mark.parametrize("nqubit", [1, 2, 3, 5])
def test_state_init_is_zero_state(nqubit):
    state = QuantumState(nqubit=nqubit, nbit=2)
    expected = np.zeros(2**nqubit)
    expected[0] = 1
    assert vector_almost_equal(state.vector, expected, nqubit)
    assert state.get_classical_register() == [0, 0]


@pytest.mark.parametrize("nqubit,index", [(n, i) for n in [1, 2, 4, 6] for i in range(n)])
def test_x_flips_bit_of_its_qubit(nqubit, index):
    """ Qubit k is bit k of the basis index. """
    state = QuantumState(nqubit)
    X(index).update_quantum_state(state)
    expected = np.zeros(2**nqubit)
    expected[1 << index] = 1
    assert vector_almost_equal(state.vector, expected, nqubit)


@pytest.mark.parametrize("nqubits", [2, 3, 4, 6, 8])
def test_x_and_many_cnot(nqubits):
    """ Maps |0..0> to |1...1> with one X and a chain of CNOTs. """
    state = QuantumState(nqubits)
    X(0).update_quantum_state(state)
    for i in range(nqubits - 1):
        CNOT(i, i + 1).update_quantum_state(state)
    expected = np.zeros(2**nqubits)
    expected[-1] = 1
    assert vector_almost_equal(state.vector, expected, nqubits)


def test_cnot_with_control_above_target():
    state = QuantumState(3)
    X(2).update_quantum_state(state)
    CNOT(2, 0).update_quantum_state(state)
    expected = np.zeros(8)
    expected[0b101] = 1
    assert vector_almost_equal(state.vector, expected, 3)


def test_apply_matrix_matches_full_kronecker_product():
    """ A single qubit gate on qubit 1 of three is I (x) U (x) I in the big endian Kronecker order. """
    rng = np.random.default_rng(7)
    psi0 = rng.normal(size=8) + 1J * rng.normal(size=8)
    psi0 /= np.linalg.norm(psi0)
    u = helper_gates.rx(0.9) @ helper_gates.H

    state = QuantumState(3)
    state.vector = psi0.copy()
    state.apply_matrix((1,), u)

    expected = np.kron(np.kron(np.eye(2), u), np.eye(2)) @ psi0
    assert vector_almost_equal(state.vector, expected, 3)


def test_apply_two_qubit_matrix_on_reversed_targets():
    rng = np.random.default_rng(11)
    psi0 = rng.normal(size=4) + 1J * rng.normal(size=4)
    state = QuantumState(2)
    state.vector = psi0.copy()
    # CNOT with control 1 and target 0 in the big endian basis (q1 q0).
    state.apply_matrix((1, 0), helper_gates.CNOT)
    expected = np.array([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]]) @ psi0
    assert vector_almost_equal(state.vector, expected, 2)


def test_diagonal_matches_matrix_application():
    rng = np.random.default_rng(3)
    psi0 = rng.normal(size=8) + 1J * rng.normal(size=8)
    diagonal = np.exp(1J * np.array([0.1, 0.2, 0.3, 0.4]))

    by_diagonal = QuantumState(3)
    by_diagonal.vector = psi0.copy()
    DiagonalMatrix([2, 0], diagonal).update_quantum_state(by_diagonal)

    by_matrix = QuantumState(3)
    by_matrix.vector = psi0.copy()
    by_matrix.apply_matrix((2, 0), np.diag(diagonal))

    assert vector_almost_equal(by_diagonal.vector, by_matrix.vector, 3)


def test_target_out_of_range_raises():
    state = QuantumState(2)
    with pytest.raises(SimulationError):
        X(2).update_quantum_state(state)
    with pytest.raises(SimulationError):
        Identity(5).update_quantum_state(state)


def test_probability_zero():
    state = QuantumState(2)
    RX(1, np.pi / 2).update_quantum_state(state)
    assert abs(state.probability_zero(0) - 1.0) < 1e-9
    assert abs(state.probability_zero(1) - 0.5) < 1e-9


@pytest.mark.parametrize("r,outcome", [(0.1, 0), (0.49, 0), (0.51, 1), (0.99, 1)])
def test_measure_collapses_and_writes_register(r, outcome):
    state = QuantumState(2, nbit=2)
    H(0).update_quantum_state(state)
    CNOT(0, 1).update_quantum_state(state)

    assert state.measure(0, 1, r) == outcome
    assert state.get_classical_register() == [0, outcome]

    expected = np.zeros(4)
    expected[3 * outcome] = 1
    assert vector_almost_equal(np.abs(state.vector), expected, 2)


def test_measure_register_out_of_range_raises():
    state = QuantumState(1, nbit=1)
    with pytest.raises(SimulationError):
        state.measure(0, 1, 0.5)


def test_set_zero_state_clears_register():
    state = QuantumState(1, nbit=1)
    X(0).update_quantum_state(state)
    state.measure(0, 0, 0.5)
    assert state.get_classical_register() == [1]
    state.set_zero_state()
    assert state.get_classical_register() == [0]
    assert vector_almost_equal(state.vector, np.array([1, 0]), 1)


def test_sampling_is_seeded_and_follows_amplitudes():
    state = QuantumState(2)
    H(0).update_quantum_state(state)
    CNOT(0, 1).update_quantum_state(state)

    samples = state.sampling(200, seed=5)
    assert samples == state.sampling(200, seed=5)
    assert set(samples) <= {0, 3}
    assert 0 in samples and 3 in samples


def test_sampling_does_not_change_state():
    state = QuantumState(1)
    H(0).update_quantum_state(state)
    before = state.vector.copy()
    state.sampling(10, seed=1)
    assert vector_almost_equal(state.vector, before, 1)


def test_measurement_gate_stream_advances_between_applications():
    """ A seeded measurement gate draws a new number each time it is applied. """
    circuit = QuantumCircuit(nqubit=1, nbit=1)
    circuit.add_gate(H(0))
    circuit.add_gate(Measurement(0, 0, seed=123))
    state = circuit.new_state()

    outcomes = []
    for seed in range(40):
        state.set_zero_state()
        circuit.update_quantum_state(state, seed)
        outcomes.append(state.get_classical_register()[0])
    assert set(outcomes) == {0, 1}


def test_circuit_rejects_gate_outside_of_width():
    circuit = QuantumCircuit(nqubit=2, nbit=0)
    with pytest.raises(SimulationError):
        circuit.add_gate(CNOT(0, 2))


def test_circuit_rejects_non_gates():
    circuit = QuantumCircuit(nqubit=1)
    with pytest.raises(ValueError):
        circuit.add_gate(helper_gates.X)


def test_circuit_records_measurements_in_program_order():
    circuit = QuantumCircuit(nqubit=2, nbit=2)
    circuit.record_measurement(1, 0)
    circuit.record_measurement(0, 1)
    assert circuit.measurements == [(1, 0), (0, 1)]


@pytest.mark.parametrize("index,register", [(2, 0), (0, 2), (-1, 0)])
def test_circuit_rejects_measurement_outside_of_registers(index, register):
    circuit = QuantumCircuit(nqubit=2, nbit=2)
    with pytest.raises(SimulationError):
        circuit.record_measurement(index, register)
