import pytest
import numpy as np

from qiskit.circuit.library import RXGate, RZGate, RZZGate
from qiskit.quantum_info import Operator

from quantum_shots.translation import GateTranslator, convert_circuit, get_arg, zz_phase_diagonal
from quantum_shots.circuits import Command
from quantum_shots.gates import X, Y, Z, H, CNOT, RX, RZ, Pauli, PauliRotation, DiagonalMatrix, Identity, Measurement, MergedGate
from quantum_shots.simulators import PerShotStrategy, BulkSamplingStrategy
from quantum_shots.utilities import (
    ArgumentError,
    ParseError,
    UnsupportedOperationError,
    SimulationError,
    new_rng,
    draw_seed,
)
from tests.helpers.functions import load_circuit, matrix_almost_equal


def _command(op_type, args, params=None) -> Command:
    op = {"type": op_type}
    if params is not None:
        op["params"] = params
    return Command.from_dict({"op": op, "args": args})


def _translator(strategy=None, seed=0, zz_phase="pauli_rotation") -> GateTranslator:
    strategy = strategy if strategy is not None else PerShotStrategy()
    return GateTranslator(strategy=strategy, rng=new_rng(seed), zz_phase=zz_phase)


""" Arguments """


def test_get_arg():
    command = _command("CX", [["q", [3]], ["q", [2**32 - 1]]])
    assert get_arg(command, 0) == 3
    assert get_arg(command, 1) == 2**32 - 1


@pytest.mark.parametrize("args,index", [
    ([["q", [0]]], 1),
    ([["q", [0]]], -1),
    ([["q", []]], 0),
    ([["q", ["a"]]], 0),
    ([["q", [True]]], 0),
    ([["q", [-1]]], 0),
    ([["q", [2**32]]], 0),
])
def test_get_arg_invalid_raises(args, index):
    with pytest.raises(ArgumentError):
        get_arg(_command("X", args), index)


def test_argument_error_is_overflow_error():
    with pytest.raises(OverflowError):
        get_arg(_command("X", [["q", [2**40]]]), 0)


""" Gates """


@pytest.mark.parametrize("op_type,Gate", [("X", X), ("Y", Y), ("Z", Z), ("H", H)])
def test_single_qubit_gates(op_type, Gate):
    gate = _translator().translate(_command(op_type, [["q", [2]]]))
    assert type(gate) is Gate
    assert gate.targets == (2,)


def test_cx_keeps_control_and_target():
    gate = _translator().translate(_command("CX", [["q", [1]], ["q", [0]]]))
    assert isinstance(gate, CNOT)
    assert (gate.control, gate.target) == (1, 0)


@pytest.mark.parametrize("alpha,beta", [("0.5", "0.5"), ("0.25", "-0.5"), ("1", "0"), ("-0.3", "1.7")])
def test_phased_x_sequence(alpha, beta):
    gate = _translator().translate(_command("PhasedX", [["q", [0]]], [alpha, beta]))
    a, b = float(alpha), float(beta)

    assert isinstance(gate, MergedGate)
    assert [type(g) for g in gate.gates] == [RZ, RX, RZ]
    assert [g.angle for g in gate.gates] == pytest.approx([-b * np.pi, -a * np.pi, b * np.pi])


@pytest.mark.parametrize("alpha,beta", [(0.5, 0.5), (0.25, -0.5), (-0.3, 1.7)])
def test_phased_x_matrix(alpha, beta):
    """ The merged sequence equals Rz(-beta) Rx(alpha) Rz(beta) in half turns with exp(-i theta P / 2) rotations. """
    gate = _translator().translate(_command("PhasedX", [["q", [0]]], [str(alpha), str(beta)]))
    expected = (
        Operator(RZGate(-beta * np.pi)).data
        @ Operator(RXGate(alpha * np.pi)).data
        @ Operator(RZGate(beta * np.pi)).data
    )
    assert matrix_almost_equal(gate.matrix(), expected, 1)


@pytest.mark.parametrize("alpha", [0.0, 0.5, 0.306088405064804, -1.25])
def test_zz_phase_pauli_rotation(alpha):
    gate = _translator().translate(_command("ZZPhase", [["q", [0]], ["q", [1]]], [str(alpha)]))
    assert isinstance(gate, PauliRotation)
    assert gate.targets == (0, 1)
    assert gate.paulis == (Pauli.Z, Pauli.Z)
    assert gate.angle == pytest.approx(-alpha * np.pi)
    assert matrix_almost_equal(gate.matrix(), Operator(RZZGate(alpha * np.pi)).data, 2)


@pytest.mark.parametrize("alpha", [0.0, 0.5, 0.306088405064804, -1.25])
def test_zz_phase_realizations_are_equal(alpha):
    command = _command("ZZPhase", [["q", [2]], ["q", [0]]], [str(alpha)])
    rotation = _translator().translate(command)
    diagonal = _translator(zz_phase="diagonal").translate(command)
    assert isinstance(diagonal, DiagonalMatrix)
    assert diagonal.targets == (2, 0)
    assert matrix_almost_equal(rotation.matrix(), diagonal.matrix(), 2)


def test_zz_phase_diagonal_entries():
    diagonal = zz_phase_diagonal(0, 1, 0.5).diagonal
    expected = [np.exp(-0.25J * np.pi), np.exp(0.25J * np.pi), np.exp(0.25J * np.pi), np.exp(-0.25J * np.pi)]
    assert np.allclose(diagonal, expected)


def test_unknown_zz_phase_realization_raises():
    with pytest.raises(ValueError):
        _translator(zz_phase="exact")


def test_symbolic_parameters():
    command = _command("PhasedX", [["q", [3]]], ["-(234.0 - 0.304074011085012*pi**(-1))", "0.5"])
    gate = _translator().translate(command)
    assert gate.gates[1].angle == pytest.approx(233.90321023614007 * np.pi)


def test_missing_parameter_raises():
    with pytest.raises(ParseError):
        _translator().translate(_command("PhasedX", [["q", [0]]], ["0.5"]))
    with pytest.raises(ParseError):
        _translator().translate(_command("ZZPhase", [["q", [0]], ["q", [1]]]))


""" Measurement """


def test_measure_draws_seed_from_stream():
    translator = _translator(seed=21)
    gate = translator.translate(_command("Measure", [["q", [1]], ["c", [0]]]))

    reference = new_rng(21)
    assert isinstance(gate, Measurement)
    assert gate.targets == (1,)
    assert gate.register == 0
    assert gate.seed == draw_seed(reference)
    assert draw_seed(translator.rng) == draw_seed(reference)


def test_measure_is_identity_for_bulk_sampling():
    translator = _translator(strategy=BulkSamplingStrategy(), seed=22)
    gate = translator.translate(_command("Measure", [["q", [1]], ["c", [0]]]))

    assert isinstance(gate, Identity)
    assert gate.targets == (1,)
    assert draw_seed(translator.rng) == draw_seed(new_rng(22))


def test_measure_seeds_follow_command_order():
    translator = _translator(seed=23)
    first = translator.translate(_command("Measure", [["q", [0]], ["c", [0]]]))
    second = translator.translate(_command("Measure", [["q", [1]], ["c", [1]]]))

    reference = new_rng(23)
    assert [first.seed, second.seed] == [draw_seed(reference), draw_seed(reference)]


""" Circuits """


@pytest.mark.parametrize("op_type", ["Rx", "CCX", "Barrier", "measure"])
def test_unsupported_operation_raises(op_type):
    with pytest.raises(UnsupportedOperationError):
        _translator().translate(_command(op_type, [["q", [0]]], ["0.5"]))


def test_supported_operations():
    assert set(_translator().supported_operations) == {"X", "Y", "Z", "H", "CX", "PhasedX", "ZZPhase", "Measure"}


def test_convert_circuit_keeps_program_order():
    circuit = load_circuit("chemistry.json")
    sim_circuit = convert_circuit(circuit, new_rng(24), PerShotStrategy())

    assert sim_circuit.nqubit == 4
    assert sim_circuit.nbit == 4
    assert len(sim_circuit) == len(circuit.commands)
    assert [type(g) for g in sim_circuit][:4] == [X, X, MergedGate, MergedGate]
    assert [type(g) for g in sim_circuit][-4:] == [Measurement] * 4


def test_convert_circuit_draws_one_seed_per_measure():
    rng = new_rng(25)
    convert_circuit(load_circuit("chemistry.json"), rng, PerShotStrategy())

    reference = new_rng(25)
    for _ in range(4):
        draw_seed(reference)
    assert draw_seed(rng) == draw_seed(reference)


@pytest.mark.parametrize("Strategy", [PerShotStrategy, BulkSamplingStrategy])
def test_convert_circuit_records_measurements(Strategy):
    sim_circuit = convert_circuit(load_circuit("chemistry.json"), new_rng(26), Strategy())
    assert sim_circuit.measurements == [(0, 0), (1, 1), (2, 2), (3, 3)]


@pytest.mark.parametrize("Strategy", [PerShotStrategy, BulkSamplingStrategy])
def test_convert_circuit_rejects_measure_outside_of_bits(Strategy):
    circuit = load_circuit("phasedx.json")
    circuit.commands[-1] = _command("Measure", [["q", [0]], ["c", [1]]])
    with pytest.raises(SimulationError):
        convert_circuit(circuit, new_rng(27), Strategy())
