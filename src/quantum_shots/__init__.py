from .gates import Pauli, X, Y, Z, H, CNOT, RX, RZ, PauliRotation, DiagonalMatrix, Identity, Measurement, merge
from .circuits import SerialCircuit, Command, Operation, UnitID, QuantumCircuit
from .simulators import Simulator, PerShotStrategy, BulkSamplingStrategy, QuantumState
from .simulators import simulate_circuit, simulate_circuits
from .results import BackendResult, OutcomeArray, Count
from .results import convert_shot, convert_shots, convert_sample, convert_samples
from .translation import Evaluator, GateTranslator, convert_circuit, get_arg
from .utilities import (
    NodeDefinition,
    new_rng,
    QuantumShotsError,
    ParseError,
    ArgumentError,
    UnsupportedOperationError,
    SimulationError,
    NodeDefinitionError,
)
from .runner import run


__version__ = "0.1.0"

__all__ = ["Pauli", "X", "Y", "Z", "H", "CNOT", "RX", "RZ", "PauliRotation", "DiagonalMatrix", "Identity"]
__all__ += ["Measurement", "merge"]
__all__ += ["SerialCircuit", "Command", "Operation", "UnitID", "QuantumCircuit"]
__all__ += ["Simulator", "PerShotStrategy", "BulkSamplingStrategy", "QuantumState"]
__all__ += ["simulate_circuit", "simulate_circuits"]
__all__ += ["BackendResult", "OutcomeArray", "Count"]
__all__ += ["convert_shot", "convert_shots", "convert_sample", "convert_samples"]
__all__ += ["Evaluator", "GateTranslator", "convert_circuit", "get_arg"]
__all__ += [
    "NodeDefinition",
    "new_rng",
    "QuantumShotsError",
    "ParseError",
    "ArgumentError",
    "UnsupportedOperationError",
    "SimulationError",
    "NodeDefinitionError",
]
__all__ += ["run"]
