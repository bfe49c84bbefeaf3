from ._circuit.serial import SerialCircuit, Command, Operation, UnitID
from ._simulation.circuit import QuantumCircuit
