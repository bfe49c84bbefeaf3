""" Primitive gates of the statevector simulator.

The vocabulary is closed: X, Y, Z, H, CNOT, RX, RZ, PauliRotation, DiagonalMatrix, Identity and Measurement. Gates that
need more than one primitive are combined with merge(), which keeps the application order.

Attributes:
    Pauli (IntEnum): Pauli operators used by PauliRotation.
"""

from ._gates.primitives import (
    Gate,
    MatrixGate,
    MergedGate,
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
    Identity,
    Measurement,
    merge,
)
