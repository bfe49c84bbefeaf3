from ._simulation.simulator import (
    Simulator,
    ShotStrategy,
    PerShotStrategy,
    BulkSamplingStrategy,
    STRATEGIES,
    get_strategy,
    remap_sample,
    simulate_circuit,
    simulate_circuits,
)
from ._simulation.state import QuantumState
