from ._utility.node_definition import NodeDefinition
from ._utility.rng import new_rng, draw_seed
from ._utility.errors import (
    QuantumShotsError,
    ParseError,
    ArgumentError,
    UnsupportedOperationError,
    SimulationError,
    NodeDefinitionError,
)
