"""
Runs the function selected by a node definition: reads the JSON inputs, simulates, writes the JSON outputs and finally
the completion marker.

Functions:
    submit: inputs 'circuits' and 'n_shots', output 'backend_results'.
    submit_single: inputs 'circuit' and 'n_shots', output 'backend_result'.
    submit_single_mpi: like submit_single with bulk sampling, only MPI rank zero writes. Needs mpi4py.

Any error propagates, in which case the completion marker is not written.
"""

import json
import logging
from pathlib import Path

from ._circuit.serial import SerialCircuit
from ._simulation.simulator import Simulator, ShotStrategy, BulkSamplingStrategy
from ._utility.errors import UnsupportedOperationError
from ._utility.node_definition import NodeDefinition
from ._utility.rng import new_rng


logger = logging.getLogger(__name__)


def load_json(location):
    with open(location, "r") as f:
        return json.load(f)


def save_json(location, data):
    with open(location, "w") as f:
        json.dump(data, f)


def load_n_shots(location) -> int:
    n_shots = load_json(location)
    if isinstance(n_shots, bool) or not isinstance(n_shots, int) or not 0 <= n_shots < 2**32:
        raise ValueError(f"Expected n_shots in {location} to be an unsigned 32 bit integer but found {n_shots!r}.")
    return n_shots


def mark_done(node_definition: NodeDefinition):
    """ Creates the empty completion marker. """
    Path(node_definition.done_path).touch()
    logger.info("Wrote completion marker %s.", node_definition.done_path)


def submit(node_definition: NodeDefinition, strategy: ShotStrategy = None, seed: int = None):
    circuits = load_json(node_definition.input_path("circuits"))
    if not isinstance(circuits, list):
        raise ValueError(f"Expected a JSON list of circuits but found {type(circuits).__name__}.")
    circuits = [SerialCircuit.from_dict(c) for c in circuits]
    n_shots = load_n_shots(node_definition.input_path("n_shots"))
    logger.info("Simulating %d circuit(s) with %d shot(s) each.", len(circuits), n_shots)

    results = Simulator(strategy=strategy).run_many(circuits, n_shots, seed)

    save_json(node_definition.output_path("backend_results"), [r.to_dict() for r in results])
    mark_done(node_definition)


def submit_single(node_definition: NodeDefinition, strategy: ShotStrategy = None, seed: int = None):
    circuit = SerialCircuit.from_dict(load_json(node_definition.input_path("circuit")))
    n_shots = load_n_shots(node_definition.input_path("n_shots"))

    result = Simulator(strategy=strategy).run(circuit, n_shots, new_rng(seed))

    save_json(node_definition.output_path("backend_result"), result.to_dict())
    mark_done(node_definition)


def submit_single_mpi(node_definition: NodeDefinition, strategy: ShotStrategy = None, seed: int = None):
    """Every rank simulates the circuit with bulk sampling, rank zero writes the result.

    The strategy argument is ignored, distributed runs always sample from one final state.
    """
    try:
        from mpi4py import MPI
    except ImportError as e:
        raise UnsupportedOperationError("submit_single_mpi needs mpi4py, install quantum-shots[mpi].") from e

    world = MPI.COMM_WORLD
    rank = world.Get_rank()
    logger.info("Running on MPI rank %d of %d.", rank, world.Get_size())

    circuit = SerialCircuit.from_dict(load_json(node_definition.input_path("circuit")))
    n_shots = load_n_shots(node_definition.input_path("n_shots"))

    result = Simulator(strategy=BulkSamplingStrategy()).run(circuit, n_shots, new_rng(seed))

    if rank == 0:
        save_json(node_definition.output_path("backend_result"), result.to_dict())
        mark_done(node_definition)


FUNCTIONS = {
    "submit": submit,
    "submit_single": submit_single,
    "submit_single_mpi": submit_single_mpi,
}


def run(node_definition: NodeDefinition, strategy: ShotStrategy = None, seed: int = None):
    """Runs the function selected by the node definition.

    Args:
        node_definition (NodeDefinition): What to run and where the files are.
        strategy (ShotStrategy): Shot strategy for submit and submit_single, defaults to per-shot simulation.
        seed (int): Seed of the random stream, None for an unseeded run.

    Raises:
        UnsupportedOperationError: If the function name is unknown.
    """
    name = node_definition.function_name
    if name not in FUNCTIONS:
        raise UnsupportedOperationError(f"Unknown function {name!r}, expected one of {list(FUNCTIONS)}.")
    logger.info("Running %s.", name)
    FUNCTIONS[name](node_definition, strategy=strategy, seed=seed)
