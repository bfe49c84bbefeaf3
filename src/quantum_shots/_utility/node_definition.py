"""
Node definition: the small JSON descriptor that tells a run what to do.

Example of a node definition file:

.. code-block:: json

    {
        "function_name": "submit_single",
        "inputs": {"circuit": "circuit.json", "n_shots": "n_shots.json"},
        "outputs": {"backend_result": "backend_result.json"},
        "done_path": "done",
        "log_path": "run.log"
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .errors import NodeDefinitionError


logger = logging.getLogger(__name__)


@dataclass
class NodeDefinition(object):
    """Descriptor of one run.

    Attributes:
        function_name (str): Selects the function to run, e.g. "submit".
        inputs (dict[str, Path]): Named input files.
        outputs (dict[str, Path]): Named output files.
        done_path (Path): Completion marker, written only after a successful run.
        log_path (Path): Optional log file.
    """
    function_name: str
    inputs: Dict[str, Path] = field(default_factory=dict)
    outputs: Dict[str, Path] = field(default_factory=dict)
    done_path: Path = None
    log_path: Optional[Path] = None

    _names = ["function_name", "inputs", "outputs", "done_path"]

    @classmethod
    def from_dict(cls, data: dict) -> "NodeDefinition":
        if not isinstance(data, dict):
            raise NodeDefinitionError(f"Expected node definition to be a JSON object but found {type(data)}.")

        # Check keys
        missing = [name for name in cls._names if name not in data]
        if missing:
            raise NodeDefinitionError(f"Node definition is missing the field(s) {missing}.")
        for name in ("inputs", "outputs"):
            if not isinstance(data[name], dict):
                raise NodeDefinitionError(f"Expected node definition field '{name}' to be an object but found {type(data[name])}.")

        log_path = data.get("log_path")
        return cls(
            function_name=str(data["function_name"]),
            inputs={k: Path(v) for k, v in data["inputs"].items()},
            outputs={k: Path(v) for k, v in data["outputs"].items()},
            done_path=Path(data["done_path"]),
            log_path=Path(log_path) if log_path is not None else None,
        )

    @classmethod
    def load(cls, location) -> "NodeDefinition":
        """ Loads the node definition from a JSON file. """
        with open(location, "r") as f:
            data = json.load(f)
        node_definition = cls.from_dict(data)
        logger.debug("Loaded node definition for %s from %s.", node_definition.function_name, location)
        return node_definition

    def to_dict(self) -> dict:
        return {
            "function_name": self.function_name,
            "inputs": {k: str(v) for k, v in self.inputs.items()},
            "outputs": {k: str(v) for k, v in self.outputs.items()},
            "done_path": str(self.done_path),
            "log_path": str(self.log_path) if self.log_path is not None else None,
        }

    def input_path(self, name: str) -> Path:
        if name not in self.inputs:
            raise NodeDefinitionError(f"Function {self.function_name} needs the input '{name}', found {sorted(self.inputs)}.")
        return self.inputs[name]

    def output_path(self, name: str) -> Path:
        if name not in self.outputs:
            raise NodeDefinitionError(f"Function {self.function_name} needs the output '{name}', found {sorted(self.outputs)}.")
        return self.outputs[name]
