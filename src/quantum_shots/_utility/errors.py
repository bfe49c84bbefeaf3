"""
Exceptions raised while translating, simulating and running circuits.

Every error is fatal for the run it occurs in. They all derive from QuantumShotsError, and each one also derives from
the builtin exception that describes it best, so callers that only know about ValueError and friends still catch them.
"""


class QuantumShotsError(Exception):
    """ Base class of all errors raised by quantum_shots. """


class ParseError(QuantumShotsError, ValueError):
    """ A symbolic gate parameter could not be parsed or evaluated. """


class ArgumentError(QuantumShotsError, OverflowError):
    """ A command argument index does not fit the simulator's unsigned 32 bit index type. """


class UnsupportedOperationError(QuantumShotsError, NotImplementedError):
    """ The operation type (or node function) is outside of the supported vocabulary. """


class SimulationError(QuantumShotsError, RuntimeError):
    """ The statevector simulator could not apply a gate, measure or sample. """


class NodeDefinitionError(QuantumShotsError, ValueError):
    """ The node definition descriptor is missing a field or names an unknown input/output. """
