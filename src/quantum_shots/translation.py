""" Translation of pytket commands into simulator gates, including the evaluation of symbolic parameters. """

from ._translation.evaluator import Evaluator
from ._translation.translator import GateTranslator, convert_circuit, get_arg, zz_phase_diagonal
