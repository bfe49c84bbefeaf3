from ._simulation.results import (
    BackendResult,
    OutcomeArray,
    Count,
    convert_shot,
    convert_shots,
    convert_sample,
    convert_samples,
)
