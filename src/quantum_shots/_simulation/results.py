"""
Packing of raw measurement outcomes into the byte format of backend results.

A shot is stored as a list of bytes. Logical bit 0 of the classical register is the most significant bit of the first
byte, bit 8 the most significant bit of the second byte, and so on. Bits beyond the register width are zero, so every
shot of a record of width w has exactly ceil(w / 8) bytes.

Example:
    .. code:: python

        convert_shot([1, 1, 0, 0, 0, 0, 0, 0])  # Gives [192]
        convert_shot([0, 0, 0, 0, 0, 0, 0, 1, 1])  # Gives [1, 128]
        convert_sample(2, 512)  # Gives [0, 64]
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import List

import numpy as np

from .._circuit.serial import UnitID


@dataclass(frozen=True)
class OutcomeArray(object):
    """ Packed shots of a classical register of the given width. """
    width: int
    array: List[List[int]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"width": self.width, "array": [list(shot) for shot in self.array]}

    @classmethod
    def from_dict(cls, data: dict) -> "OutcomeArray":
        return cls(width=int(data["width"]), array=[[int(b) for b in shot] for shot in data["array"]])

    def to_bits(self) -> List[List[int]]:
        """ Unpacks the shots into lists of width bits each, logical bit 0 first. """
        return [
            [int(b) for b in np.unpackbits(np.array(shot, dtype=np.uint8), bitorder="big")[:self.width]]
            for shot in self.array
        ]


@dataclass(frozen=True)
class Count(object):
    """ How often one outcome occurred. """
    outcome: OutcomeArray
    count: int

    def to_dict(self) -> dict:
        return {"outcome": self.outcome.to_dict(), "count": self.count}


@dataclass(frozen=True)
class BackendResult(object):
    """Result of simulating one circuit.

    Attributes:
        qubits (list[UnitID]): Qubits of the circuit, unchanged.
        bits (list[UnitID]): Classical bits of the circuit, unchanged. Bit i belongs to packed bit position i.
        shots (OutcomeArray): One packed outcome per shot, in shot order.
    """
    qubits: List[UnitID]
    bits: List[UnitID]
    shots: OutcomeArray

    def counts(self) -> List[Count]:
        """ Aggregates the shots into counts, ordered by first occurrence. """
        counter = Counter(tuple(shot) for shot in self.shots.array)
        return [
            Count(outcome=OutcomeArray(width=self.shots.width, array=[list(shot)]), count=n)
            for shot, n in counter.items()
        ]

    def to_dict(self) -> dict:
        return {
            "qubits": [q.to_list() for q in self.qubits],
            "bits": [b.to_list() for b in self.bits],
            "shots": self.shots.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BackendResult":
        return cls(
            qubits=[UnitID.from_list(q) for q in data["qubits"]],
            bits=[UnitID.from_list(b) for b in data["bits"]],
            shots=OutcomeArray.from_dict(data["shots"]),
        )


def _n_bytes(width: int) -> int:
    div, rem = divmod(width, 8)
    return div + (1 if rem > 0 else 0)


def convert_shot(shot) -> List[int]:
    """Packs the classical register of one shot.

    Args:
        shot (list[int]): One word per classical bit, only the least significant bit of each word is used.

    Returns:
        The bits packed most significant bit first into ceil(len(shot) / 8) bytes.
    """
    bits = np.asarray(shot, dtype=np.uint64) & np.uint64(1)
    return np.packbits(bits.astype(np.uint8), bitorder="big").tolist()


def convert_shots(shots) -> OutcomeArray:
    """ Packs the registers of all shots. The width is taken from the first shot, all shots have the same width. """
    width = len(shots[0]) if len(shots) > 0 else 0
    return OutcomeArray(width=width, array=[convert_shot(shot) for shot in shots])


def convert_sample(trunc: int, sample: int) -> List[int]:
    """Packs a sampled basis state index.

    Bit k of the sample (least significant first) becomes bit position k of the packed output. The packed bytes are
    truncated to trunc bytes, so the high bits of the sample are dropped.

    Args:
        trunc (int): Number of bytes to keep.
        sample (int): Sampled basis state index, qubit k is bit k.
    """
    n_bits = max(64, 8 * trunc)
    bits = np.array([(int(sample) >> k) & 1 for k in range(n_bits)], dtype=np.uint8)
    return np.packbits(bits, bitorder="big")[:trunc].tolist()


def convert_samples(width: int, samples) -> OutcomeArray:
    """Packs the samples of a bulk sampling run into a record of the given width.

    Sample bits at positions width and above are cleared so that the padding of the last byte stays zero.
    """
    trunc = _n_bytes(width)
    mask = (1 << width) - 1
    return OutcomeArray(width=width, array=[convert_sample(trunc, int(s) & mask) for s in samples])
