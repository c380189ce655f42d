"""
Sequence record type shared by all readers and writers.
"""

import numpy as np
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

from seqstream.sequence.quality import QualityEncoding, phred_to_quality


@dataclass
class SeqRecord:
    """
    Represents a single sequence with optional per-base quality.

    Attributes:
        id: Sequence identifier
        sequence: The nucleotide/protein letters
        quality: Phred scores, one per letter, or None when absent
        description: Optional description after the ID
        encoding: Preferred quality encoding when the record is written
    """
    id: str
    sequence: str = ""
    quality: Optional[np.ndarray] = None
    description: str = ""
    encoding: Optional[QualityEncoding] = field(default=None, compare=False)

    def __post_init__(self):
        if self.quality is not None:
            self.quality = np.asarray(self.quality, dtype=np.int32)
            if len(self.quality) != len(self.sequence):
                raise ValueError(
                    f"Quality length {len(self.quality)} does not match "
                    f"sequence length {len(self.sequence)}"
                )

    def __len__(self) -> int:
        return len(self.sequence)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SeqRecord):
            return NotImplemented
        if (self.id, self.sequence, self.description) != (
            other.id, other.sequence, other.description
        ):
            return False
        if self.quality is None or other.quality is None:
            return self.quality is None and other.quality is None
        return bool(np.array_equal(self.quality, other.quality))

    @property
    def has_quality(self) -> bool:
        return self.quality is not None

    @property
    def header(self) -> str:
        """Header text: the ID, followed by the description if there is one."""
        if self.description:
            return f"{self.id} {self.description}"
        return self.id

    def clone(self) -> "SeqRecord":
        """Return an independent copy that can be mutated freely."""
        quality = None if self.quality is None else self.quality.copy()
        return replace(self, quality=quality)

    def append(self, letters: str, qualities: Optional[Sequence[int]] = None) -> None:
        """
        Append letters, and optionally their quality scores, to the record.

        A record that carries quality must receive exactly one score per
        appended letter; a record without quality must receive none.
        """
        if qualities is None:
            if self.quality is not None and letters:
                raise ValueError("Record has quality scores; qualities required")
            self.sequence += letters
            return

        qualities = np.asarray(qualities, dtype=np.int32)
        if len(qualities) != len(letters):
            raise ValueError(
                f"Got {len(qualities)} qualities for {len(letters)} letters"
            )
        if self.quality is None:
            if self.sequence:
                raise ValueError("Record has no quality scores to extend")
            self.quality = qualities
        else:
            self.quality = np.concatenate([self.quality, qualities])
        self.sequence += letters

    def quality_string(self, encoding: Optional[QualityEncoding] = None) -> str:
        """
        Encode quality scores as text.

        Uses the given encoding, falling back to the record's own preference
        and then Sanger. Records without quality encode every position as
        Phred 0.
        """
        if encoding is None:
            encoding = self.encoding or QualityEncoding.SANGER
        scores = self.quality
        if scores is None:
            scores = np.zeros(len(self.sequence), dtype=np.int32)
        return phred_to_quality(scores, encoding)

    def mean_quality(self) -> float:
        """Calculate mean quality score."""
        if self.quality is None or len(self.quality) == 0:
            return 0.0
        return float(np.mean(self.quality))

    def error_probabilities(self) -> np.ndarray:
        """
        Convert quality scores to error probabilities.

        P(error) = 10^(-Q/10)

        Returns:
            numpy array of error probabilities
        """
        if self.quality is None:
            raise ValueError(f"Record {self.id} has no quality scores")
        return np.power(10.0, -self.quality / 10)

    def trim_quality(
        self,
        min_quality: int = 20,
        window_size: int = 4
    ) -> "SeqRecord":
        """
        Trim low-quality bases from the 3' end.

        Uses a sliding window approach to find where quality drops.

        Args:
            min_quality: Minimum average quality in window
            window_size: Size of sliding window

        Returns:
            New SeqRecord with trimmed sequence
        """
        if self.quality is None:
            raise ValueError(f"Record {self.id} has no quality scores")
        scores = self.quality

        # Find trim position
        trim_pos = len(scores)
        for i in range(len(scores) - window_size, -1, -1):
            window_mean = np.mean(scores[i:i + window_size])
            if window_mean >= min_quality:
                trim_pos = i + window_size
                break
            trim_pos = i

        return SeqRecord(
            id=self.id,
            sequence=self.sequence[:trim_pos],
            quality=scores[:trim_pos].copy(),
            description=self.description,
            encoding=self.encoding,
        )
