"""Configuration for similarity searches."""

from dataclasses import dataclass

DEFAULT_SIMILARITY_THRESHOLD = 0.8
DEFAULT_MAX_RESULTS = 100
DEFAULT_BATCH_SIZE = 1000


def check_threshold(threshold: float) -> float:
    """Return the threshold if it lies in [0, 1], else raise ValueError."""
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(
            f"Similarity threshold must be between 0.0 and 1.0, got {threshold}"
        )
    return float(threshold)


@dataclass
class SimilaritySearchConfig:
    """Settings for a similarity scan.

    Every field is validated on construction and on assignment through the
    ``with_*`` setters.
    """

    threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    max_results: int = DEFAULT_MAX_RESULTS
    batch_size: int = DEFAULT_BATCH_SIZE
    show_progress: bool = False

    def __post_init__(self):
        """Validate initial values."""
        self.with_similarity_threshold(self.threshold)
        self.with_max_results(self.max_results)
        self.with_batch_size(self.batch_size)

    def with_similarity_threshold(self, threshold: float) -> "SimilaritySearchConfig":
        self.threshold = check_threshold(threshold)
        return self

    def with_max_results(self, max_results: int) -> "SimilaritySearchConfig":
        if max_results <= 0:
            raise ValueError(f"Max results must be greater than 0, got {max_results}")
        self.max_results = max_results
        return self

    def with_batch_size(self, batch_size: int) -> "SimilaritySearchConfig":
        if batch_size <= 0:
            raise ValueError(f"Batch size must be greater than 0, got {batch_size}")
        self.batch_size = batch_size
        return self
