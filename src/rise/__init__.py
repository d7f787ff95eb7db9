"""rise: progression and wake-scoring engine for a gamified alarm clock."""

__version__ = "0.1.0"
