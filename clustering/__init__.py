"""Fixed-radius point clusterers, distance helpers and quality metrics."""
