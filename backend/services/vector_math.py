"""Cosine similarity and normalization helpers shared by both clustering engines.

A zero vector has similarity 0 with everything (never NaN).
"""

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine


def cosine_similarity(a, b) -> float:
    """Cosine similarity between two equal-length vectors."""
    v1 = np.asarray(a, dtype=float)
    v2 = np.asarray(b, dtype=float)

    norm = np.linalg.norm(v1) * np.linalg.norm(v2)
    if norm == 0:
        return 0.0
    return float(np.dot(v1, v2) / norm)


def cosine_similarity_matrix(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Pairwise cosine similarity, shape (len(a), len(b)). Zero rows score 0."""
    return sklearn_cosine(np.atleast_2d(a), np.atleast_2d(b))


def l2_normalize(vector: np.ndarray) -> np.ndarray:
    """Divide by the Euclidean norm; a zero vector is returned unchanged."""
    norm = np.linalg.norm(vector)
    if norm == 0:
        return vector
    return vector / norm
