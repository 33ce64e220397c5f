"""Pytest configuration and shared fixtures for paramfit tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Small objectives with known minima used across the line-search tests
"""

import os

import numpy as np
import pytest
import torch


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator(device="cpu")
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the global numpy and torch generators before every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


def shifted_quadratic(x: np.ndarray) -> float:
    """``sum((x - [3, -1, 2, ...][:n])**2)`` with a unique minimum."""
    centre = np.array([3.0, -1.0, 2.0, 0.5])[: x.size]
    return float(np.sum((x - centre) ** 2))


def shifted_quadratic_grad(x: np.ndarray) -> np.ndarray:
    centre = np.array([3.0, -1.0, 2.0, 0.5])[: x.size]
    return 2.0 * (x - centre)


@pytest.fixture
def quadratic_fns():
    return shifted_quadratic, shifted_quadratic_grad
