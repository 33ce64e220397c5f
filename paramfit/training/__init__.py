"""Trainer facade over the line-search primitives."""

from .trainer import ModelTrainer

__all__ = ["ModelTrainer"]
