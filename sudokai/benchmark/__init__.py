"""Benchmark module for puzzle generation and AI play-throughs."""

from .benchmark import Benchmark, BenchmarkResult

__all__ = ["Benchmark", "BenchmarkResult"]
