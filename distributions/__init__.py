"""
Distributions package — sample annual return paths for the Monte Carlo risk view.
"""

from .sampler import ReturnParams, ReturnSampler, SampledReturns, make_rng

__all__ = [
    "ReturnParams",
    "ReturnSampler",
    "SampledReturns",
    "make_rng",
]
