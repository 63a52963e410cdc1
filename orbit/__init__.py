"""
Two-body orbit propagation from TLE mean elements.
"""

from .kepler import (
    AnomalyResult,
    SingularityError,
    solve_kepler,
    eccentric_anomaly,
    true_anomaly,
    semimajor_axis_from_mean_motion,
    mean_motion_from_semimajor_axis,
)
from .propagator import KeplerianOrbit, Position, propagate

__all__ = [
    'AnomalyResult', 'SingularityError',
    'solve_kepler', 'eccentric_anomaly', 'true_anomaly',
    'semimajor_axis_from_mean_motion', 'mean_motion_from_semimajor_axis',
    'KeplerianOrbit', 'Position', 'propagate',
]
