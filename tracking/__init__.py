"""
Observer-relative tracking: look angles, ground/sky tracks and pass prediction.
"""

from .observer import Observer, Topocentric, topocentric, look_angles, topocentric_now
from .tracks import GroundTrackPoint, SkyTrackPoint, GroundTrack, SkyTrack, ground_track, sky_track
from .passes import PassSearchSettings, PassPoint, PassPeak, PassWindow, predict_passes, next_pass

__all__ = [
    'Observer', 'Topocentric', 'topocentric', 'look_angles', 'topocentric_now',
    'GroundTrackPoint', 'SkyTrackPoint', 'GroundTrack', 'SkyTrack', 'ground_track', 'sky_track',
    'PassSearchSettings', 'PassPoint', 'PassPeak', 'PassWindow', 'predict_passes', 'next_pass',
]
