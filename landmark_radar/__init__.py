"""
Landmark Radar.

Turns a user's position and heading into a radial layout of lines pointing
at known landmarks, and reports which landmark the user is facing.
"""

__version__ = "0.1.0"
