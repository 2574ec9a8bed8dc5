"""
Dashcam GPS

Extracts the GPS telemetry that some dashcams hide between the audio samples
of their MOV recordings, and converts it to GPX.
"""

__version__ = "1.0.0"
