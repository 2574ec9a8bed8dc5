"""
Dashcam GPS Scripts Package

This package contains command-line scripts for converting dashcam recordings.

Available scripts:
- sggps: Convert MOV recordings to GPX tracks
- dump_gps_logs: Dump raw GPS record fields to CSV
"""

__version__ = "1.0.0"
__all__ = ["sggps", "dump_gps_logs"]
