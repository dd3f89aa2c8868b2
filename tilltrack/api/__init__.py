"""
HTTP API for TillTrack.
"""
