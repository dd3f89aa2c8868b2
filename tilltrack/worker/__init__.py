"""
Background workers for TillTrack.
"""
