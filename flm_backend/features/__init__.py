"""
Backend features.
"""
