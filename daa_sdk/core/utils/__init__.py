"""
Data types for binding resolution
"""
