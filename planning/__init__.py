"""
planning package marker.
"""
