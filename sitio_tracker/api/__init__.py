"""
sitio_tracker/api package marker.
"""
