"""
sitio_tracker/schemas package marker.
"""
