"""
sitio_tracker package marker.
"""
