"""
Application-level routes: health check and page shells.
"""
