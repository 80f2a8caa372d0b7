"""
Request middleware: cookie session helpers and page route protection.
"""
