"""Root pytest configuration (kept intentionally minimal).

The application package resides in the nested `receipt_points/` directory.
Because the pytest rootdir is the backend directory, Python can already
discover the package without path manipulation.
"""

# Intentionally no path mangling here.
