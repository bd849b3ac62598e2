"""Data input/output helpers (CSV logs, segment exports and file paths).

Utility modules here keep disk-level concerns isolated from the algorithm:
- :mod:`log_loader` parses CSV recordings for offline segmentation.
- :mod:`csv_writer` writes each detected segment to its own file.
- :mod:`file_paths` builds sanitized output directories.
"""
