"""Data input/output helpers (CSV activity logs and file paths).

Utility modules here keep disk-level concerns isolated from the rest of the
application:
- :mod:`csv_writer` serializes activity records and saves a session's CSV.
- :mod:`log_loader` parses saved CSV files back into records.
- :mod:`file_paths` builds output file names and resolves the output folder.
"""
