"""Desktop activity tracker: samples mouse and keyboard state into CSV files."""

__version__ = "0.1.0"
