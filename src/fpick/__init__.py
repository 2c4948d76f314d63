"""fpick - pick, read and create files from a numbered text menu"""

__version__ = "0.1.0"
