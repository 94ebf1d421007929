"""Workshop Payments — load, edit and export spreadsheet payment sheets."""

__version__ = "1.0.0"
