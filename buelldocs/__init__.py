"""BuellDocs - pay stub and bank statement figures."""

__version__ = "0.3.0"
