"""PropJournal - trading journal with prop-firm evaluation analytics."""

__version__ = "0.1.0"
