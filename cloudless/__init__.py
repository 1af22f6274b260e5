"""Building blocks for serverless data processing: storage, I/O, processing pieces, sync helpers and routing."""

__version__ = "0.1.0"