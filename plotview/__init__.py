"""Plotting into in-memory image buffers: figures, series, views, colours, progress and tables."""

__version__ = "0.1.0"