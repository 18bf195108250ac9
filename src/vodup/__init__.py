"""Batch upload and publish videos to Volcengine VOD."""

__version__ = "0.1.0"
