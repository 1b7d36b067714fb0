"""Able Player media plugin: accessible HTML5 audio/video embedding."""

__version__ = "0.1.0"
