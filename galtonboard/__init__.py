"""Galton board simulation drawn onto an SSD1306-style monochrome framebuffer."""

__version__ = "0.1.0"
__all__ = ["__version__"]