"""
PalCreator Colors Module

Pixel sampling, clustering, color space conversion, HSV sorting, alpha
compositing, colorblind substitution and swatch rendering.
"""
