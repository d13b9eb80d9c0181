"""
PalCreator services: color pipeline stages and observability.
"""
