"""
Shared PalCreator utilities.
"""
