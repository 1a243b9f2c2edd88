"""
Frogger scenes
"""
