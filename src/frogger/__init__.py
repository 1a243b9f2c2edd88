"""
Frogger: cross the lane, reach the goal, mind the traffic.
"""

__version__ = "0.1.0"
