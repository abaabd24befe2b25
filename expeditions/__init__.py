"""
Expeditions API.

Tracks wallet engagement for the rewards program (daily visits and weekly
liquidity activity) and converts it into fragments.
"""

__version__ = "0.1.0"
