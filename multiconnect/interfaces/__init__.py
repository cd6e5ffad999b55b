"""
multiconnect.interfaces - Front ends for playing games

Front ends render state and forward column choices to the GameEngine.
"""

# Don't import anything here to avoid circular imports
__all__ = []
