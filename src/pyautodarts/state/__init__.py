"""State/store layer.

Holds the published state tree: the object definitions the adapter
registers at startup and the last-known value of every state.
"""
