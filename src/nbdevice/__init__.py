"""
nbdevice - NetBox device resource adapter.

Maps a declarative device configuration onto NetBox CRUD calls and
reconciles the observed NetBox state back into the declared model.
"""

__version__ = "0.1.0"
