"""shipgui - package built GUI application trees for distribution.

The core of the package is the prune engine, which reduces a built
application directory to the files the shipped runtime needs.
"""

__version__ = "0.1.0"
