"""deployfs - deployment filesystem manager.

Cleans generated directories, regenerates static content through the
application CLI, and locks permissions on the generated output.
"""

__version__ = "0.1.0"
