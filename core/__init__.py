"""Infrastructure shared by the calculator surfaces.

Holds the durable key-value storage the app and the CLI persist inputs
to.  It has ZERO dependency on the calculation packages or any UI
framework.
"""

__version__ = "0.1.0"
