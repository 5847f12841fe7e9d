"""Asset manager proxy.

Exposes plugin-provided asset managers to remote callers through a small,
stateful RPC service: instances are created on request and addressed by
opaque handles until they are destroyed.
"""

__version__ = "0.1.0"
