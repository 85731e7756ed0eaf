"""Errors raised by the link classification engine and the graph model.

- ConfigurationError: malformed class tables or configuration values.
  Fatal, raised at construction time.
- GraphInconsistencyError: graph data that cannot be traversed (unknown
  node or edge ids, edges without geometry). The engine recovers from it
  locally and reports the affected way as having no connection.
"""


class ConfigurationError(ValueError):
    """Invalid road class table or check configuration."""


class GraphInconsistencyError(LookupError):
    """Graph data references something that does not exist or is malformed."""
