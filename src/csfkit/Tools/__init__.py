"""csfkit tools - operations built on top of the format layer."""
