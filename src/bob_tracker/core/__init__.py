"""Core contracts: error taxonomy, gateway ports and per-session state."""
