"""Multi-city trip routing: legs, transport modes, geometry and distances."""

__version__ = "0.1.0"
