"""Socket tools: TCP echo clients and servers, pipe exchange, console waiting, UDP broadcast and multicast."""

__version__ = "0.1.0"