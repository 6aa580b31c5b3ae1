"""envscout - runtime tool-chain discovery for desktop applications."""

__version__ = "0.1.0"
