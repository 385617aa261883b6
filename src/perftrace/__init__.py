"""perftrace - browser performance trace recording for AI agents."""

__version__ = "0.1.0"
