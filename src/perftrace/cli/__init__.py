"""perftrace command line interface."""
