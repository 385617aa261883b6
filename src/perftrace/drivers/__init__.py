"""Page drivers."""

from perftrace.drivers.playwright import PlaywrightPageDriver, launch_page

__all__ = ["PlaywrightPageDriver", "launch_page"]
