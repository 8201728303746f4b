"""HTTP API module for unitlens.

Serves systemd unit status, the unit summary, and journal text over
HTTP with FastAPI.
"""
