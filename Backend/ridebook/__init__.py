"""Ride booking intake service: phone lookup, booking validation and confirmation."""
