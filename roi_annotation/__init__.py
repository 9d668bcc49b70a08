"""Annotate regions of interest on camera feeds in native pixel space."""
