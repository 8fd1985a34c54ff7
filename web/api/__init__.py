"""API views - thin layer over app services."""
