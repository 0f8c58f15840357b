"""Ports and application state shared by the store and the front end."""
