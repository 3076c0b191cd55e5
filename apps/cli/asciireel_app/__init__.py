"""Command line app for ASCII video encoding and playback."""
