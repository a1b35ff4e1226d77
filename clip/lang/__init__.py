"""Tooling around the pipeline: error reporting, sessions and the interactive shell."""
