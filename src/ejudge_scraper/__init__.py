"""Extract problems, submissions and standings from an ejudge contest."""

__version__ = "0.1.0"
