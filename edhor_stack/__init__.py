"""create-edhor-stack: interactive monorepo starter generator."""

__version__ = "0.3.0"
