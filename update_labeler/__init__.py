"""Weekly bot that relabels project-board issues by assignee activity."""

__version__ = "0.1.0"
