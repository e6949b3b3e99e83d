"""SlotPoll: weekly and calendar availability polls with ranked tallies."""

__version__ = "1.0.0"
