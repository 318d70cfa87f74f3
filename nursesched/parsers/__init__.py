"""Command family parsers."""

from . import appointment, medicine, patient, shift, task

__all__ = ["appointment", "medicine", "patient", "shift", "task"]
