"""MIDI transport: protocols and the mido implementation."""

from .backend import MidoBackend
from .ports import MidoInputPort, MidoOutputPort
from .protocols import ControlChangeHandler, MidiBackend, MidiInput, MidiOutput, NoteHandler

__all__ = [
    "ControlChangeHandler",
    "MidiBackend",
    "MidiInput",
    "MidiOutput",
    "MidoBackend",
    "MidoInputPort",
    "MidoOutputPort",
    "NoteHandler",
]
