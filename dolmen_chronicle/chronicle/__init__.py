"""
Chronicle building blocks shared by delves and encounters: change
notification, the event log, and IID sequences.
"""

from dolmen_chronicle.chronicle.observable import Observable, ChangeCallback
from dolmen_chronicle.chronicle.iid_sequence import IidGenerator
from dolmen_chronicle.chronicle.event_log import EventLog, EventLogEntry

__all__ = [
    "Observable",
    "ChangeCallback",
    "IidGenerator",
    "EventLog",
    "EventLogEntry",
]
