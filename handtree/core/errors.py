"""
HandTree Error Taxonomy.
Nothing in here is ever fatal to the host application: the worst outcome of
any of these is "no gesture input".
"""


class HandTreeError(Exception):
    """Base class for all gesture-core failures."""


class SourceUnavailable(HandTreeError):
    """The landmark source (camera) could not be acquired. Reported once, never retried."""


class DetectorUnavailable(HandTreeError):
    """The inference backend failed to initialize. Gesture control is off for the session."""


class TransientFrameFault(HandTreeError):
    """A single tick produced a malformed frame or failed to classify. Treated as hand-lost."""
