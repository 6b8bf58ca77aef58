"""
Error taxonomy for the key detection pipeline.

Configuration and caller errors are raised immediately and never retried.
``InsufficientSamplesError`` signals broken buffer bookkeeping inside the
pipeline and is deliberately an ``AssertionError``.
"""


class KeyFinderError(Exception):
    """Base class for all keyfinder errors."""


class ConfigurationError(KeyFinderError, ValueError):
    """Parameters cannot be applied to the audio (e.g. decimation factor of 0)."""


class ChannelMismatchError(KeyFinderError, ValueError):
    """Audio with a different channel count was joined to a buffer."""


class FrameRateMismatchError(KeyFinderError, ValueError):
    """Audio with a different frame rate was joined to a buffer."""


class AudioFormatError(KeyFinderError, ValueError):
    """Sample layout does not agree with the channel count."""


class InvalidFactorError(KeyFinderError, ValueError):
    """Downsampling factor of zero."""


class InsufficientSamplesError(KeyFinderError, AssertionError):
    """A buffer was sliced or discarded past its end."""


class FftSizeMismatchError(KeyFinderError, RuntimeError):
    """The workspace FFT adapter was requested at a different frame size."""
