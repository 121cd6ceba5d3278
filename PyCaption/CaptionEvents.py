import logging
from blinker import Signal
from typing import Protocol


class LoggerProtocol(Protocol):
    """Protocol for objects that can be used as loggers"""
    def warning(self, msg : object, *args, **kwargs) -> None: ...
    def info(self, msg : object, *args, **kwargs) -> None: ...


class CaptionEvents:
    """
    Container for blinker signals emitted by a caption track or segmenter.

    Each track and segmenter owns its own instance, so subscribers only hear
    about the object they connected to.

    Signals:
        cue_changed(sender, cue, index):
            Emitted once each time the active cue changes. cue is None and index is -1 when no cue is active

        loaded(sender, cues):
            Emitted after a load completes successfully

        load_failed(sender, error):
            Emitted when a load fails; the error is also available from the track

        segment_changed(sender, index, text):
            Emitted when the displayed segment of a long caption changes

        warning(sender, message):
            Signals that a warning was encountered, e.g. captions could not be loaded

        info(sender, message):
            General informational message, e.g. how many captions were loaded
    """
    cue_changed: Signal
    loaded: Signal
    load_failed: Signal
    segment_changed: Signal
    warning: Signal
    info: Signal

    def __init__(self):
        self.cue_changed = Signal("caption-cue-changed")
        self.loaded = Signal("caption-loaded")
        self.load_failed = Signal("caption-load-failed")
        self.segment_changed = Signal("caption-segment-changed")

        # Signals for logging caption events
        self.warning = Signal("caption-warning")
        self.info = Signal("caption-info")

        # Wrapper functions to adapt signal kwargs to logger positional args
        self._default_warning_wrapper = lambda sender, message: logging.warning(message)
        self._default_info_wrapper = lambda sender, message: logging.info(message)

    def connect_default_loggers(self):
        """
        Connect default logging handlers to logging signals.
        """
        self.warning.connect(self._default_warning_wrapper, weak=False)
        self.info.connect(self._default_info_wrapper, weak=False)

    def disconnect_default_loggers(self):
        """
        Disconnect default logging handlers from the signals.
        """
        self.warning.disconnect(self._default_warning_wrapper)
        self.info.disconnect(self._default_info_wrapper)

    def connect_logger(self, logger : LoggerProtocol):
        """
        Connect a custom logger to the logging signals.

        Args:
            logger: A logger-like object with warning and info methods
        """
        def warning_wrapper(sender, message):
            logger.warning(message)

        def info_wrapper(sender, message):
            logger.info(message)

        # Use weak=False to prevent garbage collection of closures
        self.warning.connect(warning_wrapper, weak=False)
        self.info.connect(info_wrapper, weak=False)
