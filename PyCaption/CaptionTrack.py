from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import httpx

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionError import CaptionError, CaptionLoadError
from PyCaption.CaptionEvents import CaptionEvents
from PyCaption.CaptionFormatRegistry import CaptionFormatRegistry
from PyCaption.CaptionSource import CaptionSource, ContentSource, CuesSource, UrlSource
from PyCaption.CaptionTimeline import CaptionTimeline
from PyCaption.Options import Options

ChangeCallback = Callable[[CaptionCue|None, int], None]
TimeProvider = Callable[[], float|None]

class CaptionTrack:
    """
    A loaded caption track that follows the playback position.

    Load a source, then feed playback times to UpdateTime. Observers are notified
    through events.cue_changed (and the optional on_change callback) exactly once
    each time the active cue changes, however often the time is updated.

    Load failures never raise: they are captured in the error attribute and
    announced through events.load_failed, leaving the track empty.
    """
    def __init__(self, options : Options|None = None, current_time : TimeProvider|None = None, on_change : ChangeCallback|None = None, client : httpx.AsyncClient|None = None):
        self.options : Options = options or Options()
        self.current_time : TimeProvider|None = current_time
        self.client : httpx.AsyncClient|None = client
        self.events = CaptionEvents()

        self.current_cue : CaptionCue|None = None
        self.current_index : int = -1
        self.loading : bool = False
        self.error : CaptionError|None = None

        self._timeline = CaptionTimeline()
        self._generation : int = 0

        if on_change:
            self._on_change_wrapper = lambda sender, cue, index: on_change(cue, index)
            self.events.cue_changed.connect(self._on_change_wrapper, weak=False)

    @property
    def cues(self) -> list[CaptionCue]:
        return self._timeline.cues

    @property
    def timeline(self) -> CaptionTimeline:
        return self._timeline

    async def Load(self, source : CaptionSource) -> list[CaptionCue]:
        """
        Replace the track with cues from the source and synchronise to the current time.

        If Load is called again before this call completes, the results of this
        call are discarded. Cancelling the call clears the loading flag and
        leaves the track empty.
        """
        self._generation += 1
        generation = self._generation
        self._reset()
        self.loading = True

        try:
            cues = await self._load_cues(source)

        except Exception as e:
            if generation != self._generation:
                return []

            error = e if isinstance(e, CaptionError) else CaptionLoadError(f"Failed to load captions: {e}", e)
            self.error = error
            self.loading = False
            self._emit_warning(f"Unable to load captions: {error}")
            self.events.load_failed.send(self, error=error)
            return []

        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logging.debug("Discarding captions from a superseded load")
            return []

        self._timeline = CaptionTimeline(cues)
        self._emit_info(f"Loaded {len(self._timeline)} captions")
        self.events.loaded.send(self, cues=self.cues)

        self._sync_to_current_time()
        return self.cues

    def SetCues(self, cues : Iterable[CaptionCue|Mapping[str, Any]]) -> None:
        """
        Replace the track with cues that are already in memory, cancelling any pending load
        """
        self._generation += 1
        self._reset()
        self._timeline = CaptionTimeline(_coerce_cues(cues))
        self.events.loaded.send(self, cues=self.cues)
        self._sync_to_current_time()

    def UpdateTime(self, time : float) -> CaptionCue|None:
        """
        Resolve the active cue for a playback time, notifying observers if it changed
        """
        index = self._timeline.FindIndexFrom(time, self.current_index)
        if index != self.current_index:
            self.current_index = index
            self.current_cue = self._timeline[index] if index >= 0 else None
            self.events.cue_changed.send(self, cue=self.current_cue, index=index)

        return self.current_cue

    def GetCueAtTime(self, time : float) -> CaptionCue|None:
        """ The cue active at a time, without changing the track state """
        index = self.GetIndexAtTime(time)
        return self._timeline[index] if index >= 0 else None

    def GetIndexAtTime(self, time : float) -> int:
        return self._timeline.FindIndexFrom(time, self.current_index)

    async def _load_cues(self, source : CaptionSource) -> list[CaptionCue]:
        if isinstance(source, CuesSource):
            return _coerce_cues(source.cues)

        if isinstance(source, ContentSource):
            return CaptionFormatRegistry.parse_string(source.content, source.format, preserve_styles=self.options.preserve_styles)

        if isinstance(source, UrlSource):
            caption_format = source.format or CaptionFormatRegistry.detect_format(source.url, default=self.options.default_format)
            content = await self._fetch(source.url)
            return CaptionFormatRegistry.parse_string(content, caption_format, preserve_styles=self.options.preserve_styles)

        raise CaptionError(f"Unsupported caption source: {type(source).__name__}")

    async def _fetch(self, url : str) -> str:
        logging.debug(f"Fetching captions from {url}")
        try:
            if self.client is not None:
                response = await self.client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self.options.fetch_timeout, follow_redirects=True) as client:
                    response = await client.get(url)

        except httpx.HTTPError as e:
            raise CaptionLoadError(f"Failed to load captions: {e}", e)

        if not response.is_success:
            raise CaptionLoadError(f"Failed to load captions: {response.status_code} {response.reason_phrase}",
                                   status=response.status_code, reason=response.reason_phrase)

        return response.text

    def _emit_warning(self, message : str) -> None:
        if self.events.warning.receivers:
            self.events.warning.send(self, message=message)
        else:
            logging.warning(message)

    def _emit_info(self, message : str) -> None:
        if self.events.info.receivers:
            self.events.info.send(self, message=message)
        else:
            logging.info(message)

    def _sync_to_current_time(self) -> None:
        if self.current_time is None:
            return

        time = self.current_time()
        if time is not None:
            self.UpdateTime(time)

    def _reset(self) -> None:
        self._timeline = CaptionTimeline()
        self.current_cue = None
        self.current_index = -1
        self.loading = False
        self.error = None

def _coerce_cues(cues : Iterable[CaptionCue|Mapping[str, Any]]) -> list[CaptionCue]:
    return [ cue if isinstance(cue, CaptionCue) else CaptionCue.from_dict(cue) for cue in cues ]
