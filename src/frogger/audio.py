"""
Audio playback tracking.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable, Protocol

import pygame

from frogger.utils import logger


class AudioBackend(Protocol):
    def play(self, sound: Any, loop: bool, on_complete: Callable[[], None]) -> Any:
        ...

    def stop(self, handle: Any) -> None:
        ...

    def suspend(self) -> None:
        ...

    def resume(self) -> None:
        ...

    def poll(self) -> None:
        ...


@dataclass
class PlaylistEntry:
    id: int
    key: str
    handle: Any


class AudioTracker:
    """
    Keeps the playlist of sounds currently playing.

    Entries leave the playlist when the backend reports the sound finished,
    or when they are stopped by key.
    """

    def __init__(self, backend: AudioBackend):
        self.backend = backend
        self.playlist: list[PlaylistEntry] = []
        self._ids = itertools.count()

    def play(self, key: str, sound: Any, loop: bool = False) -> PlaylistEntry | None:
        """
        Start playing `sound` and track it under `key`.

        :param key: Sound name
        :type key: str

        :param sound: Loaded sound, or None for a silent slot
        :type sound: Any

        :param loop: Repeat until stopped
        :type loop: bool

        :return: The playlist entry, None when nothing was played
        :rtype: PlaylistEntry | None
        """
        if sound is None:
            logger.warning(f"No sound loaded for '{key}', skipping playback")
            return None

        entry_id = next(self._ids)
        entry = PlaylistEntry(id=entry_id, key=key, handle=None)
        # appended first: the backend may report completion straight away
        self.playlist.append(entry)
        entry.handle = self.backend.play(sound, loop, lambda: self._remove(entry_id))
        logger.debug(f"Playing '{key}' ({entry_id})")
        return entry

    def _remove(self, entry_id: int) -> None:
        self.playlist = [entry for entry in self.playlist if entry.id != entry_id]

    def stop_by_key(self, key: str) -> None:
        keep = []
        for entry in self.playlist:
            if entry.key == key:
                self.backend.stop(entry.handle)
            else:
                keep.append(entry)
        self.playlist = keep

    def stop_all(self) -> None:
        for key in {entry.key for entry in self.playlist}:
            self.stop_by_key(key)

    def suspend(self) -> None:
        self.backend.suspend()

    def resume(self) -> None:
        self.backend.resume()

    def update(self) -> None:
        self.backend.poll()


@dataclass
class _Channel:
    channel: Any
    sound: Any
    on_complete: Callable[[], None]


class PygameAudioBackend:
    """
    pygame.mixer playback. Completion is detected by polling the channel.

    While suspended, sounds started later are paused as soon as they get a
    channel, so nothing is heard until `resume()`.
    """

    def __init__(self):
        self._active: dict[int, _Channel] = {}
        self._ids = itertools.count()
        self.suspended = False
        self.enabled = pygame.mixer.get_init() is not None
        if not self.enabled:
            logger.warning("Mixer not initialised, sounds are disabled")

    def play(self, sound: Any, loop: bool, on_complete: Callable[[], None]) -> Any:
        if not self.enabled:
            on_complete()
            return None

        channel = sound.play(loops=-1 if loop else 0)
        if channel is None:
            logger.warning("No free mixer channel, dropping sound")
            on_complete()
            return None
        if self.suspended:
            channel.pause()

        handle = next(self._ids)
        self._active[handle] = _Channel(channel, sound, on_complete)
        return handle

    def stop(self, handle: Any) -> None:
        active = self._active.pop(handle, None)
        if active is not None:
            active.channel.stop()

    def suspend(self) -> None:
        self.suspended = True
        if self.enabled:
            pygame.mixer.pause()

    def resume(self) -> None:
        self.suspended = False
        if self.enabled:
            pygame.mixer.unpause()

    def poll(self) -> None:
        for handle, active in list(self._active.items()):
            # the channel may have been taken over by a newer sound
            if not active.channel.get_busy() or active.channel.get_sound() is not active.sound:
                del self._active[handle]
                active.on_complete()
