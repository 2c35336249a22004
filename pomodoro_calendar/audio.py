import logging
import threading
import math
import struct

from .config import (
    LOGGER_NAME,
    WORK_END_NOTES_HZ,
    BREAK_END_NOTES_HZ,
    CHIME_NOTE_MS,
    CHIME_VOLUME,
    SAMPLE_RATE,
)


def _wrap_wav_header(pcm_data: bytes, sample_rate: int) -> bytes:
    data_size = len(pcm_data)
    riff_size = 36 + data_size
    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        riff_size,
        b"WAVE",
        b"fmt ",
        16,
        1,
        1,
        sample_rate,
        sample_rate * 2,
        2,
        16,
        b"data",
        data_size,
    )
    return header + pcm_data


def generate_chime_wav_bytes(
    notes_hz: tuple[float, ...],
    note_ms: int = CHIME_NOTE_MS,
    volume: float = CHIME_VOLUME,
    sample_rate: int = SAMPLE_RATE,
) -> bytes:
    volume = max(0.0, min(1.0, float(volume)))
    n_samples = max(1, int(sample_rate * note_ms / 1000.0))
    max_amp = int(32767 * volume)

    frames = bytearray()
    for freq in notes_hz:
        for i in range(n_samples):
            t = i / sample_rate
            envelope = 1.0 - (i / n_samples)
            sample_val = int(max_amp * envelope * math.sin(2.0 * math.pi * freq * t))
            frames += struct.pack("<h", sample_val)

    return _wrap_wav_header(bytes(frames), sample_rate)


def _play_wav_bytes(wav_data: bytes) -> None:
    import winsound

    winsound.PlaySound(wav_data, winsound.SND_MEMORY)


class SoundPlayer:
    """Fire-and-forget session chimes.

    Each cue is rendered and played on a daemon thread. Failures (including
    platforms without ``winsound``) are logged and swallowed so the timer
    never sees them.
    """

    def __init__(self, logger: logging.Logger | None = None, play=_play_wav_bytes):
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._play = play
        self._cache: dict[tuple[float, ...], bytes] = {}
        self._lock = threading.Lock()

    def play_work_end_sound(self) -> None:
        self._trigger("work_end", WORK_END_NOTES_HZ)

    def play_break_end_sound(self) -> None:
        self._trigger("break_end", BREAK_END_NOTES_HZ)

    def _wav_for(self, notes: tuple[float, ...]) -> bytes:
        with self._lock:
            wav = self._cache.get(notes)
            if wav is None:
                wav = generate_chime_wav_bytes(notes)
                self._cache[notes] = wav
            return wav

    def _run(self, name: str, notes: tuple[float, ...]) -> None:
        try:
            self._play(self._wav_for(notes))
        except Exception:
            self._logger.exception(f"Sound playback failed cue={name}")

    def _trigger(self, name: str, notes: tuple[float, ...]) -> None:
        try:
            threading.Thread(target=self._run, args=(name, notes), daemon=True).start()
        except Exception:
            self._logger.exception(f"Sound thread failed to start cue={name}")
