"""Live voice chat plumbing: PCM codecs, playback scheduling, session loop.

The transport is abstract (:class:`VoiceConnection`). Messages follow the
Gemini Live shape: ``{"serverContent": {"modelTurn": {"parts": [{"inlineData":
{"data": <base64 pcm16>}}]}, "interrupted": bool}}``.
"""

from __future__ import annotations

import asyncio
import base64
import contextlib
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable, Iterable
from dataclasses import dataclass

import numpy as np

from .i18n import language_name

logger = logging.getLogger(__name__)

INPUT_SAMPLE_RATE = 16000
OUTPUT_SAMPLE_RATE = 24000

_SYSTEM_INSTRUCTION = """\
Tu es un chef expert anti-gaspillage. Tu aides les familles à cuisiner avec ce qu'elles ont.
Produits disponibles dans le frigo : {names}.
Réponds toujours en langue : {language}. Sois bref et chaleureux.
"""


def build_system_instruction(item_names: Iterable[str], language: str) -> str:
    names = ", ".join(item_names) or "aucun"
    return _SYSTEM_INSTRUCTION.format(names=names, language=language_name(language))


def encode_pcm16(samples) -> str:
    """Float samples in [-1, 1] → base64 little-endian 16-bit PCM."""
    arr = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0)
    pcm = (arr * 32767.0).astype("<i2")
    return base64.b64encode(pcm.tobytes()).decode()


def decode_pcm16(data: str) -> np.ndarray:
    """Base64 little-endian 16-bit PCM → float32 samples in [-1, 1)."""
    pcm = np.frombuffer(base64.b64decode(data), dtype="<i2")
    return pcm.astype(np.float32) / 32768.0


@dataclass
class ScheduledChunk:
    samples: np.ndarray
    start: float
    duration: float

    @property
    def end(self) -> float:
        return self.start + self.duration


class PlaybackQueue:
    """Schedules output audio chunks back to back on a playback clock."""

    def __init__(self, sample_rate: int = OUTPUT_SAMPLE_RATE) -> None:
        self._sample_rate = sample_rate
        self.next_start_time = 0.0
        self._active: list[ScheduledChunk] = []

    @property
    def speaking(self) -> bool:
        return bool(self._active)

    @property
    def pending(self) -> list[ScheduledChunk]:
        return list(self._active)

    def schedule(self, samples: np.ndarray, now: float) -> ScheduledChunk:
        start = max(self.next_start_time, now)
        chunk = ScheduledChunk(
            samples=samples,
            start=start,
            duration=len(samples) / self._sample_rate,
        )
        self._active.append(chunk)
        self.next_start_time = chunk.end
        return chunk

    def release_finished(self, now: float) -> list[ScheduledChunk]:
        done = [c for c in self._active if c.end <= now]
        self._active = [c for c in self._active if c.end > now]
        return done

    def interrupt(self) -> list[ScheduledChunk]:
        """Drop everything queued and restart scheduling from zero."""
        discarded = self._active
        self._active = []
        self.next_start_time = 0.0
        return discarded


class VoiceConnection(ABC):
    """Bidirectional audio stream to the live model."""

    @abstractmethod
    async def send_audio(self, pcm_base64: str) -> None:
        ...

    @abstractmethod
    def receive(self) -> AsyncIterator[dict]:
        ...


def _model_audio(content: dict) -> str | None:
    turn = content.get("modelTurn") or {}
    parts = turn.get("parts") or []
    if not parts or not isinstance(parts[0], dict):
        return None
    inline = parts[0].get("inlineData") or {}
    data = inline.get("data")
    return data if isinstance(data, str) and data else None


class VoiceSession:
    """Voice chat grounded in the current inventory."""

    def __init__(
        self,
        item_names: Iterable[str],
        language: str,
        queue: PlaybackQueue | None = None,
        on_interrupt: Callable[[list[ScheduledChunk]], None] | None = None,
    ) -> None:
        self.system_instruction = build_system_instruction(item_names, language)
        self.queue = queue or PlaybackQueue()
        self._on_interrupt = on_interrupt

    def handle_message(self, message: dict, now: float) -> ScheduledChunk | None:
        content = message.get("serverContent") if isinstance(message, dict) else None
        if not isinstance(content, dict):
            return None

        chunk = None
        audio = _model_audio(content)
        if audio:
            chunk = self.queue.schedule(decode_pcm16(audio), now)

        if content.get("interrupted"):
            discarded = self.queue.interrupt()
            logger.debug("Model interrupted, %d chunks dropped", len(discarded))
            if self._on_interrupt is not None:
                self._on_interrupt(discarded)
            return None
        return chunk

    async def run(
        self,
        connection: VoiceConnection,
        microphone: AsyncIterator,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Stream microphone audio out and model audio in until either ends."""
        sender = asyncio.create_task(self._pump_microphone(connection, microphone))
        try:
            async for message in connection.receive():
                self.queue.release_finished(clock())
                self.handle_message(message, clock())
        finally:
            sender.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sender
            self.queue.interrupt()

    async def _pump_microphone(
        self, connection: VoiceConnection, microphone: AsyncIterator
    ) -> None:
        async for samples in microphone:
            await connection.send_audio(encode_pcm16(samples))
