"""Streaming download and extraction of template archives."""

from __future__ import annotations

import io
import itertools
import logging
import tarfile
from pathlib import Path
from typing import Iterable, Iterator

import httpx

from .errors import TemplateDownloadError

__all__ = ["ChunkReader", "download_and_extract", "extract_archive"]

LOGGER = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
BARE_HINT = "If you would like to generate an empty project, re-run this command with --bare."


class ChunkReader(io.RawIOBase):
    """Expose an iterator of byte chunks as a readable, non-seekable stream."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks: Iterator[bytes] = iter(chunks)
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size


def extract_archive(chunks: Iterable[bytes], destination: str | Path) -> Path:
    """Extract a (possibly compressed) tar stream into ``destination``.

    The archive is consumed sequentially and never held in memory as a whole.
    :class:`tarfile.TarError` propagates to the caller.
    """

    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)
    reader = io.BufferedReader(ChunkReader(chunks), buffer_size=CHUNK_SIZE)
    with tarfile.open(fileobj=reader, mode="r|*") as archive:
        archive.extractall(destination, filter="data")
    return destination


def _first_chunk(chunks: Iterator[bytes]) -> bytes | None:
    for chunk in chunks:
        if chunk:
            return chunk
    return None


def download_and_extract(
    url: str,
    destination: str | Path,
    *,
    client: httpx.Client | None = None,
    timeout: float = 60.0,
) -> Path:
    """Stream the archive at ``url`` straight into :func:`extract_archive`.

    Raises :class:`TemplateDownloadError` when the server does not answer with
    a non-empty body.
    """

    owns_client = client is None
    http = client or httpx.Client(follow_redirects=True, timeout=timeout)
    LOGGER.info("Downloading template project from %s", url)
    try:
        with http.stream("GET", url) as response:
            if response.status_code != httpx.codes.OK:
                raise TemplateDownloadError(
                    f"Unable to download template project from {url} "
                    f"(HTTP {response.status_code}). Please try again.",
                    hint=BARE_HINT,
                )
            chunks = response.iter_bytes(chunk_size=CHUNK_SIZE)
            first = _first_chunk(chunks)
            if first is None:
                raise TemplateDownloadError(
                    f"Unable to download template project from {url}: empty response. Please try again.",
                    hint=BARE_HINT,
                )
            return extract_archive(itertools.chain([first], chunks), destination)
    except httpx.HTTPError as exc:
        raise TemplateDownloadError(
            f"Unable to download template project from {url}: {exc}. Please try again.",
            hint=BARE_HINT,
        ) from exc
    finally:
        if owns_client:
            http.close()
