"""Load interface descriptions from a URL, local file, or stdin.

This module handles all input I/O for the generator. It returns the raw
document text unchanged; decoding the JSON and checking its shape is the job
of :func:`~sumi.pipeline.generate`, so that the generation core stays pure
and can be called with text from any source.

The single public function is :func:`load_interface`.
"""

from __future__ import annotations

import sys
from pathlib import Path

import httpx

from sumi.exceptions import InterfaceLoadError


def load_interface(source: str) -> str:
    """Load an interface description from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The complete document text.

    Raises:
        InterfaceLoadError: If the source cannot be read or is empty.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> str:
    """Read the whole of stdin.

    Raises:
        InterfaceLoadError: If stdin cannot be read or is empty.
    """
    try:
        content = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise InterfaceLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise InterfaceLoadError("No input received from stdin")
    return content


def _load_from_url(url: str) -> str:
    """Fetch an interface description over HTTP(S).

    Block explorers and artifact servers commonly serve ABIs directly, so
    redirects are followed.

    Raises:
        InterfaceLoadError: On transport errors or non-2xx responses.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise InterfaceLoadError(
            f"HTTP {exc.response.status_code} fetching interface from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise InterfaceLoadError(f"Failed to fetch interface from {url}: {exc}") from exc

    if not response.text.strip():
        raise InterfaceLoadError(f"Empty response fetching interface from {url}")
    return response.text


def _load_from_file(path: str) -> str:
    """Read an interface description from a local file.

    Raises:
        InterfaceLoadError: If the file does not exist or cannot be decoded.
    """
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise InterfaceLoadError(f"Interface file not found: {file_path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InterfaceLoadError(f"Cannot read interface file {file_path}: {exc}") from exc

    if not content.strip():
        raise InterfaceLoadError(f"Interface file is empty: {file_path}")
    return content
